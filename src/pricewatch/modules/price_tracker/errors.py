"""Error kinds raised by URL resolution, extraction and storage."""

from __future__ import annotations

from pricewatch.core.observability.error_codes import ErrorCode


class PriceTrackerError(Exception):
    """Base class for all price tracker failures.

    ``str(exc)`` is the user-facing message; ``code`` classifies it.
    """

    code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(self, message: str, *, code: ErrorCode | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class InvalidURLError(PriceTrackerError):
    code = ErrorCode.INVALID_URL

    def __init__(self, message: str = "Invalid URL format.") -> None:
        super().__init__(message)


class UnsupportedStoreError(PriceTrackerError):
    code = ErrorCode.UNSUPPORTED_STORE

    def __init__(self, message: str = "This store is not supported") -> None:
        super().__init__(message)


class StoreConnectionError(PriceTrackerError):
    code = ErrorCode.NET_CONNECTION_FAILED

    def __init__(self, domain: str) -> None:
        super().__init__(f"Could not connect to {domain}.")
        self.domain = domain


class RefreshTimeoutError(PriceTrackerError):
    code = ErrorCode.NET_TIMEOUT

    def __init__(self, domain: str) -> None:
        super().__init__(f"Timed out waiting for {domain}.")
        self.domain = domain


class NotShopifyStoreError(PriceTrackerError):
    code = ErrorCode.NOT_SHOPIFY_STORE


class StoreFetchError(PriceTrackerError):
    code = ErrorCode.STORE_FETCH_FAILED


class StoreParseError(PriceTrackerError):
    code = ErrorCode.STORE_PARSE_FAILED


class NoVariantsError(PriceTrackerError):
    code = ErrorCode.NO_VARIANTS

    def __init__(self, message: str = "No product variants found.") -> None:
        super().__init__(message)


class DuplicateURLError(PriceTrackerError):
    code = ErrorCode.DUPLICATE_URL

    def __init__(self, url: str) -> None:
        super().__init__("This product is already being monitored")
        self.url = url


class ItemNotFoundError(PriceTrackerError):
    code = ErrorCode.ITEM_NOT_FOUND

    def __init__(self, item_id: int) -> None:
        super().__init__("Item not found")
        self.item_id = item_id


# Errors caused by the URL the user typed rather than by the remote store.
VALIDATION_ERRORS: tuple[type[PriceTrackerError], ...] = (InvalidURLError, UnsupportedStoreError)


__all__ = [
    "VALIDATION_ERRORS",
    "DuplicateURLError",
    "InvalidURLError",
    "ItemNotFoundError",
    "NoVariantsError",
    "NotShopifyStoreError",
    "PriceTrackerError",
    "RefreshTimeoutError",
    "StoreConnectionError",
    "StoreFetchError",
    "StoreParseError",
    "UnsupportedStoreError",
]
