"""Standardized error codes for the price tracker.

Every failure the refresh engine or the item-addition path can report maps to
one code. Codes carry a severity, a category and a recovery hint so that
refresh outcomes and API responses can tell the user how to fix the input.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class ErrorSeverity(str, Enum):
    """Severity levels for errors."""

    CRITICAL = "critical"  # Whole cycle aborted
    ERROR = "error"  # One item or one request failed
    WARNING = "warning"  # Transient, retried on the next cycle
    INFO = "info"


class ErrorInfo(NamedTuple):
    """Structured information about an error code."""

    code: str
    severity: ErrorSeverity
    category: str
    description: str
    recovery_hint: str


class ErrorCode(str, Enum):
    """Error codes for the price tracker.

    Categories:
    - INPUT: the product URL itself is unusable
    - STORE: the storefront answered, but not in the expected shape
    - NET: the storefront could not be reached
    - STORAGE: uniqueness or lookup failures in the item store
    - AUTH: trigger authorization
    """

    # ---- Input Errors ----
    INVALID_URL = "INVALID_URL"
    UNSUPPORTED_STORE = "UNSUPPORTED_STORE"

    # ---- Store Errors ----
    NOT_SHOPIFY_STORE = "NOT_SHOPIFY_STORE"
    STORE_FETCH_FAILED = "STORE_FETCH_FAILED"
    STORE_PARSE_FAILED = "STORE_PARSE_FAILED"
    NO_VARIANTS = "NO_VARIANTS"

    # ---- Network Errors ----
    NET_CONNECTION_FAILED = "NET_CONNECTION_FAILED"
    NET_TIMEOUT = "NET_TIMEOUT"

    # ---- Storage Errors ----
    DUPLICATE_URL = "DUPLICATE_URL"
    ITEM_NOT_FOUND = "ITEM_NOT_FOUND"

    # ---- Auth Errors ----
    UNAUTHORIZED = "UNAUTHORIZED"

    # ---- Generic Errors ----
    UNKNOWN = "UNKNOWN"


ERROR_METADATA: dict[ErrorCode, ErrorInfo] = {
    ErrorCode.INVALID_URL: ErrorInfo(
        code="INVALID_URL",
        severity=ErrorSeverity.ERROR,
        category="input",
        description="The product URL could not be parsed",
        recovery_hint="Paste the full product link including https://",
    ),
    ErrorCode.UNSUPPORTED_STORE: ErrorInfo(
        code="UNSUPPORTED_STORE",
        severity=ErrorSeverity.ERROR,
        category="input",
        description="The URL has no /products/<handle> segment",
        recovery_hint="Use the link of a single product page, not a collection or search page",
    ),
    ErrorCode.NOT_SHOPIFY_STORE: ErrorInfo(
        code="NOT_SHOPIFY_STORE",
        severity=ErrorSeverity.ERROR,
        category="store",
        description="The store did not return Shopify product JSON",
        recovery_hint="Check the product still exists; the store may not be a Shopify store",
    ),
    ErrorCode.STORE_FETCH_FAILED: ErrorInfo(
        code="STORE_FETCH_FAILED",
        severity=ErrorSeverity.ERROR,
        category="store",
        description="The store returned a non-success response for the product page",
        recovery_hint="Open the product link in a browser to confirm it still exists",
    ),
    ErrorCode.STORE_PARSE_FAILED: ErrorInfo(
        code="STORE_PARSE_FAILED",
        severity=ErrorSeverity.ERROR,
        category="store",
        description="Price or title meta tags were missing from the product page",
        recovery_hint="The store markup may have changed; the extractor needs updating",
    ),
    ErrorCode.NO_VARIANTS: ErrorInfo(
        code="NO_VARIANTS",
        severity=ErrorSeverity.ERROR,
        category="store",
        description="The product has no price variants",
        recovery_hint="The product may be unavailable; try again later",
    ),
    ErrorCode.NET_CONNECTION_FAILED: ErrorInfo(
        code="NET_CONNECTION_FAILED",
        severity=ErrorSeverity.WARNING,
        category="network",
        description="The store could not be reached",
        recovery_hint="Check the domain spelling and network connectivity",
    ),
    ErrorCode.NET_TIMEOUT: ErrorInfo(
        code="NET_TIMEOUT",
        severity=ErrorSeverity.WARNING,
        category="network",
        description="The store did not answer within the fetch timeout",
        recovery_hint="The item is retried on the next refresh cycle",
    ),
    ErrorCode.DUPLICATE_URL: ErrorInfo(
        code="DUPLICATE_URL",
        severity=ErrorSeverity.INFO,
        category="storage",
        description="The product URL is already tracked",
        recovery_hint="No action needed",
    ),
    ErrorCode.ITEM_NOT_FOUND: ErrorInfo(
        code="ITEM_NOT_FOUND",
        severity=ErrorSeverity.WARNING,
        category="storage",
        description="No tracked item has this id",
        recovery_hint="Refresh the item list",
    ),
    ErrorCode.UNAUTHORIZED: ErrorInfo(
        code="UNAUTHORIZED",
        severity=ErrorSeverity.ERROR,
        category="auth",
        description="Scheduled trigger called without a valid secret",
        recovery_hint="Send Authorization: Bearer <PRICEWATCH_CRON_SECRET>",
    ),
    ErrorCode.UNKNOWN: ErrorInfo(
        code="UNKNOWN",
        severity=ErrorSeverity.ERROR,
        category="unknown",
        description="An unexpected error occurred",
        recovery_hint="Check logs for detailed error message",
    ),
}


def get_error_info(code: ErrorCode) -> ErrorInfo:
    """Get metadata for an error code."""
    return ERROR_METADATA.get(code, ERROR_METADATA[ErrorCode.UNKNOWN])


__all__ = ["ERROR_METADATA", "ErrorCode", "ErrorInfo", "ErrorSeverity", "get_error_info"]
