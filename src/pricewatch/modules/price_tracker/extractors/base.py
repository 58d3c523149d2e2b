"""Base protocol for price extractors."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import httpx

from pricewatch.modules.price_tracker.errors import RefreshTimeoutError, StoreConnectionError

if TYPE_CHECKING:
    from pricewatch.modules.price_tracker.result import ExtractionResult

logger = logging.getLogger(__name__)

# Some storefronts reject the default httpx user agent.
BROWSER_USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"


@runtime_checkable
class PriceExtractor(Protocol):
    """Protocol for store-specific price extractors.

    Both methods raise a ``PriceTrackerError`` subclass on failure; they never
    return a partial or placeholder result.
    """

    async def fetch_full(self, url: str) -> ExtractionResult:
        """Fetch title, image and price for a product URL (used when adding)."""
        ...

    async def fetch_price(self, domain: str, handle: str) -> int:
        """Fetch only the current price in cents (used when refreshing)."""
        ...


async def get(client: httpx.AsyncClient, url: str, domain: str, accept: str) -> httpx.Response:
    """GET ``url`` with browser-like headers, mapping transport failures.

    Raises:
        RefreshTimeoutError: If the request timed out.
        StoreConnectionError: If the request could not be sent at all.
    """
    try:
        return await client.get(
            url,
            headers={"User-Agent": BROWSER_USER_AGENT, "Accept": accept},
            follow_redirects=True,
        )
    except httpx.TimeoutException as e:
        logger.debug("Timeout fetching %s", url, exc_info=True)
        raise RefreshTimeoutError(domain) from e
    except httpx.TransportError as e:
        logger.debug("Transport error fetching %s", url, exc_info=True)
        raise StoreConnectionError(domain) from e


__all__ = ["BROWSER_USER_AGENT", "PriceExtractor", "get"]
