"""Extractors for stores that only expose prices through HTML meta tags."""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass

import httpx

from pricewatch.modules.price_tracker.errors import StoreFetchError, StoreParseError
from pricewatch.modules.price_tracker.extractors.base import get
from pricewatch.modules.price_tracker.result import ExtractionResult, price_to_cents
from pricewatch.modules.price_tracker.urls import product_page_url, require_handle

logger = logging.getLogger(__name__)


def extract_meta_content(page: str, prop: str) -> str | None:
    """Return the ``content`` of the first meta tag named ``prop``.

    Templating engines disagree on attribute order and on ``property=`` (Open
    Graph) versus ``name=``, so three shapes are tried in turn.
    """
    name = re.escape(prop)
    patterns = (
        rf"""<meta[^>]*property=(?P<pq>["']){name}(?P=pq)[^>]*"""
        rf"""content=(?P<q>["'])(?P<content>[^>]*?)(?P=q)""",
        rf"""<meta[^>]*content=(?P<q>["'])(?P<content>[^>]*?)(?P=q)"""
        rf"""[^>]*property=(?P<pq>["']){name}(?P=pq)""",
        rf"""<meta[^>]*name=(?P<pq>["']){name}(?P=pq)[^>]*"""
        rf"""content=(?P<q>["'])(?P<content>[^>]*?)(?P=q)""",
    )
    for pattern in patterns:
        match = re.search(pattern, page, re.IGNORECASE)
        if match:
            return html.unescape(match.group("content"))
    return None


@dataclass(frozen=True)
class MetaTagStoreConfig:
    """Which meta tags hold a store's product data."""

    store_name: str
    domain: str
    title_suffix: re.Pattern[str] | None = None
    price_properties: tuple[str, ...] = ("product:price:amount", "og:price:amount")
    title_property: str = "og:title"
    image_property: str = "og:image"

    def clean_title(self, title: str) -> str:
        if self.title_suffix is not None:
            title = self.title_suffix.sub("", title)
        return title.strip()


BUCK_MASON = MetaTagStoreConfig(
    store_name="Buck Mason",
    domain="buckmason.com",
    # "Pima Tee - Buck Mason- Modern American Classics" -> "Pima Tee"
    title_suffix=re.compile(r"\s*-\s*Buck Mason.*$", re.IGNORECASE),
)


class MetaTagExtractor:
    """Scrape price, title and image from a product page's meta tags."""

    def __init__(self, client: httpx.AsyncClient, config: MetaTagStoreConfig) -> None:
        self._client = client
        self.config = config

    async def fetch_full(self, url: str) -> ExtractionResult:
        domain, handle = require_handle(url)
        return await self._scrape(url, domain, handle)

    async def fetch_price(self, domain: str, handle: str) -> int:
        result = await self._scrape(product_page_url(domain, handle), domain, handle)
        return result.price

    async def _scrape(self, url: str, domain: str, handle: str) -> ExtractionResult:
        store = self.config.store_name
        response = await get(self._client, url, domain, accept="text/html")
        if not response.is_success:
            logger.debug("%s returned %d for %s", store, response.status_code, url)
            raise StoreFetchError(f"Could not fetch {store} product")

        page = response.text
        price_str = next(
            (
                value
                for prop in self.config.price_properties
                if (value := extract_meta_content(page, prop))
            ),
            None,
        )
        title = extract_meta_content(page, self.config.title_property)
        image = extract_meta_content(page, self.config.image_property)

        if not price_str or not title:
            raise StoreParseError(f"Could not parse {store} product data")

        try:
            price = price_to_cents(price_str)
        except ValueError as e:
            raise StoreParseError(f"Could not parse {store} product data") from e

        return ExtractionResult(
            handle=handle,
            store_domain=domain,
            title=self.config.clean_title(title),
            image_url=image or "",
            price=price,
        )


__all__ = ["BUCK_MASON", "MetaTagExtractor", "MetaTagStoreConfig", "extract_meta_content"]
