"""Shopify product JSON extractor (the default for unknown stores)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from pricewatch.modules.price_tracker.errors import NoVariantsError, NotShopifyStoreError
from pricewatch.modules.price_tracker.extractors.base import get
from pricewatch.modules.price_tracker.result import ExtractionResult, price_to_cents
from pricewatch.modules.price_tracker.urls import require_handle

logger = logging.getLogger(__name__)

FALLBACK_TITLE = "Unknown Product"


class ShopifyJsonExtractor:
    """Read product data from ``/products/<handle>.json``.

    Every Shopify storefront exposes this endpoint unless the merchant has
    blocked it, so it serves as the default for domains without a custom
    extractor.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch_full(self, url: str) -> ExtractionResult:
        domain, handle = require_handle(url)
        product = await self._fetch_product(domain, handle)
        price = self._first_variant_price(product)

        return ExtractionResult(
            handle=handle,
            store_domain=domain,
            title=product.get("title") or FALLBACK_TITLE,
            image_url=self._image_url(product),
            price=price,
        )

    async def fetch_price(self, domain: str, handle: str) -> int:
        product = await self._fetch_product(domain, handle)
        return self._first_variant_price(product)

    def _endpoint(self, domain: str, handle: str) -> str:
        return f"https://{domain}/products/{handle}.json"

    async def _fetch_product(self, domain: str, handle: str) -> dict[str, Any]:
        endpoint = self._endpoint(domain, handle)
        response = await get(self._client, endpoint, domain, accept="application/json")

        if response.status_code == 404:
            raise NotShopifyStoreError("Product not found or store unsupported")
        if not response.is_success:
            logger.debug("Shopify JSON returned %d for %s", response.status_code, endpoint)
            raise NotShopifyStoreError(
                f"Store unsupported or blocking requests (HTTP {response.status_code})"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise NotShopifyStoreError("Store unsupported: response is not product JSON") from e

        product = data.get("product") if isinstance(data, dict) else None
        if not isinstance(product, dict):
            raise NotShopifyStoreError("Store unsupported: response has no product")
        return product

    def _first_variant_price(self, product: dict[str, Any]) -> int:
        variants = product.get("variants")
        if not isinstance(variants, list) or not variants:
            raise NoVariantsError()

        variant = variants[0] if isinstance(variants[0], dict) else {}
        raw_price = variant.get("price") or "0"
        try:
            return price_to_cents(raw_price)
        except ValueError as e:
            raise NotShopifyStoreError(f"Store returned an unreadable price: {raw_price!r}") from e

    def _image_url(self, product: dict[str, Any]) -> str:
        images = product.get("images")
        if isinstance(images, list) and images and isinstance(images[0], dict):
            src = images[0].get("src")
            if src:
                return str(src)
        image = product.get("image")
        if isinstance(image, dict) and image.get("src"):
            return str(image["src"])
        return ""


__all__ = ["FALLBACK_TITLE", "ShopifyJsonExtractor"]
