"""Domain to extractor lookup."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

import httpx

from pricewatch.modules.price_tracker.extractors.base import PriceExtractor
from pricewatch.modules.price_tracker.extractors.meta_tags import (
    BUCK_MASON,
    MetaTagExtractor,
    MetaTagStoreConfig,
)
from pricewatch.modules.price_tracker.extractors.shopify_json import ShopifyJsonExtractor
from pricewatch.modules.price_tracker.urls import strip_www

logger = logging.getLogger(__name__)

# Stores whose JSON endpoint is blocked or incomplete. Add a config here to
# support another meta-tag store.
CUSTOM_STORES: tuple[MetaTagStoreConfig, ...] = (BUCK_MASON,)


class StrategyRegistry:
    """Immutable mapping of store domain to extractor with a default.

    Domains are keyed without a leading ``www.`` so ``www.store.com`` and
    ``store.com`` resolve to the same extractor.
    """

    def __init__(self, default: PriceExtractor, custom: Mapping[str, PriceExtractor]) -> None:
        self.default = default
        self._custom: Mapping[str, PriceExtractor] = MappingProxyType(
            {strip_www(domain.lower()): extractor for domain, extractor in custom.items()}
        )

    @property
    def custom_domains(self) -> frozenset[str]:
        return frozenset(self._custom)

    def resolve_strategy(self, domain: str) -> PriceExtractor:
        extractor = self._custom.get(strip_www(domain.lower()))
        if extractor is None:
            return self.default
        logger.debug("Using %s for %s", type(extractor).__name__, domain)
        return extractor


def build_registry(client: httpx.AsyncClient) -> StrategyRegistry:
    """Create the registry with every built-in extractor sharing ``client``."""
    return StrategyRegistry(
        default=ShopifyJsonExtractor(client),
        custom={config.domain: MetaTagExtractor(client, config) for config in CUSTOM_STORES},
    )


__all__ = ["CUSTOM_STORES", "StrategyRegistry", "build_registry"]
