"""Store-specific price extractors."""

from .base import PriceExtractor
from .meta_tags import BUCK_MASON, MetaTagExtractor, MetaTagStoreConfig
from .registry import StrategyRegistry, build_registry
from .shopify_json import ShopifyJsonExtractor

__all__ = [
    "BUCK_MASON",
    "MetaTagExtractor",
    "MetaTagStoreConfig",
    "PriceExtractor",
    "ShopifyJsonExtractor",
    "StrategyRegistry",
    "build_registry",
]
