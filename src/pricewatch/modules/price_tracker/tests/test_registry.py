"""Tests for the store domain to extractor registry."""

import httpx

from pricewatch.modules.price_tracker.extractors.meta_tags import MetaTagExtractor
from pricewatch.modules.price_tracker.extractors.registry import (
    StrategyRegistry,
    build_registry,
)
from pricewatch.modules.price_tracker.extractors.shopify_json import ShopifyJsonExtractor
from pricewatch.modules.price_tracker.tests.fakes import FakeExtractor


def test_custom_domain_ignores_www_and_case() -> None:
    default, custom = FakeExtractor(), FakeExtractor()
    registry = StrategyRegistry(default=default, custom={"www.Store.com": custom})

    assert registry.resolve_strategy("store.com") is custom
    assert registry.resolve_strategy("www.store.com") is custom
    assert registry.custom_domains == frozenset({"store.com"})


def test_unknown_domain_uses_default() -> None:
    default = FakeExtractor()
    registry = StrategyRegistry(default=default, custom={"store.com": FakeExtractor()})

    assert registry.resolve_strategy("other.com") is default
    assert registry.resolve_strategy("shop.store.com") is default


def test_build_registry_wires_buck_mason() -> None:
    registry = build_registry(httpx.AsyncClient())

    assert isinstance(registry.default, ShopifyJsonExtractor)
    assert isinstance(registry.resolve_strategy("www.buckmason.com"), MetaTagExtractor)
    assert isinstance(registry.resolve_strategy("buckmason.com"), MetaTagExtractor)
    assert isinstance(registry.resolve_strategy("toddsnyder.com"), ShopifyJsonExtractor)
