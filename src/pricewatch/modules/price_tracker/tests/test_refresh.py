"""Tests for RefreshOrchestrator."""

from __future__ import annotations

import asyncio

import pytest

from pricewatch.core.observability.error_codes import ErrorCode
from pricewatch.modules.price_tracker.errors import NotShopifyStoreError, StoreConnectionError
from pricewatch.modules.price_tracker.extractors.registry import StrategyRegistry
from pricewatch.modules.price_tracker.refresh import RefreshOrchestrator
from pricewatch.modules.price_tracker.tests.fakes import FakeExtractor, FakeItemStore, make_item


def _orchestrator(
    extractor: FakeExtractor, store: FakeItemStore, timeout: float | None = None
) -> RefreshOrchestrator:
    return RefreshOrchestrator(
        StrategyRegistry(default=extractor, custom={}), store, timeout_seconds=timeout
    )


class TestRefreshAll:
    @pytest.mark.asyncio
    async def test_empty(self) -> None:
        result = await _orchestrator(FakeExtractor(), FakeItemStore()).refresh_all([])
        assert result.outcomes == []
        assert result.drops == []

    @pytest.mark.asyncio
    async def test_one_failure_does_not_affect_others(self) -> None:
        items = [
            make_item(1, original_price=10000),
            make_item(2, original_price=5000, store_domain="down.example.com"),
            make_item(3, original_price=2000),
        ]
        store = FakeItemStore(items)
        extractor = FakeExtractor(
            prices={
                "item-1": 9000,
                "item-2": StoreConnectionError("down.example.com"),
                "item-3": 2000,
            }
        )

        result = await _orchestrator(extractor, store).refresh_all(items)

        by_id = {outcome.item_id: outcome for outcome in result.outcomes}
        assert len(result.outcomes) == 3
        assert by_id[1].success is True
        assert by_id[1].price == 9000
        assert by_id[2].success is False
        assert by_id[2].error == "Could not connect to down.example.com."
        assert by_id[2].error_code == ErrorCode.NET_CONNECTION_FAILED.value
        assert by_id[3].success is True
        assert [o.item_id for o in result.failed] == [2]

        assert store.items[1].current_price == 9000
        assert store.items[2].current_price == 5000  # unchanged
        assert store.items[3].current_price == 2000

    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_failed_outcome(self) -> None:
        items = [make_item(1), make_item(2)]
        extractor = FakeExtractor(prices={"item-1": RuntimeError("boom"), "item-2": 9500})

        result = await _orchestrator(extractor, FakeItemStore(items)).refresh_all(items)

        failed = result.failed
        assert len(failed) == 1
        assert failed[0].error == "boom"
        assert failed[0].error_code == ErrorCode.UNKNOWN.value

    @pytest.mark.asyncio
    async def test_store_error_message_is_kept(self) -> None:
        items = [make_item(1)]
        extractor = FakeExtractor(
            prices={"item-1": NotShopifyStoreError("Product not found or store unsupported")}
        )

        result = await _orchestrator(extractor, FakeItemStore(items)).refresh_all(items)

        assert result.outcomes[0].error == "Product not found or store unsupported"

    @pytest.mark.asyncio
    async def test_drops_are_detected_against_stored_state(self) -> None:
        items = [
            make_item(1, original_price=10000),
            make_item(2, original_price=10000, notified_price=8000),
            make_item(3, original_price=10000, notified_price=8000),
        ]
        store = FakeItemStore(items)
        extractor = FakeExtractor(prices={"item-1": 8000, "item-2": 8000, "item-3": 7000})

        result = await _orchestrator(extractor, store).refresh_all(items)

        assert sorted((d.item_id, d.new_price) for d in result.drops) == [(1, 8000), (3, 7000)]
        # Detection does not advance notified prices.
        assert store.items[1].notified_price is None

    @pytest.mark.asyncio
    async def test_item_without_handle_fails(self) -> None:
        item = make_item(1)
        item.handle = ""
        extractor = FakeExtractor()

        result = await _orchestrator(extractor, FakeItemStore([item])).refresh_all([item])

        assert result.outcomes[0].success is False
        assert result.outcomes[0].error == "This store is not supported"
        assert extractor.price_calls == []

    @pytest.mark.asyncio
    async def test_slow_store_times_out(self) -> None:
        class SlowExtractor(FakeExtractor):
            async def fetch_price(self, domain: str, handle: str) -> int:
                if handle == "item-1":
                    await asyncio.sleep(5)
                return 4200

        items = [make_item(1), make_item(2)]
        store = FakeItemStore(items)

        result = await _orchestrator(SlowExtractor(), store, timeout=0.05).refresh_all(items)

        by_id = {outcome.item_id: outcome for outcome in result.outcomes}
        assert by_id[1].success is False
        assert by_id[1].error_code == ErrorCode.NET_TIMEOUT.value
        assert by_id[1].error == "Timed out waiting for shop.example.com."
        assert by_id[2].success is True
        assert store.items[2].current_price == 4200

    @pytest.mark.asyncio
    async def test_storage_failure_propagates(self) -> None:
        class BrokenStore(FakeItemStore):
            async def update_current_price(self, item_id: int, price: int) -> None:
                raise OSError("disk full")

        items = [make_item(1)]
        orchestrator = _orchestrator(FakeExtractor(prices={"item-1": 100}), BrokenStore(items))

        with pytest.raises(OSError):
            await orchestrator.refresh_all(items)

    @pytest.mark.asyncio
    async def test_storage_failure_cancels_other_items(self) -> None:
        class BrokenStore(FakeItemStore):
            async def update_current_price(self, item_id: int, price: int) -> None:
                if item_id == 1:
                    raise OSError("disk full")
                await super().update_current_price(item_id, price)

        class SlowExtractor(FakeExtractor):
            async def fetch_price(self, domain: str, handle: str) -> int:
                if handle == "item-2":
                    await asyncio.sleep(0.1)
                return 5000

        items = [make_item(1), make_item(2)]
        store = BrokenStore(items)

        with pytest.raises(OSError):
            await _orchestrator(SlowExtractor(), store).refresh_all(items)

        await asyncio.sleep(0.3)
        assert store.items[2].current_price == 10000
