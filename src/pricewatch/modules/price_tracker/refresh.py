"""Concurrent price refresh across all tracked items."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from pricewatch.core.db.models import TrackedItem
from pricewatch.core.observability.error_codes import ErrorCode
from pricewatch.core.protocols.storage import IItemStore
from pricewatch.modules.price_tracker import detector
from pricewatch.modules.price_tracker.errors import (
    PriceTrackerError,
    RefreshTimeoutError,
    UnsupportedStoreError,
)
from pricewatch.modules.price_tracker.extractors.registry import StrategyRegistry
from pricewatch.modules.price_tracker.result import PriceDropEvent, RefreshOutcome

logger = logging.getLogger(__name__)


@dataclass
class RefreshResult:
    outcomes: list[RefreshOutcome] = field(default_factory=list)
    drops: list[PriceDropEvent] = field(default_factory=list)

    @property
    def failed(self) -> list[RefreshOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.success]


class RefreshOrchestrator:
    """Fetch every item's price concurrently and record per-item outcomes.

    Each item runs in its own task and owns its own result slot. A store
    error on one item becomes that item's failed outcome and never touches
    the others. Storage errors are not caught: they abort the cycle and
    cancel the items still in flight.
    """

    def __init__(
        self,
        registry: StrategyRegistry,
        store: IItemStore,
        timeout_seconds: float | None = None,
    ) -> None:
        self.registry = registry
        self.store = store
        self.timeout_seconds = timeout_seconds

    async def refresh_all(self, items: Sequence[TrackedItem]) -> RefreshResult:
        if not items:
            return RefreshResult()

        logger.info("Refreshing %d items", len(items))
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(self._refresh_one(item)) for item in items]
        except ExceptionGroup as eg:
            # Storage failure: siblings are cancelled, surface the original error.
            raise eg.exceptions[0] from None
        slots = [task.result() for task in tasks]

        result = RefreshResult()
        for outcome, drop in slots:
            result.outcomes.append(outcome)
            if drop is not None:
                result.drops.append(drop)

        logger.info(
            "Refresh finished",
            extra={
                "items": len(items),
                "failed": len(result.failed),
                "drops": len(result.drops),
            },
        )
        return result

    async def _refresh_one(
        self, item: TrackedItem
    ) -> tuple[RefreshOutcome, PriceDropEvent | None]:
        try:
            price = await self._fetch_price(item)
        except PriceTrackerError as e:
            logger.warning(
                "Refresh failed for item %s (%s): %s",
                item.id,
                item.store_domain,
                e.message,
                extra={"error_code": e.code.value},
            )
            return self._failure(item, e.message, e.code), None
        except Exception as e:
            logger.exception("Unexpected error refreshing item %s (%s)", item.id, item.url)
            return self._failure(item, str(e) or type(e).__name__, ErrorCode.UNKNOWN), None

        # Compare against the stored state before it is overwritten.
        drop = detector.evaluate(
            item.original_price,
            item.notified_price,
            price,
            item_id=item.id,
            title=item.title or item.handle,
            url=item.url,
            store_domain=item.store_domain,
        )
        await self.store.update_current_price(item.id, price)

        if drop is not None:
            logger.info(
                "Price drop on item %s: %s -> %s (%d%% off)",
                item.id,
                drop.old_price,
                drop.new_price,
                drop.percent_off,
            )
        return RefreshOutcome(item_id=item.id, success=True, price=price), drop

    async def _fetch_price(self, item: TrackedItem) -> int:
        if not item.handle:
            raise UnsupportedStoreError()

        extractor = self.registry.resolve_strategy(item.store_domain)
        fetch = extractor.fetch_price(item.store_domain, item.handle)
        if self.timeout_seconds is None:
            return await fetch
        try:
            return await asyncio.wait_for(fetch, timeout=self.timeout_seconds)
        except TimeoutError as e:
            raise RefreshTimeoutError(item.store_domain) from e

    def _failure(self, item: TrackedItem, message: str, code: ErrorCode) -> RefreshOutcome:
        return RefreshOutcome(item_id=item.id, success=False, error=message, error_code=code.value)


__all__ = ["RefreshOrchestrator", "RefreshResult"]
