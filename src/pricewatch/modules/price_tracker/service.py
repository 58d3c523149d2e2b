"""Price Tracker Service implementation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pricewatch.core.config import Settings
from pricewatch.core.db.models import TrackedItem
from pricewatch.core.protocols.storage import IItemStore, NewItem
from pricewatch.modules.price_tracker.errors import DuplicateURLError, ItemNotFoundError
from pricewatch.modules.price_tracker.extractors.registry import StrategyRegistry
from pricewatch.modules.price_tracker.notifier import PriceDropNotifier
from pricewatch.modules.price_tracker.refresh import RefreshOrchestrator
from pricewatch.modules.price_tracker.result import PriceDropEvent, RefreshOutcome
from pricewatch.modules.price_tracker.urls import require_handle

logger = logging.getLogger(__name__)

NOTIFICATION_EMAIL_KEY = "notification_email"


@dataclass
class RefreshReport:
    """What one refresh cycle did."""

    items: list[TrackedItem]
    outcomes: list[RefreshOutcome]
    drops: list[PriceDropEvent] = field(default_factory=list)
    notified: bool = False

    @property
    def drop_count(self) -> int:
        return len(self.drops)


class PriceTrackerService:
    """Add tracked items and run refresh cycles.

    All collaborators are passed in; the HTTP app and the CLI build them.
    """

    def __init__(
        self,
        store: IItemStore,
        registry: StrategyRegistry,
        notifier: PriceDropNotifier,
        settings: Settings,
        orchestrator: RefreshOrchestrator | None = None,
    ) -> None:
        self.store = store
        self.registry = registry
        self.notifier = notifier
        self.settings = settings
        self.orchestrator = orchestrator or RefreshOrchestrator(
            registry, store, timeout_seconds=settings.effective_fetch_timeout
        )

    async def add_item(self, url: str) -> TrackedItem:
        """Resolve ``url``, fetch the product once and start tracking it.

        Raises:
            InvalidURLError: If the URL cannot be parsed.
            UnsupportedStoreError: If the URL has no product handle.
            DuplicateURLError: If the URL is already tracked.
            PriceTrackerError: For any store or network failure.
        """
        url = url.strip()
        domain, _handle = require_handle(url)

        if await self.store.get_item_by_url(url) is not None:
            raise DuplicateURLError(url)

        extractor = self.registry.resolve_strategy(domain)
        product = await extractor.fetch_full(url)

        item = await self.store.create_item(
            NewItem(
                url=url,
                handle=product.handle,
                store_domain=product.store_domain,
                title=product.title,
                image_url=product.image_url,
                original_price=product.price,
                current_price=product.price,
            )
        )
        logger.info(
            "Tracking %s at %s",
            item.title,
            item.original_price,
            extra={"item_id": item.id, "store": item.store_domain},
        )
        return item

    async def list_items(self) -> list[TrackedItem]:
        return await self.store.list_items()

    async def delete_item(self, item_id: int) -> None:
        if not await self.store.delete_item(item_id):
            raise ItemNotFoundError(item_id)
        logger.info("Deleted tracked item %s", item_id)

    async def get_notification_email(self) -> str | None:
        stored = await self.store.get_setting(NOTIFICATION_EMAIL_KEY)
        return stored or self.settings.notification_email

    async def set_notification_email(self, email: str | None) -> None:
        await self.store.set_setting(NOTIFICATION_EMAIL_KEY, email or None)

    async def run_refresh_cycle(self) -> RefreshReport:
        """Refresh every item, notify on new drops, return the updated list.

        A single item's failure is reported in its outcome. Storage failures
        propagate and abort the cycle.
        """
        items = await self.store.list_items()
        result = await self.orchestrator.refresh_all(items)

        notified = False
        if result.drops:
            recipient = await self.get_notification_email()
            notified = await self.notifier.dispatch(result.drops, recipient)

        report = RefreshReport(
            items=await self.store.list_items(),
            outcomes=result.outcomes,
            drops=result.drops,
            notified=notified,
        )
        logger.info(
            "Refresh cycle complete",
            extra={
                "items": len(report.items),
                "failed": len(result.failed),
                "drops": report.drop_count,
                "notified": notified,
            },
        )
        return report


__all__ = ["NOTIFICATION_EMAIL_KEY", "PriceTrackerService", "RefreshReport"]
