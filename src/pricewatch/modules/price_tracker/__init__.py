"""Price Tracker Module.

Tracks product prices on Shopify-style storefronts, detects drops below the
price an item was added at and e-mails the user once per new low.
"""

from pricewatch.modules.price_tracker.detector import evaluate
from pricewatch.modules.price_tracker.extractors.registry import StrategyRegistry, build_registry
from pricewatch.modules.price_tracker.notifier import PriceDropNotifier
from pricewatch.modules.price_tracker.refresh import RefreshOrchestrator, RefreshResult
from pricewatch.modules.price_tracker.result import (
    ExtractionResult,
    PriceDropEvent,
    RefreshOutcome,
)
from pricewatch.modules.price_tracker.service import PriceTrackerService, RefreshReport
from pricewatch.modules.price_tracker.store import SqlItemStore

__all__ = [
    "ExtractionResult",
    "PriceDropEvent",
    "PriceDropNotifier",
    "PriceTrackerService",
    "RefreshOrchestrator",
    "RefreshOutcome",
    "RefreshReport",
    "RefreshResult",
    "SqlItemStore",
    "StrategyRegistry",
    "build_registry",
    "evaluate",
]
