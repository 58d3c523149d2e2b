"""Price drop detection with notification deduplication."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from pricewatch.modules.price_tracker.result import PriceDropEvent


def is_new_drop(original: int | None, last_notified: int | None, new_price: int) -> bool:
    """True if ``new_price`` is below the baseline and below the last alert.

    A price that stays at the already-notified level never qualifies again;
    any further decrease does.
    """
    if original is None or new_price >= original:
        return False
    return last_notified is None or new_price < last_notified


def percent_off(original: int, new_price: int) -> int:
    """``round((1 - new / original) * 100)`` with half-up rounding."""
    ratio = (Decimal(1) - Decimal(new_price) / Decimal(original)) * 100
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def evaluate(
    original: int | None,
    last_notified: int | None,
    new_price: int,
    *,
    item_id: int = 0,
    title: str = "",
    url: str = "",
    store_domain: str = "",
) -> PriceDropEvent | None:
    """Return a drop event for a qualifying new low, otherwise None."""
    if original is None or not is_new_drop(original, last_notified, new_price):
        return None
    return PriceDropEvent(
        item_id=item_id,
        title=title,
        old_price=original,
        new_price=new_price,
        url=url,
        percent_off=percent_off(original, new_price),
        store_domain=store_domain,
    )


__all__ = ["evaluate", "is_new_drop", "percent_off"]
