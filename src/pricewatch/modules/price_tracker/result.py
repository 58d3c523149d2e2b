"""Shared result types for extraction and refresh."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation


@dataclass(frozen=True)
class ExtractionResult:
    """Product snapshot returned by an extractor."""

    handle: str
    store_domain: str
    title: str
    image_url: str
    price: int  # cents


@dataclass(frozen=True)
class RefreshOutcome:
    """Per-item result of one refresh cycle."""

    item_id: int
    success: bool
    price: int | None = None
    error: str | None = None
    error_code: str | None = None


@dataclass(frozen=True)
class PriceDropEvent:
    item_id: int
    title: str
    old_price: int
    new_price: int
    url: str
    percent_off: int
    store_domain: str = ""


def price_to_cents(value: str | int | float) -> int:
    """Convert a decimal price string such as ``"129.00"`` to integer cents.

    The multiply happens on a ``Decimal`` and is rounded half-up exactly once,
    so ``"19.99"`` is always 1999.

    Raises:
        ValueError: If ``value`` is not a finite, non-negative number.
    """
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"Invalid price: {value!r}") from e
    if not amount.is_finite() or amount < 0:
        raise ValueError(f"Invalid price: {value!r}")
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


__all__ = ["ExtractionResult", "PriceDropEvent", "RefreshOutcome", "price_to_cents"]
