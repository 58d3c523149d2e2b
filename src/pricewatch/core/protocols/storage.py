"""Protocol for the tracked item store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from pricewatch.core.db.models import TrackedItem


@dataclass(frozen=True)
class NewItem:
    """Fields of a tracked item at creation time."""

    url: str
    handle: str
    store_domain: str
    title: str
    image_url: str
    original_price: int
    current_price: int


@runtime_checkable
class IItemStore(Protocol):
    """Abstract interface for tracked item persistence.

    Implementations must be safe to call from concurrent tasks; each call is
    its own unit of work.
    """

    async def list_items(self) -> list[TrackedItem]:
        """Return all tracked items, newest first."""
        ...

    async def get_item(self, item_id: int) -> TrackedItem | None: ...

    async def get_item_by_url(self, url: str) -> TrackedItem | None: ...

    async def create_item(self, fields: NewItem) -> TrackedItem:
        """Persist a new item.

        Raises:
            DuplicateURLError: If an item with the same URL already exists.
        """
        ...

    async def update_current_price(self, item_id: int, price: int) -> None: ...

    async def update_notified_price(self, item_id: int, price: int) -> bool:
        """Lower the last-notified price.

        Returns:
            False if the stored value is already at or below ``price``.
        """
        ...

    async def delete_item(self, item_id: int) -> bool: ...

    async def get_setting(self, key: str) -> str | None: ...

    async def set_setting(self, key: str, value: str | None) -> None: ...


__all__ = ["IItemStore", "NewItem"]
