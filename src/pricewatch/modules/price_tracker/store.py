"""SQLAlchemy implementation of the tracked item store."""

from __future__ import annotations

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pricewatch.core.db.models import Setting, TrackedItem
from pricewatch.core.protocols.storage import NewItem
from pricewatch.modules.price_tracker.errors import DuplicateURLError

logger = logging.getLogger(__name__)


class SqlItemStore:
    """Item store backed by an async SQLAlchemy session factory.

    Every method opens its own session, so concurrent refresh tasks never
    share one.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def list_items(self) -> list[TrackedItem]:
        async with self.session_factory() as session:
            stmt = select(TrackedItem).order_by(
                TrackedItem.created_at.desc(), TrackedItem.id.desc()
            )
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def get_item(self, item_id: int) -> TrackedItem | None:
        async with self.session_factory() as session:
            return await session.get(TrackedItem, item_id)

    async def get_item_by_url(self, url: str) -> TrackedItem | None:
        async with self.session_factory() as session:
            result = await session.execute(select(TrackedItem).where(TrackedItem.url == url))
            return result.scalar_one_or_none()

    async def create_item(self, fields: NewItem) -> TrackedItem:
        async with self.session_factory() as session:
            item = TrackedItem(
                url=fields.url,
                handle=fields.handle,
                store_domain=fields.store_domain,
                title=fields.title,
                image_url=fields.image_url,
                original_price=fields.original_price,
                current_price=fields.current_price,
                notified_price=None,
            )
            session.add(item)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise DuplicateURLError(fields.url) from e
            await session.refresh(item)

            logger.info("Created tracked item %s for %s", item.id, item.url)
            return item

    async def update_current_price(self, item_id: int, price: int) -> None:
        async with self.session_factory() as session:
            await session.execute(
                update(TrackedItem).where(TrackedItem.id == item_id).values(current_price=price)
            )
            await session.commit()

    async def update_notified_price(self, item_id: int, price: int) -> bool:
        # Conditional update keeps notified_price monotonically non-increasing.
        async with self.session_factory() as session:
            result = await session.execute(
                update(TrackedItem)
                .where(TrackedItem.id == item_id)
                .where(
                    TrackedItem.notified_price.is_(None) | (TrackedItem.notified_price > price)
                )
                .values(notified_price=price)
            )
            await session.commit()
            return bool(result.rowcount)

    async def delete_item(self, item_id: int) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(delete(TrackedItem).where(TrackedItem.id == item_id))
            await session.commit()
            return bool(result.rowcount)

    async def get_setting(self, key: str) -> str | None:
        async with self.session_factory() as session:
            setting = await session.get(Setting, key)
            return setting.value if setting else None

    async def set_setting(self, key: str, value: str | None) -> None:
        async with self.session_factory() as session:
            setting = await session.get(Setting, key)
            if setting is None:
                session.add(Setting(key=key, value=value))
            else:
                setting.value = value
            await session.commit()


__all__ = ["SqlItemStore"]
