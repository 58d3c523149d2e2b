"""ORM models for tracked items and settings."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utc_now() -> datetime:
    """Return naive UTC datetime for database operations."""
    return datetime.now(UTC).replace(tzinfo=None)


class Base(DeclarativeBase):
    pass


class TrackedItem(Base):
    """A product page being monitored for price drops.

    Prices are stored as integer cents. ``original_price`` is the baseline
    captured when the item was added and is never updated afterwards.
    ``notified_price`` is the price the user was last alerted at; it only
    ever moves down.
    """

    __tablename__ = "tracked_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    url: Mapped[str] = mapped_column(String(2048), unique=True)
    handle: Mapped[str] = mapped_column(String(255))
    store_domain: Mapped[str] = mapped_column(String(255), index=True)
    title: Mapped[str | None] = mapped_column(String(512), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    original_price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    current_price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notified_price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now, onupdate=_utc_now)

    def __repr__(self) -> str:
        return (
            f"<TrackedItem(id={self.id}, store_domain={self.store_domain}, "
            f"handle={self.handle}, current_price={self.current_price}, "
            f"notified_price={self.notified_price})>"
        )


class Setting(Base):
    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now, onupdate=_utc_now)
