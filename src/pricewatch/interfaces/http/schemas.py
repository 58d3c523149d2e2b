"""Request and response models for the HTTP API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AddItemRequest(BaseModel):
    url: str | None = Field(default=None, description="Product page URL to track.")


class ItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    url: str
    handle: str
    store_domain: str
    title: str | None
    image_url: str | None
    original_price: int | None
    current_price: int | None
    notified_price: int | None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RefreshOutcomeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    item_id: int
    success: bool
    price: int | None = None
    error: str | None = None
    error_code: str | None = None


class RefreshResponse(BaseModel):
    items: list[ItemResponse]
    results: list[RefreshOutcomeResponse]
    drops: int = Field(description="Number of new price drops detected in this cycle.")
    notified: bool = False


class NotificationEmail(BaseModel):
    email: str | None = None


class DeleteResponse(BaseModel):
    success: bool = True
