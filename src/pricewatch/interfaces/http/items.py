"""Tracked item, refresh and settings endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from pricewatch.interfaces.http.dependencies import get_service, require_cron_secret
from pricewatch.interfaces.http.schemas import (
    AddItemRequest,
    DeleteResponse,
    ItemResponse,
    NotificationEmail,
    RefreshOutcomeResponse,
    RefreshResponse,
)
from pricewatch.modules.price_tracker.errors import (
    VALIDATION_ERRORS,
    DuplicateURLError,
    ItemNotFoundError,
    PriceTrackerError,
)
from pricewatch.modules.price_tracker.service import PriceTrackerService, RefreshReport

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["price-tracker"])


@router.get("/items", response_model=list[ItemResponse])
async def list_items(service: PriceTrackerService = Depends(get_service)) -> list[ItemResponse]:
    try:
        items = await service.list_items()
    except Exception as e:
        LOGGER.exception("Failed to fetch items")
        raise HTTPException(status_code=500, detail="Failed to fetch items") from e
    return [ItemResponse.model_validate(item) for item in items]


@router.post("/items", response_model=ItemResponse, status_code=201)
async def add_item(
    body: AddItemRequest,
    service: PriceTrackerService = Depends(get_service),
) -> ItemResponse:
    """Start tracking a product URL.

    Returns 400 for unusable URLs, 409 for duplicates and 502 with the
    store's specific failure when the product could not be fetched.
    """
    if not body.url or not body.url.strip():
        raise HTTPException(status_code=400, detail="URL is required")

    try:
        item = await service.add_item(body.url)
    except DuplicateURLError as e:
        raise HTTPException(status_code=409, detail=e.message) from e
    except VALIDATION_ERRORS as e:
        raise HTTPException(status_code=400, detail=e.message) from e
    except PriceTrackerError as e:
        LOGGER.info("Could not add %s: %s", body.url, e.message, extra={"code": e.code.value})
        raise HTTPException(status_code=502, detail=e.message) from e
    except Exception as e:
        LOGGER.exception("Error adding item")
        raise HTTPException(status_code=500, detail="Failed to add item") from e

    return ItemResponse.model_validate(item)


@router.delete("/items/{item_id}", response_model=DeleteResponse)
async def delete_item(
    item_id: int,
    service: PriceTrackerService = Depends(get_service),
) -> DeleteResponse:
    try:
        await service.delete_item(item_id)
    except ItemNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message) from e
    return DeleteResponse()


async def _refresh(service: PriceTrackerService) -> RefreshResponse:
    try:
        report = await service.run_refresh_cycle()
    except Exception as e:
        LOGGER.exception("Error refreshing prices")
        raise HTTPException(status_code=500, detail="Failed to refresh prices") from e
    return _refresh_response(report)


def _refresh_response(report: RefreshReport) -> RefreshResponse:
    return RefreshResponse(
        items=[ItemResponse.model_validate(item) for item in report.items],
        results=[RefreshOutcomeResponse.model_validate(outcome) for outcome in report.outcomes],
        drops=report.drop_count,
        notified=report.notified,
    )


@router.get(
    "/refresh",
    response_model=RefreshResponse,
    dependencies=[Depends(require_cron_secret)],
)
async def scheduled_refresh(
    service: PriceTrackerService = Depends(get_service),
) -> RefreshResponse:
    """Refresh cycle for schedulers; requires the cron secret."""
    return await _refresh(service)


@router.post("/refresh", response_model=RefreshResponse)
async def manual_refresh(service: PriceTrackerService = Depends(get_service)) -> RefreshResponse:
    """Refresh cycle triggered from the UI."""
    return await _refresh(service)


@router.get("/settings/notification-email", response_model=NotificationEmail)
async def get_notification_email(
    service: PriceTrackerService = Depends(get_service),
) -> NotificationEmail:
    return NotificationEmail(email=await service.get_notification_email())


@router.put("/settings/notification-email", response_model=NotificationEmail)
async def set_notification_email(
    body: NotificationEmail,
    service: PriceTrackerService = Depends(get_service),
) -> NotificationEmail:
    email = body.email.strip() if body.email else None
    if email and "@" not in email:
        raise HTTPException(status_code=400, detail="Invalid e-mail address")
    await service.set_notification_email(email)
    return NotificationEmail(email=await service.get_notification_email())
