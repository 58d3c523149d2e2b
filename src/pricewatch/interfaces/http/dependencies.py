"""FastAPI dependency injection functions."""

from __future__ import annotations

import logging
import secrets

from fastapi import Header, HTTPException, Request

from pricewatch.core.config import Settings
from pricewatch.modules.price_tracker.service import PriceTrackerService

LOGGER = logging.getLogger(__name__)


def get_service(request: Request) -> PriceTrackerService:
    """Return the PriceTrackerService built at startup."""
    return request.app.state.service


def verify_cron_secret(authorization: str | None, settings: Settings) -> None:
    """Check a scheduled caller's ``Authorization: Bearer <secret>`` header.

    Scheduled refreshes are always rejected when no secret is configured.

    Raises:
        HTTPException 401: If the secret is missing, wrong or not configured.
    """
    expected = settings.cron_secret
    if not expected:
        LOGGER.warning("Scheduled refresh rejected: PRICEWATCH_CRON_SECRET is not set")
        raise HTTPException(status_code=401, detail="Unauthorized")

    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not secrets.compare_digest(
        token.strip().encode(), expected.encode()
    ):
        LOGGER.warning("Scheduled refresh rejected: invalid secret")
        raise HTTPException(status_code=401, detail="Unauthorized")


async def require_cron_secret(
    request: Request,
    authorization: str | None = Header(None),
) -> None:
    """Dependency form of :func:`verify_cron_secret`."""
    verify_cron_secret(authorization, request.app.state.settings)


__all__ = ["get_service", "require_cron_secret", "verify_cron_secret"]
