"""Wiring of concrete collaborators for the HTTP app and the CLI."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from pricewatch.core.config import Settings
from pricewatch.core.db.engine import create_engine, create_session_factory, init_models
from pricewatch.modules.email.service import EmailConfig, ResendEmailService
from pricewatch.modules.price_tracker.extractors.registry import build_registry
from pricewatch.modules.price_tracker.notifier import PriceDropNotifier
from pricewatch.modules.price_tracker.service import PriceTrackerService
from pricewatch.modules.price_tracker.store import SqlItemStore

LOGGER = logging.getLogger(__name__)


@asynccontextmanager
async def price_tracker_service(settings: Settings) -> AsyncIterator[PriceTrackerService]:
    """Build a PriceTrackerService and close its resources on exit.

    This is the only place where modules are wired to core protocols.
    """
    engine = create_engine(settings.database_url)
    await init_models(engine)
    store = SqlItemStore(create_session_factory(engine))

    email_service = ResendEmailService(EmailConfig.from_settings(settings))
    if not email_service.is_configured():
        LOGGER.warning("Resend is not configured; price drops will not be e-mailed")

    timeout = httpx.Timeout(settings.effective_fetch_timeout)
    async with httpx.AsyncClient(timeout=timeout) as client:
        service = PriceTrackerService(
            store=store,
            registry=build_registry(client),
            notifier=PriceDropNotifier(email_service, store),
            settings=settings,
        )
        LOGGER.info("Price tracker ready (database: %s)", engine.url.render_as_string())
        try:
            yield service
        finally:
            await email_service.close()
            await engine.dispose()


__all__ = ["price_tracker_service"]
