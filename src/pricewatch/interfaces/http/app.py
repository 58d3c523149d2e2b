"""FastAPI application factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import BaseModel

from pricewatch.core.config import Settings, get_settings
from pricewatch.core.observability.logging import setup_logging
from pricewatch.interfaces.bootstrap import price_tracker_service
from pricewatch.interfaces.http.items import router as items_router
from pricewatch.modules.price_tracker.service import PriceTrackerService

LOGGER = logging.getLogger(__name__)


class HealthStatus(BaseModel):
    status: str


def create_app(
    settings: Settings | None = None,
    service: PriceTrackerService | None = None,
) -> FastAPI:
    """Initialise the FastAPI application.

    Args:
        settings: Application settings. If None, uses get_settings().
        service: Pre-configured PriceTrackerService for testing. If provided,
            the lifespan does not open a database or HTTP client.
    """

    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Manage application startup and shutdown lifecycle."""
        if service is not None:
            app.state.service = service
            yield
            return

        async with price_tracker_service(settings) as built:
            app.state.service = built
            LOGGER.info("%s started", settings.app_name)
            yield
            LOGGER.info("%s shutting down", settings.app_name)

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    # Available before startup so routes work with TestClient without a lifespan.
    if service is not None:
        app.state.service = service

    @app.get("/healthz", response_model=HealthStatus)
    async def health() -> HealthStatus:  # pragma: no cover - trivial endpoint
        return HealthStatus(status="ok")

    app.include_router(items_router)
    return app


def run() -> None:  # pragma: no cover - used by the CLI serve command
    """Run the application with uvicorn."""

    settings = get_settings()
    import uvicorn

    uvicorn.run(
        "pricewatch.interfaces.http.app:create_app",
        host=settings.host,
        port=settings.port,
        factory=True,
        reload=settings.environment == "development",
    )


__all__ = ["create_app", "run"]
