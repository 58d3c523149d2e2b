"""Configuration management for the price tracker service."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, ClassVar, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

# Ensure .env values are loaded before settings initialisation.
load_dotenv()

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///data/pricewatch.db"


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    ENV_PREFIX: ClassVar[str] = "PRICEWATCH_"

    model_config = ConfigDict(extra="ignore")

    app_name: str = Field(default="Price Watch", description="Human friendly service name.")
    environment: Literal["development", "production", "test"] = Field(
        default="development",
        description="Runtime environment used for logging and diagnostics.",
    )
    host: str = Field(default="0.0.0.0", description="Host interface for the FastAPI server.")
    port: int = Field(default=8000, description="Listening port for the FastAPI server.")

    database_url: str = Field(
        default=DEFAULT_DATABASE_URL,
        description="SQLAlchemy async URL for the item store.",
    )

    cron_secret: str | None = Field(
        default=None,
        description="Shared secret scheduled callers must send as a Bearer token.",
    )

    resend_api_key: str | None = Field(default=None, description="Resend API key.")
    email_from: str | None = Field(
        default=None,
        description="Sender address used for price drop e-mails.",
    )
    notification_email: str | None = Field(
        default=None,
        description="Fallback recipient when no recipient is stored in settings.",
    )

    fetch_timeout_seconds: float | None = Field(
        default=15.0,
        description="Per-item timeout for one store request. 0 disables the timeout.",
    )

    log_level: str = Field(default="INFO", description="Python logging level for the service.")
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format: JSON lines or rich text for local development.",
    )

    def __init__(self, **data: Any) -> None:  # noqa: D401 - inherited docstring
        env_values = type(self)._load_environment_values()
        env_values.update(data)
        super().__init__(**env_values)

    @classmethod
    def _load_environment_values(cls) -> dict[str, Any]:
        """Return field values sourced from the current environment."""

        values: dict[str, Any] = {}
        for field_name in cls.model_fields:
            env_key = f"{cls.ENV_PREFIX}{field_name.upper()}"
            if env_key in os.environ:
                values[field_name] = os.environ[env_key]
        return values

    @property
    def effective_fetch_timeout(self) -> float | None:
        """Return the per-item timeout, or None when disabled."""
        if not self.fetch_timeout_seconds or self.fetch_timeout_seconds <= 0:
            return None
        return self.fetch_timeout_seconds


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a singleton instance of :class:`Settings`."""

    return Settings()


__all__ = ["Settings", "get_settings"]
