"""Protocol for the notification e-mail transport."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass
class EmailMessage:
    """One outgoing e-mail. ``html_body`` is required, ``text_body`` is the plain fallback."""

    to: list[str]
    subject: str
    html_body: str
    text_body: str | None = None
    reply_to: str | None = None


@dataclass
class EmailResult:
    success: bool
    message_id: str | None = None
    error: str | None = None


@runtime_checkable
class IEmailService(Protocol):
    """Transport used by the price drop notifier."""

    async def send(self, message: EmailMessage) -> EmailResult:
        """Deliver ``message``.

        Never raises for delivery problems; they are reported through
        ``EmailResult.success`` and ``EmailResult.error``. Only a success
        result may be treated as delivered.
        """
        ...

    def is_configured(self) -> bool: ...


__all__ = ["EmailMessage", "EmailResult", "IEmailService"]
