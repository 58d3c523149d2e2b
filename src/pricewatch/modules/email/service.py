"""Price drop e-mails over the Resend HTTP API."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import httpx

from pricewatch.core.config import Settings
from pricewatch.core.protocols.email import EmailMessage, EmailResult

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER_SECONDS = 60.0


@dataclass
class EmailConfig:
    """Resend credentials and retry policy."""

    api_key: str
    from_email: str
    max_retries: int = 3
    base_delay_seconds: float = 1.0
    timeout_seconds: float = 30.0

    @classmethod
    def from_settings(cls, settings: Settings) -> EmailConfig:
        return cls(api_key=settings.resend_api_key or "", from_email=settings.email_from or "")


class ResendEmailService:
    """IEmailService backed by Resend.

    Each attempt either settles the send or names a delay before the next
    one. Timeouts, transport errors and 5xx back off exponentially, 429 waits
    for ``Retry-After`` and any other non-200 answer settles as a failure.
    ``EmailResult.success`` is only True for a 200 from Resend.
    """

    RESEND_API_URL = "https://api.resend.com/emails"

    def __init__(self, config: EmailConfig) -> None:
        self._config = config
        self._client: httpx.AsyncClient | None = None

    def is_configured(self) -> bool:
        return bool(self._config.api_key and self._config.from_email)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def send(self, message: EmailMessage) -> EmailResult:
        if not self.is_configured():
            return EmailResult(
                success=False,
                error="Email service not configured (missing API key or from address)",
            )

        payload = self._payload(message)
        last_error = "Max retries exceeded"
        for attempt in range(1, self._config.max_retries + 1):
            outcome = await self._attempt(payload, attempt)
            if isinstance(outcome, EmailResult):
                return outcome
            last_error, delay = outcome
            if attempt < self._config.max_retries:
                await asyncio.sleep(delay)

        logger.error(
            "Giving up on e-mail after %d attempts: %s",
            self._config.max_retries,
            last_error,
            extra={"to": message.to},
        )
        return EmailResult(success=False, error=last_error)

    def _payload(self, message: EmailMessage) -> dict[str, object]:
        payload: dict[str, object] = {
            "from": self._config.from_email,
            "to": message.to,
            "subject": message.subject,
            "html": message.html_body,
        }
        optional = {"text": message.text_body, "reply_to": message.reply_to}
        payload.update({key: value for key, value in optional.items() if value})
        return payload

    async def _attempt(
        self, payload: dict[str, object], attempt: int
    ) -> EmailResult | tuple[str, float]:
        """POST once; return the settled result or ``(error, retry delay)``."""
        backoff = self._config.base_delay_seconds * 2 ** (attempt - 1)
        try:
            response = await self._http().post(self.RESEND_API_URL, json=payload)
        except httpx.TimeoutException:
            logger.warning("Resend timed out (attempt %d)", attempt)
            return "Request timed out", backoff
        except httpx.RequestError as e:
            logger.warning("Resend unreachable (attempt %d): %s", attempt, e)
            return f"Request error: {e}", backoff

        status = response.status_code
        if status == 200:
            message_id = _message_id(response)
            logger.info("Email sent", extra={"message_id": message_id, "attempt": attempt})
            return EmailResult(success=True, message_id=message_id)
        if status == 429:
            delay = _retry_after(response)
            logger.warning("Resend rate limit, retrying in %ss", delay)
            return "Rate limited", delay
        if status >= 500:
            logger.warning("Resend returned %d (attempt %d)", status, attempt)
            return f"Server error: {status} - {response.text}", backoff

        logger.error("Resend rejected the e-mail: %d %s", status, response.text)
        return EmailResult(success=False, error=f"HTTP {status}: {response.text}")

    def _http(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._config.timeout_seconds,
                headers={"Authorization": f"Bearer {self._config.api_key}"},
            )
        return self._client


def _message_id(response: httpx.Response) -> str | None:
    # A 200 means Resend accepted the e-mail even if the body is not JSON.
    try:
        body = response.json()
    except ValueError:
        return None
    return body.get("id") if isinstance(body, dict) else None


def _retry_after(response: httpx.Response) -> float:
    try:
        return float(response.headers["Retry-After"])
    except (KeyError, ValueError):
        return DEFAULT_RETRY_AFTER_SECONDS


__all__ = ["EmailConfig", "ResendEmailService"]
