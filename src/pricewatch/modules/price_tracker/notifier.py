"""Price drop e-mails and last-notified bookkeeping."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from html import escape

from pricewatch.core.protocols.email import EmailMessage, IEmailService
from pricewatch.core.protocols.storage import IItemStore
from pricewatch.modules.price_tracker.result import PriceDropEvent
from pricewatch.modules.price_tracker.urls import store_display_name

logger = logging.getLogger(__name__)


def format_price(cents: int | None) -> str:
    if cents is None:
        return "--"
    return f"${cents / 100:,.2f}"


class PriceDropNotifier:
    """Send one e-mail per refresh cycle covering every new drop.

    Last-notified prices are only advanced after the transport confirms the
    send. A failed send leaves them untouched, so the same drops qualify again
    on the next cycle.
    """

    def __init__(self, email_service: IEmailService, store: IItemStore) -> None:
        self.email_service = email_service
        self.store = store

    async def dispatch(self, drops: Sequence[PriceDropEvent], recipient: str | None) -> bool:
        """Send the drop summary and advance notified prices.

        Returns:
            True if an e-mail was sent, False if there was nothing to send or
            the send failed.
        """
        if not drops:
            return False
        if not recipient:
            logger.info("Skipping %d price drop(s): no notification e-mail configured", len(drops))
            return False

        message = EmailMessage(
            to=[recipient],
            subject=self._build_subject(drops),
            html_body=self._build_drops_html(drops),
            text_body=self._build_drops_text(drops),
        )
        result = await self.email_service.send(message)
        if not result.success:
            logger.warning(
                "Price drop e-mail failed, will retry next cycle: %s",
                result.error,
                extra={"drops": len(drops), "to": recipient},
            )
            return False

        for drop in drops:
            advanced = await self.store.update_notified_price(drop.item_id, drop.new_price)
            if not advanced:
                logger.debug(
                    "Notified price for item %s already at or below %s",
                    drop.item_id,
                    drop.new_price,
                )

        logger.info(
            "Sent price drop e-mail",
            extra={"drops": len(drops), "to": recipient, "message_id": result.message_id},
        )
        return True

    def _build_subject(self, drops: Sequence[PriceDropEvent]) -> str:
        if len(drops) == 1:
            return f"Price drop: {drops[0].title}"
        return f"{len(drops)} price drops on your watchlist"

    def _build_drops_text(self, drops: Sequence[PriceDropEvent]) -> str:
        lines = ["Prices dropped on items you are watching:", ""]
        for drop in drops:
            lines.append(f"{drop.title} ({store_display_name(drop.store_domain)})")
            lines.append(
                f"  {format_price(drop.old_price)} -> {format_price(drop.new_price)}"
                f" ({drop.percent_off}% off)"
            )
            lines.append(f"  {drop.url}")
            lines.append("")
        return "\n".join(lines).rstrip() + "\n"

    def _build_drops_html(self, drops: Sequence[PriceDropEvent]) -> str:
        rows = ""
        for drop in drops:
            rows += f"""
            <tr>
                <td style="padding: 8px; border-bottom: 1px solid #eee;">
                    <a href="{escape(drop.url, quote=True)}">{escape(drop.title)}</a>
                    <br><span style="color: #666; font-size: 0.9em;">
                        {escape(store_display_name(drop.store_domain))}</span>
                </td>
                <td style="padding: 8px; border-bottom: 1px solid #eee;
                           text-decoration: line-through; color: #666;">
                    {format_price(drop.old_price)}</td>
                <td style="padding: 8px; border-bottom: 1px solid #eee;">
                    <strong style="color: #22c55e;">{format_price(drop.new_price)}</strong>
                </td>
                <td style="padding: 8px; border-bottom: 1px solid #eee;">
                    {drop.percent_off}% off</td>
            </tr>"""

        return f"""
        <!DOCTYPE html>
        <html lang="en">
        <head><meta charset="UTF-8"></head>
        <body style="font-family: Arial, sans-serif; max-width: 600px;
                     margin: 0 auto; padding: 20px;">
            <h2 style="color: #1e3a5f;">Price drop!</h2>
            <p>Prices dropped on items you are watching.</p>

            <table style="width: 100%; border-collapse: collapse; margin: 20px 0;">
                <thead>
                    <tr style="background: #f3f4f6;">
                        <th style="padding: 8px; text-align: left;">Product</th>
                        <th style="padding: 8px; text-align: left;">Was</th>
                        <th style="padding: 8px; text-align: left;">Now</th>
                        <th style="padding: 8px; text-align: left;">Saving</th>
                    </tr>
                </thead>
                <tbody>{rows}</tbody>
            </table>

            <hr style="margin-top: 30px; border: none; border-top: 1px solid #eee;">
            <p style="color: #666; font-size: 0.9em;">
                You get this e-mail because you track these products in Price Watch.
            </p>
        </body>
        </html>
        """


__all__ = ["PriceDropNotifier", "format_price"]
