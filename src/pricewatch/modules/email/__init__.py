"""Email service module.

Sends price drop notifications through the Resend HTTP API.
"""

from .service import EmailConfig, ResendEmailService

__all__ = ["EmailConfig", "ResendEmailService"]
