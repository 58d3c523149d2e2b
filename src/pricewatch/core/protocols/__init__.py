"""Protocol definitions for dependency inversion.

The price tracker module depends on these interfaces rather than on the
concrete SQLAlchemy store or the Resend e-mail client, so that tests can pass
in doubles and the HTTP and CLI surfaces wire the real implementations at
startup.
"""

from .email import EmailMessage, EmailResult, IEmailService
from .storage import IItemStore, NewItem

__all__ = [
    "EmailMessage",
    "EmailResult",
    "IEmailService",
    "IItemStore",
    "NewItem",
]
