"""Finding notifications."""

from .mailgun import (
    MAILGUN_API_BASE,
    MailgunNotifier,
    NotificationError,
    build_body,
    build_subject,
)

__all__ = [
    "MAILGUN_API_BASE",
    "MailgunNotifier",
    "NotificationError",
    "build_body",
    "build_subject",
]
