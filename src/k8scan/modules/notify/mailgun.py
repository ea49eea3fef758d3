"""Email notifications through the Mailgun HTTP API."""

from __future__ import annotations

import logging
import time

import httpx

from k8scan.modules.scanner.models import Finding
from k8scan.tools.http import HTTPClient

logger = logging.getLogger(__name__)

MAILGUN_API_BASE = "https://api.mailgun.net/v3"
SENDER_LOCAL_PART = "k8scan"

# Go's time.UnixDate layout, e.g. "Mon Jan  2 15:04:05 MST 2006".
UNIX_DATE_FORMAT = "%a %b %e %H:%M:%S %Z %Y"


class NotificationError(RuntimeError):
    """Raised when a notification could not be delivered."""


def build_subject(finding: Finding) -> str:
    return f"[k8scan]: found dashboard {finding.uri}"


def build_body(finding: Finding, now: float | None = None) -> str:
    """Plain-text email body for a finding."""
    stamp = time.strftime(UNIX_DATE_FORMAT, time.localtime(now))
    ownership = finding.ownership
    return (
        f"Time: {stamp}\n"
        "\n"
        f"IP: {finding.address}:{finding.port}\n"
        f"URL: {finding.uri}\n"
        "\n"
        f"ARIN: {ownership.handle}\n"
        f"      {ownership.name}\n"
        f"      {ownership.reference}\n"
    )


class MailgunNotifier:
    """Sends one email per finding."""

    def __init__(
        self,
        domain: str,
        api_key: str,
        recipient: str,
        timeout: float = 10.0,
        api_base: str = MAILGUN_API_BASE,
    ):
        self.domain = domain
        self.api_key = api_key
        self.recipient = recipient
        self.timeout = timeout
        self.api_base = api_base.rstrip("/")

    @property
    def sender(self) -> str:
        address = f"{SENDER_LOCAL_PART}@{self.domain}"
        return f"{SENDER_LOCAL_PART} <{address}>"

    async def send(self, finding: Finding) -> None:
        """Deliver a finding by email.

        Raises:
            NotificationError: if Mailgun could not be reached, rejected the
                message or did not answer within ``timeout``.
        """
        url = f"{self.api_base}/{self.domain}/messages"
        payload = {
            "from": self.sender,
            "to": self.recipient,
            "subject": build_subject(finding),
            "text": build_body(finding),
        }
        try:
            async with HTTPClient(timeout=self.timeout, verify_ssl=True) as client:
                response = await client.post(url, data=payload, auth=("api", self.api_key))
        except httpx.HTTPError as exc:
            raise NotificationError(f"sending Mailgun message failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise NotificationError(
                f"sending Mailgun message failed: HTTP {response.status_code}: "
                f"{response.body[:200]}"
            )
        logger.debug("notified %s about %s", self.recipient, finding.uri)
