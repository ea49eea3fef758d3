"""ARIN registry lookups for address ownership."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from k8scan.modules.scanner.models import OwnershipInfo
from k8scan.tools.http import HTTPClient

logger = logging.getLogger(__name__)

ARIN_API_ENDPOINT = "http://whois.arin.net/rest/ip/{address}"


class EnrichmentError(RuntimeError):
    """Raised when ownership data could not be retrieved."""


def parse_ownership(data: Any) -> OwnershipInfo:
    """Extract the organization reference from an ARIN ``/rest/ip`` JSON document.

    Missing or oddly-typed sections yield empty fields rather than errors.
    """
    net = data.get("net") if isinstance(data, dict) else None
    org = net.get("orgRef") if isinstance(net, dict) else None
    if not isinstance(org, dict):
        return OwnershipInfo()
    return OwnershipInfo(
        handle=str(org.get("@handle", "") or ""),
        name=str(org.get("@name", "") or ""),
        reference=str(org.get("$", "") or ""),
    )


class ArinClient:
    """Client for the ARIN Whois-RWS REST service."""

    def __init__(self, timeout: float = 10.0, endpoint: str = ARIN_API_ENDPOINT):
        self.timeout = timeout
        self.endpoint = endpoint

    async def lookup(self, address: str) -> OwnershipInfo:
        """Look up the organization that owns an address.

        Raises:
            EnrichmentError: on transport failure, non-2xx status or bad JSON,
                or when the lookup takes longer than ``timeout`` overall.
        """
        url = self.endpoint.format(address=address)
        try:
            async with HTTPClient(timeout=self.timeout, verify_ssl=True) as client:
                response = await client.get(url, headers={"Accept": "application/json"})
        except httpx.HTTPError as exc:
            raise EnrichmentError(f"ARIN lookup for {address} failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise EnrichmentError(
                f"ARIN lookup for {address} returned HTTP {response.status_code}"
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise EnrichmentError(f"ARIN lookup for {address} returned invalid JSON") from exc

        info = parse_ownership(data)
        logger.debug("ARIN %s -> %s", address, info)
        return info
