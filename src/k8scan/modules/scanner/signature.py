"""HTTP signature probing for Kubernetes dashboards and API servers."""

from __future__ import annotations

import logging

import httpx

from k8scan.tools.http import HTTPClient, ResponseBodyError

from .models import ProbeOutcome, ProbeResult, Target

logger = logging.getLogger(__name__)

# Each entry is a group of markers that must all appear in the body.
# "serverAddress is left unterminated so it also matches keys such as
# "serverAddressByClientCIDRs".
SIGNATURES: tuple[tuple[str, ...], ...] = (
    ("kubernetes", "dashboard"),
    ('"versions"', '"serverAddress'),
    ('"paths"', '"/api"'),
)


def candidate_urls(address: str, port: int) -> list[str]:
    """URLs to probe, in priority order."""
    endpoint = Target(address, port).endpoint
    return [
        f"http://{endpoint}",
        f"https://{endpoint}",
        f"http://{endpoint}/api/",
        f"https://{endpoint}/api/",
    ]


def matches_signature(body: str) -> bool:
    """Return True if the body looks like a dashboard or API server response.

    Matching is case-insensitive: the body is lower-cased and compared with
    lower-cased markers.
    """
    text = body.lower()
    return any(all(marker.lower() in text for marker in group) for group in SIGNATURES)


async def classify(address: str, port: int, timeout: float) -> ProbeResult:
    """
    Probe an endpoint over HTTP and classify the response.

    Candidates are tried in order and probing stops at the first request that
    gets a response, whatever its status code. Only that response body is
    checked; a non-matching body is final even if later candidates would have
    matched. ``timeout`` bounds each candidate request as a whole.

    Returns:
        ProbeResult with NO_RESPONSE if every candidate failed before headers
        arrived, NO_SIGNATURE if the first response did not match or its body
        could not be read, or MATCH carrying the URI that produced the response.
    """
    async with HTTPClient(timeout=timeout, verify_ssl=False) as client:
        for uri in candidate_urls(address, port):
            try:
                response = await client.get(uri)
            except ResponseBodyError as exc:
                logger.debug("%s answered but the body failed: %s", uri, exc)
                return ProbeResult(ProbeOutcome.NO_SIGNATURE)
            except httpx.HTTPError as exc:
                logger.debug("getting %s failed: %r", uri, exc)
                continue

            if matches_signature(response.body):
                return ProbeResult(ProbeOutcome.MATCH, uri)
            logger.debug(
                "%s responded %d (server %r) without a signature",
                uri,
                response.status_code,
                response.server,
            )
            return ProbeResult(ProbeOutcome.NO_SIGNATURE)

    return ProbeResult(ProbeOutcome.NO_RESPONSE)
