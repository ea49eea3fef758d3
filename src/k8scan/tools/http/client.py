"""Async HTTP client used for signature probing and registry lookups."""

import asyncio
import json
import time
from dataclasses import dataclass
from typing import Any

import httpx


class ResponseBodyError(httpx.HTTPError):
    """The status line and headers arrived but the body could not be read."""


@dataclass
class HTTPResponse:
    """Represents an HTTP response."""

    url: str
    status_code: int
    headers: dict[str, str]
    body: str

    @property
    def server(self) -> str:
        return self.headers.get("server", "")

    def json(self) -> Any:
        """Decode the body as JSON."""
        return json.loads(self.body)


class HTTPClient:
    """Async HTTP client for probing endpoints.

    Certificate verification is off by default: the endpoints being probed are
    administrative surfaces that commonly run with self-signed certificates.

    ``timeout`` bounds each whole request, headers and body together, not
    just individual socket operations.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        follow_redirects: bool = True,
        verify_ssl: bool = False,
    ):
        self.timeout = timeout
        self.follow_redirects = follow_redirects
        self.verify_ssl = verify_ssl
        self.client: httpx.AsyncClient | None = None

    async def __aenter__(self):
        self.client = httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=self.follow_redirects,
            verify=self.verify_ssl,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.client:
            await self.client.aclose()
            self.client = None

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        data: dict[str, Any] | None = None,
        auth: tuple[str, str] | None = None,
    ) -> HTTPResponse:
        """Make an HTTP request.

        Any status code is returned as a response.

        Raises:
            ResponseBodyError: if the body failed or ran past the deadline
                after the headers were received.
            httpx.HTTPError: for any failure before the headers arrived,
                including running out of time.
        """
        if not self.client:
            raise RuntimeError("Client not initialized. Use async context manager.")

        deadline = time.monotonic() + self.timeout
        request = self.client.build_request(
            method=method,
            url=url,
            headers=headers,
            data=data,
        )

        try:
            response = await asyncio.wait_for(
                self.client.send(request, auth=auth, stream=True),
                timeout=self.timeout,
            )
        except TimeoutError:
            raise httpx.TimeoutException(
                f"no response from {url} within {self.timeout}s", request=request
            ) from None

        try:
            remaining = max(deadline - time.monotonic(), 0.0)
            try:
                await asyncio.wait_for(response.aread(), timeout=remaining)
            except TimeoutError:
                raise ResponseBodyError(
                    f"body from {url} not complete within {self.timeout}s"
                ) from None
            except httpx.HTTPError as exc:
                raise ResponseBodyError(f"reading body from {url} failed: {exc!r}") from exc
        finally:
            await response.aclose()

        return HTTPResponse(
            url=str(response.url),
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.text,
        )

    async def get(
        self,
        url: str,
        headers: dict[str, str] | None = None,
    ) -> HTTPResponse:
        """Make a GET request."""
        return await self.request("GET", url, headers=headers)

    async def post(
        self,
        url: str,
        data: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        auth: tuple[str, str] | None = None,
    ) -> HTTPResponse:
        """Make a POST request."""
        return await self.request("POST", url, headers=headers, data=data, auth=auth)
