"""Test configuration and fixtures for k8scan."""

import asyncio
import logging
from collections.abc import AsyncGenerator, Awaitable, Callable, Generator
from pathlib import Path

import pytest

from k8scan.config import ScanConfig
from k8scan.modules.scanner import Finding, OwnershipInfo


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> Path:
    """Point HOME at a temp dir and clear K8SCAN_* so no real config leaks in."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for key in (
        "K8SCAN_CIDR",
        "K8SCAN_PORTS",
        "K8SCAN_CONCURRENCY",
        "K8SCAN_MAILGUN_API_KEY",
        "K8SCAN_MAILGUN_DOMAIN",
        "K8SCAN_EMAIL_RECIPIENT",
    ):
        monkeypatch.delenv(key, raising=False)
    return home


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Undo configure_logging so caplog sees k8scan records in every test."""
    yield
    logger = logging.getLogger("k8scan")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def single_host_config() -> ScanConfig:
    """Config for one host and one port with short timeouts."""
    return ScanConfig(cidr="10.0.0.5/32", ports=(8001,), ping_timeout=0.5, http_timeout=1.0)


@pytest.fixture
def sample_ownership() -> OwnershipInfo:
    return OwnershipInfo(
        handle="EXAMPLE-1",
        name="Example Networks",
        reference="https://whois.arin.net/rest/org/EXAMPLE-1",
    )


@pytest.fixture
def sample_finding(sample_ownership: OwnershipInfo) -> Finding:
    return Finding("10.0.0.5", 8001, "http://10.0.0.5:8001", sample_ownership)


class FakeEnricher:
    """Records lookups; raises ``error`` if set."""

    def __init__(self, info: OwnershipInfo | None = None, error: Exception | None = None):
        self.info = info or OwnershipInfo()
        self.error = error
        self.calls: list[str] = []

    async def lookup(self, address: str) -> OwnershipInfo:
        self.calls.append(address)
        if self.error is not None:
            raise self.error
        return self.info


class FakeNotifier:
    """Collects sent findings; raises ``error`` if set."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.sent: list[Finding] = []

    async def send(self, finding: Finding) -> None:
        self.sent.append(finding)
        if self.error is not None:
            raise self.error


@pytest.fixture
def fake_enricher(sample_ownership: OwnershipInfo) -> FakeEnricher:
    return FakeEnricher(sample_ownership)


@pytest.fixture
def fake_notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
async def listening_port() -> AsyncGenerator[int, None]:
    """A loopback TCP port with a server accepting connections."""

    async def _handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        writer.close()

    server = await asyncio.start_server(_handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        yield port
    finally:
        server.close()
        await server.wait_closed()


Handler = Callable[[asyncio.StreamReader, asyncio.StreamWriter], Awaitable[None]]


@pytest.fixture
async def loopback_server() -> AsyncGenerator[Callable[[Handler], Awaitable[int]], None]:
    """Start loopback servers with a raw stream handler; returns their ports."""
    servers: list[asyncio.Server] = []

    async def _start(handler: Handler) -> int:
        server = await asyncio.start_server(handler, "127.0.0.1", 0)
        servers.append(server)
        return server.sockets[0].getsockname()[1]

    yield _start
    for server in servers:
        server.close()
        await server.wait_closed()


async def _drip_body(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
    """Answer with headers at once, then one body byte every 0.3s."""
    try:
        await reader.readuntil(b"\r\n\r\n")
        writer.write(b"HTTP/1.1 200 OK\r\nContent-Length: 1000\r\n\r\n")
        for _ in range(20):
            await writer.drain()
            await asyncio.sleep(0.3)
            writer.write(b"x")
    except (ConnectionError, asyncio.IncompleteReadError):
        pass
    finally:
        writer.close()


@pytest.fixture
async def slow_body_port(loopback_server) -> int:
    """A loopback HTTP server whose body trickles in far slower than any test timeout."""
    return await loopback_server(_drip_body)
