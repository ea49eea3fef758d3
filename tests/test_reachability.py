"""Tests for the TCP reachability gate."""

import asyncio
import socket
import time

from k8scan.modules.scanner import port_open
from k8scan.modules.scanner import reachability


def _closed_port() -> int:
    """Return a loopback port nothing is listening on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


async def test_open_port(listening_port: int):
    assert await port_open("127.0.0.1", listening_port, timeout=1.0) is True


async def test_closed_port():
    started = time.perf_counter()
    assert await port_open("127.0.0.1", _closed_port(), timeout=1.0) is False
    assert time.perf_counter() - started < 1.5


async def test_timeout_bounds_the_wait(monkeypatch):
    """A connect that never completes gives up at the timeout."""

    async def _hang(host, port):
        await asyncio.sleep(60)

    monkeypatch.setattr(reachability.asyncio, "open_connection", _hang)

    started = time.perf_counter()
    assert await port_open("192.0.2.1", 80, timeout=0.2) is False
    elapsed = time.perf_counter() - started
    assert 0.15 <= elapsed < 1.0


async def test_network_error_is_false(monkeypatch):
    async def _unreachable(host, port):
        raise OSError(101, "Network is unreachable")

    monkeypatch.setattr(reachability.asyncio, "open_connection", _unreachable)

    assert await port_open("192.0.2.1", 80, timeout=1.0) is False


async def test_connection_closed_after_success(monkeypatch):
    closed = []

    class _Writer:
        def close(self):
            closed.append(True)

        async def wait_closed(self):
            return None

    async def _connect(host, port):
        return object(), _Writer()

    monkeypatch.setattr(reachability.asyncio, "open_connection", _connect)

    assert await port_open("10.0.0.5", 8001, timeout=1.0) is True
    assert closed == [True]
