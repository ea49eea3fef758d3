"""Scan dispatcher: fans targets out to concurrent probing pipelines."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass
from typing import Protocol

from k8scan.config import ScanConfig
from k8scan.tools.net import AddressRange

from .models import Finding, OwnershipInfo, ProbeResult, Target
from .reachability import port_open
from .reporting import FindingPrinter
from .signature import classify

logger = logging.getLogger(__name__)


class Enricher(Protocol):
    async def lookup(self, address: str) -> OwnershipInfo: ...


class Notifier(Protocol):
    async def send(self, finding: Finding) -> None: ...


@dataclass
class ScanSummary:
    """Totals for a completed scan."""

    targets: int
    findings: list[Finding]
    elapsed: float


class ScanDispatcher:
    """
    Runs one probing pipeline per (address, port) pair.

    Pipeline: reachability gate, signature probe, ownership lookup, emit,
    notify. Pipelines share nothing but the completion counter. A non-zero
    ``config.concurrency`` caps how many are in flight; targets are produced
    lazily so large blocks never materialize in memory.
    """

    def __init__(
        self,
        config: ScanConfig,
        enricher: Enricher,
        notifier: Notifier | None = None,
        emit: Callable[[Finding], None] | None = None,
        *,
        reachable: Callable[[str, int, float], Awaitable[bool]] = port_open,
        probe: Callable[[str, int, float], Awaitable[ProbeResult]] = classify,
    ):
        self.config = config
        self.enricher = enricher
        self.notifier = notifier
        self.emit = emit or FindingPrinter()
        self._reachable = reachable
        self._probe = probe
        self.completed = 0

    def targets(self) -> Iterator[Target]:
        """Cross product of the address range and the port list, address-major."""
        for address in AddressRange(self.config.cidr):
            for port in self.config.ports:
                yield Target(str(address), port)

    async def run(self) -> ScanSummary:
        """Probe every target and wait for all pipelines to finish."""
        started = time.perf_counter()
        self.completed = 0
        findings: list[Finding] = []
        pending: set[asyncio.Task] = set()
        limit = self.config.concurrency
        gate = asyncio.Semaphore(limit) if limit else None

        def _done(task: asyncio.Task) -> None:
            pending.discard(task)
            self.completed += 1
            if gate is not None:
                gate.release()
            if task.cancelled():
                return
            finding = task.result()
            if finding is not None:
                findings.append(finding)

        spawned = 0
        try:
            for target in self.targets():
                if gate is not None:
                    await gate.acquire()
                task = asyncio.create_task(self.scan_target(target))
                pending.add(task)
                task.add_done_callback(_done)
                spawned += 1
            while pending:
                await asyncio.wait(set(pending))
        except asyncio.CancelledError:
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)
            raise

        elapsed = time.perf_counter() - started
        return ScanSummary(targets=spawned, findings=findings, elapsed=elapsed)

    async def scan_target(self, target: Target) -> Finding | None:
        """Run the full pipeline for one target. Never raises except on cancellation."""
        try:
            return await self._pipeline(target)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.warning("scan of %s failed", target.endpoint, exc_info=True)
            return None

    async def _pipeline(self, target: Target) -> Finding | None:
        if not await self._reachable(target.address, target.port, self.config.ping_timeout):
            return None

        result = await self._probe(target.address, target.port, self.config.http_timeout)
        if not result.matched:
            return None

        try:
            ownership = await self.enricher.lookup(target.address)
        except Exception as exc:
            logger.warning("ip info err: %s", exc)
            ownership = OwnershipInfo()

        finding = Finding(target.address, target.port, result.uri, ownership)
        self.emit(finding)

        if self.notifier is not None:
            try:
                await self.notifier.send(finding)
            except Exception as exc:
                logger.warning("notification for %s failed: %s", finding.uri, exc)
        return finding
