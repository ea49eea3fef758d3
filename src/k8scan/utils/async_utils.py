"""Event loop management with interrupt handling."""

import asyncio
import logging
import os
import signal
import sys
import threading
from collections.abc import Callable, Coroutine
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ScanInterrupted(Exception):
    """Raised by run_with_signals after a graceful shutdown."""

    def __init__(self, signum: int):
        super().__init__(signal.Signals(signum).name)
        self.signum = signum


def _cancel_all_tasks(loop: asyncio.AbstractEventLoop) -> None:
    """Cancel all pending tasks on the event loop."""
    tasks = asyncio.all_tasks(loop)
    for task in tasks:
        task.cancel()

    if tasks:
        loop.run_until_complete(asyncio.gather(*tasks, return_exceptions=True))


def _exit_now(code: int) -> None:
    sys.stdout.flush()
    sys.stderr.flush()
    os._exit(code)


def make_signal_handler(
    loop: asyncio.AbstractEventLoop,
    graceful: bool,
    received: list[int],
    exit_process: Callable[[int], Any] = _exit_now,
) -> Callable[[int, Any], None]:
    """Build the SIGINT/SIGTERM handler.

    Without ``graceful`` the process exits with status 0 right away and
    in-flight probes are abandoned. With it, every task on the loop is
    cancelled so pipelines unwind before the run returns.
    """

    def handler(signum: int, frame: Any) -> None:
        logger.info("Received %s, exiting.", signal.Signals(signum).name)
        received.append(signum)
        if not graceful:
            exit_process(0)
            return
        for task in asyncio.all_tasks(loop):
            loop.call_soon_threadsafe(task.cancel)

    return handler


def run_with_signals(coro: Coroutine[Any, Any, T], graceful: bool = False) -> T:
    """
    Run a coroutine in a fresh event loop with interrupt handling installed.

    Raises:
        ScanInterrupted: if a signal arrived and ``graceful`` drain completed.
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    received: list[int] = []
    original_handlers: dict[int, Any] = {}
    install = threading.current_thread() is threading.main_thread()

    if install:
        handler = make_signal_handler(loop, graceful, received)
        for signum in (signal.SIGINT, signal.SIGTERM):
            original_handlers[signum] = signal.signal(signum, handler)

    try:
        return loop.run_until_complete(coro)
    except asyncio.CancelledError:
        if received:
            raise ScanInterrupted(received[0]) from None
        raise
    finally:
        try:
            _cancel_all_tasks(loop)
            loop.run_until_complete(loop.shutdown_asyncgens())
        finally:
            asyncio.set_event_loop(None)
            loop.close()

        for signum, original in original_handlers.items():
            signal.signal(signum, original)
