"""Tests for logging setup."""

import io
import logging

from rich.console import Console

from k8scan.utils.debug import configure_logging


def test_info_level_by_default():
    logger = configure_logging(debug=False, console=Console(file=io.StringIO()))

    assert logger.level == logging.INFO
    assert logging.getLogger("httpx").level == logging.WARNING


def test_debug_level():
    buffer = io.StringIO()
    logger = configure_logging(debug=True, console=Console(file=buffer, width=200))

    logging.getLogger("k8scan.modules.scanner").debug("connect to 10.0.0.5:80 failed")

    assert logger.level == logging.DEBUG
    assert "connect to 10.0.0.5:80 failed" in buffer.getvalue()


def test_reconfigure_replaces_handler():
    configure_logging(console=Console(file=io.StringIO()))
    configure_logging(console=Console(file=io.StringIO()))

    handlers = [h for h in logging.getLogger("k8scan").handlers if getattr(h, "_k8scan", False)]
    assert len(handlers) == 1
