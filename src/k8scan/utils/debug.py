"""Logging setup.

Log records go to stderr through rich so that findings written to stdout
stay one plain line each.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(message)s"


def configure_logging(debug: bool = False, console: Console | None = None) -> logging.Logger:
    """Install a rich stderr handler on the ``k8scan`` logger.

    Args:
        debug: Lower the level to DEBUG (per-target connection failures and
            non-matching responses become visible).
        console: Console to log to; defaults to a new stderr console.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("k8scan")
    for handler in list(logger.handlers):
        if getattr(handler, "_k8scan", False):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=debug,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="[%X]"))
    handler._k8scan = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False

    # httpx logs every request at INFO; keep it quiet unless debugging.
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)
    return logger
