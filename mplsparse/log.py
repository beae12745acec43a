"""Logging configuration for the mplsparse CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """Attach a rich stderr handler to the ``mplsparse`` logger.

    DEBUG when *verbose*, otherwise only warnings and errors are shown.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    logger = logging.getLogger("mplsparse")
    logger.setLevel(level)
    logger.handlers.clear()

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    logger.addHandler(handler)
    return logger
