"""Logging setup for the command line."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.logging import RichHandler

if TYPE_CHECKING:
    from rich.console import Console


def setup_logging(console: Console, *, verbose: bool = False) -> None:
    """Route nextver log records to ``console`` through rich.

    Args:
        console: Console to log to (stderr, so stdout stays clean)
        verbose: Log at DEBUG instead of WARNING
    """
    handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("nextver")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
