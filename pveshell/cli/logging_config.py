"""Logging setup for the pveshell CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: int = logging.WARNING) -> None:
    """Send log records to stderr through rich; library modules only log."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # httpcore traces every socket operation at DEBUG
    logging.getLogger("httpcore").setLevel(logging.WARNING)
