"""Logging setup for command-line use."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str | int = "INFO", console: Console | None = None) -> logging.Logger:
    """Attach a Rich handler to the ``quipservice`` logger.

    Library code never calls this; it only uses module loggers.

    Args:
        level: Level name or number
        console: Console to render to (default: stderr)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger("quipservice")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
