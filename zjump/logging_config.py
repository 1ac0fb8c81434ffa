"""Loguru logging setup."""

import os
import sys

from loguru import logger


def setup_logging(level: str | None = None) -> None:
    """Route all diagnostics to a single stderr sink at ``level``."""
    if level is None:
        level = os.environ.get("LOG_LEVEL", "WARNING")

    logger.remove()
    logger.add(
        sys.stderr,
        format="<level>{level: <8}</level> | {name}:{function}:{line} | {message}",
        level=level.upper(),
        colorize=None,
        backtrace=False,
        diagnose=False,
    )
