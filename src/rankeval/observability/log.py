"""Loguru sink configuration."""

import sys
from typing import TextIO

from loguru import logger

from rankeval.config.settings import settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str | None = None, sink: TextIO | None = None) -> int:
    """
    Replace loguru's default sink with one at the configured level.

    Args:
        level: Log level name; defaults to ``settings.LOG_LEVEL``
        sink: Stream to write to; defaults to stderr

    Returns:
        The loguru handler id, usable with ``logger.remove``
    """
    level = (level or settings.LOG_LEVEL).upper()
    logger.remove()
    handler_id = logger.add(sink or sys.stderr, level=level, format=LOG_FORMAT)
    logger.debug(f"Logging configured at level {level}")
    return handler_id
