"""Logging configuration using loguru.

The CLI writes notifications to stderr so stdout stays free for command
output (``list``, the path printed by ``open``).
"""

from __future__ import annotations

import sys

from loguru import logger


def setup_logging(level: str = "WARNING") -> None:
    """Configure loguru with a single stderr sink.

    Call this once at process startup.  Info notifications are shown even
    when ``level`` is higher, so a quiet log level does not hide them.
    """
    level = level.upper()
    threshold = logger.level(level).no

    def _accept(record: dict) -> bool:
        if record["extra"].get("notify"):
            return True
        return record["level"].no >= threshold

    logger.remove()
    logger.add(
        sys.stderr,
        level=0,
        filter=_accept,
        format="<level>{level: <8}</level> | <level>{message}</level>",
    )

    logger.debug("Logging initialised (level={})", level)
