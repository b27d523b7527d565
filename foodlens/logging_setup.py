from __future__ import annotations

import sys

from loguru import logger

from .config import LOG_DIR, LOG_LEVEL, LOG_RETENTION, LOG_ROTATION


def configure_logging(level: str = LOG_LEVEL, log_to_file: bool = True) -> None:
    """Stderr sink at ``level`` plus a rotating file sink under LOG_DIR."""
    logger.remove()
    logger.add(sys.stderr, level=level)
    if log_to_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        logger.add(
            LOG_DIR / "foodlens.log",
            level="DEBUG",
            rotation=LOG_ROTATION,
            retention=LOG_RETENTION,
            enqueue=True,
        )
