"""
Logging configuration helpers.
Both the API process and the maintenance scripts call `configure_logging` once at startup.
"""

from __future__ import annotations

import logging

from src.common.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Libraries that are chatty below WARNING regardless of the configured level.
QUIET_LOGGERS: tuple[str, ...] = ("sqlalchemy.engine", "passlib")

_LOGGING_CONFIGURED = False


def configure_logging() -> None:
    """Configure process-wide logging from `LOG_LEVEL`."""

    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    level = getattr(logging, get_settings().LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    _LOGGING_CONFIGURED = True
