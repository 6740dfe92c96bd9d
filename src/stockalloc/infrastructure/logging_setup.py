"""Logging configuration for the CLI process."""

from __future__ import annotations

import logging

from stockalloc.infrastructure.config import Settings


def configure_logging(settings: Settings) -> None:
    """Send ``stockalloc`` logs to stderr at the configured level."""
    level = getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(level=level, format=settings.log_format)
    logging.getLogger("stockalloc").setLevel(level)
