"""Logging configuration module."""

from __future__ import annotations

import logging

from mockupgen.config.settings import get_settings

# SDK loggers that log every HTTP request at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore", "google_genai", "openai")


def configure_logging() -> None:
    """Configure root logger according to project conventions."""

    settings = get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    if level > logging.DEBUG:
        for name in _CHATTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
