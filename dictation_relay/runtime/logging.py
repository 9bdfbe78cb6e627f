"""Logging initialization."""

from __future__ import annotations

import os
import logging

from dictation_relay.config.logging import LOG_LEVEL, LOG_FORMAT, ENV_SHOW_HTTP_LOGS


def configure_logging() -> None:
    # httpx logs every provider request at INFO. Keep it tame unless explicitly enabled.
    if (os.getenv(ENV_SHOW_HTTP_LOGS) or "").strip().lower() not in {"1", "true", "yes"}:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)


__all__ = ["configure_logging"]
