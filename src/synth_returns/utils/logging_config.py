"""Minimal structured logging helpers for the project."""

from __future__ import annotations

import logging
from typing import Mapping

DEFAULT_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

# LogRecord refuses ``extra`` keys that shadow its own attributes
RECORD_ATTRIBUTES = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


def get_logger(name: str, *, level: int | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def safe_extra(payload: Mapping[str, object]) -> dict[str, object]:
    """Copy ``payload`` renaming keys that collide with ``LogRecord`` attributes to ``payload_<key>``."""
    return {
        (f"payload_{key}" if key in RECORD_ATTRIBUTES else key): value
        for key, value in payload.items()
    }


def log_dict(
    logger: logging.Logger,
    message: str,
    payload: Mapping[str, object],
    level: int = logging.INFO,
) -> None:
    if not logger.isEnabledFor(level):
        return
    serialised = ", ".join(f"{key}={value}" for key, value in payload.items())
    logger.log(level, "%s | %s", message, serialised, extra=safe_extra(payload))
