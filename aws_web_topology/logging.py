"""Logging configuration for the command line interface."""
from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional

LOG_LEVEL_ENV = "AWS_WEB_TOPOLOGY_LOG_LEVEL"
DEFAULT_LEVEL = "WARNING"


class PlainFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        timestamp = datetime.fromtimestamp(record.created, timezone.utc).isoformat(timespec="seconds")
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return f"{timestamp} {record.levelname} {record.name}: {message}"


def _level_from_str(level: str) -> int:
    value = logging.getLevelName(level.strip().upper())
    if isinstance(value, int):
        return value
    raise ValueError(f"Unknown log level '{level}'")


def configure_logging(level: Optional[str] = None) -> int:
    """
    Configure the root logger with a single stderr handler.
    The level falls back to AWS_WEB_TOPOLOGY_LOG_LEVEL, then WARNING.
    Returns the numeric level applied.
    """
    numeric = _level_from_str(level or os.getenv(LOG_LEVEL_ENV) or DEFAULT_LEVEL)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(PlainFormatter())

    root = logging.getLogger()
    root.setLevel(numeric)
    root.handlers = [handler]

    # boto noise stays at WARNING unless DEBUG is explicitly requested
    for name in ("botocore", "boto3", "urllib3"):
        logging.getLogger(name).setLevel(numeric if numeric <= logging.DEBUG else max(numeric, logging.WARNING))

    return numeric
