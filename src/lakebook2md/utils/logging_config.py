"""Logging configuration shared by the CLI and the server.

Modules log through the standard library. Structured context is passed with
``extra={...}``; the JSON formatter emits those fields alongside the message.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

from lakebook2md.config import LAKEBOOK2MD_LOG_FORMAT, LAKEBOOK2MD_LOG_LEVEL

_ROOT_LOGGERS = ("lakebook2md", "server")
_TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
# Attributes every LogRecord carries; anything else came from ``extra``.
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per line, including ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Plain formatter that appends ``extra`` fields as ``key=value`` pairs."""

    def __init__(self) -> None:
        super().__init__(_TEXT_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        extras = [
            f"{key}={value}"
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        ]
        return f"{message} | {' '.join(extras)}" if extras else message


def configure_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Install a single stderr handler on the project loggers.

    Calling it again replaces the handler, so the level can be changed at
    runtime (e.g. from the CLI's ``--log-level``).
    """
    effective_level = getattr(logging, (level or LAKEBOOK2MD_LOG_LEVEL).upper(), logging.INFO)
    formatter: logging.Formatter = JsonFormatter() if (fmt or LAKEBOOK2MD_LOG_FORMAT) == "json" else TextFormatter()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    for name in _ROOT_LOGGERS:
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.setLevel(effective_level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger, configuring the project loggers on first use."""
    if not logging.getLogger(_ROOT_LOGGERS[0]).handlers:
        configure_logging()
    return logging.getLogger(name)
