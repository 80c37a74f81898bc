"""Logging helpers for fixcsv."""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from logging import Handler
from logging.config import dictConfig
from typing import Any

import msgspec

from .model import EncoderConfig


class StructuredLogFormatter(logging.Formatter):
    """One JSON object per line, with the ``fixcsv.`` logger prefix trimmed.

    Encoded lines reach the log only through ``log_hexdump``, so messages
    are always plain text.
    """

    PREFIX = "fixcsv."

    def format(self, record: logging.LogRecord) -> str:
        logger_name = record.name.removeprefix(self.PREFIX)

        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": logger_name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return msgspec.json.encode(payload).decode("utf-8")


def _build_handler() -> Handler:
    # stdout carries encoded records.
    return logging.StreamHandler(sys.stderr)


def configure_logging(config: EncoderConfig) -> None:
    """Configure root logging based on encoder settings."""

    level_name = "DEBUG" if config.debug_logging else "WARNING"

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structured": {
                    "()": "fixcsv.config.logging.StructuredLogFormatter",
                }
            },
            "handlers": {
                "fixcsv": {
                    "()": _build_handler,
                    "level": level_name,
                    "formatter": "structured",
                }
            },
            "root": {
                "level": level_name,
                "handlers": ["fixcsv"],
            },
        }
    )

    logging.getLogger("fixcsv").debug("Logging configured at level %s", level_name)
