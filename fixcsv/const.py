"""Shared constants for the fixcsv encoder."""
from __future__ import annotations

from typing import Final

DEFAULT_DELIMITER: Final[str] = "||"
DEFAULT_TAG_KEY: Final[str] = "fixcsv"
DEFAULT_STRICT: Final[bool] = False
DEFAULT_DEBUG_LOGGING: Final[bool] = False

LINE_SEPARATOR: Final[bytes] = b"\n"
TAG_SEPARATOR: Final[str] = ":"
TEXT_ENCODING: Final[str] = "utf-8"

# Metadata key marking a float field as IEEE-754 single precision.
FLOAT_BITS_KEY: Final[str] = "fixcsv_float_bits"

CONFIG_TABLE: Final[str] = "fixcsv"

__all__ = [
    "DEFAULT_DELIMITER",
    "DEFAULT_TAG_KEY",
    "DEFAULT_STRICT",
    "DEFAULT_DEBUG_LOGGING",
    "LINE_SEPARATOR",
    "TAG_SEPARATOR",
    "TEXT_ENCODING",
    "FLOAT_BITS_KEY",
    "CONFIG_TABLE",
]
