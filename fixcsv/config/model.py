"""Data model for encoder configuration."""

from __future__ import annotations

from dataclasses import dataclass

from ..const import (
    DEFAULT_DEBUG_LOGGING,
    DEFAULT_DELIMITER,
    DEFAULT_STRICT,
    DEFAULT_TAG_KEY,
    TEXT_ENCODING,
)


@dataclass(frozen=True, slots=True)
class EncoderConfig:
    """Immutable settings handed to an encoder at construction time.

    Instances are hashable and key the per-schema descriptor cache.
    """

    delimiter: str = DEFAULT_DELIMITER
    strict: bool = DEFAULT_STRICT
    tag_key: str = DEFAULT_TAG_KEY
    debug_logging: bool = DEFAULT_DEBUG_LOGGING

    @property
    def delimiter_bytes(self) -> bytes:
        return self.delimiter.encode(TEXT_ENCODING)


DEFAULT_CONFIG = EncoderConfig()
