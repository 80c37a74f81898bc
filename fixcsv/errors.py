"""Errors raised by the fixcsv encoder."""

from __future__ import annotations


class FixcsvError(Exception):
    """Base error for this package."""


class ConfigError(FixcsvError):
    """Raised when an encoder configuration is invalid."""


class MetadataError(FixcsvError):
    """Raised when a field's position/length metadata cannot be parsed.

    The record encoder drops the offending field unless strict mode is on.
    """

    def __init__(self, message: str, tag: str | None = None) -> None:
        super().__init__(message)
        self.tag = tag


class MalformedMetadataError(MetadataError):
    """Metadata does not split into exactly ``<position>:<length>``."""


class InvalidPositionError(MetadataError):
    """Position part is not a non-negative base-10 integer."""


class InvalidLengthError(MetadataError):
    """Length part is not a non-negative base-10 integer."""


class UnsupportedTypeError(FixcsvError):
    """A field's type has no rendering rule."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"fixcsv: cannot marshal unknown Type {type_name}")
        self.type_name = type_name


class CustomRenderError(FixcsvError):
    """A ``marshal_text`` implementation raised.

    The original exception is available as ``cause`` and ``__cause__``.
    """

    def __init__(self, type_name: str, cause: BaseException) -> None:
        super().__init__(f"fixcsv: {type_name}.marshal_text failed: {cause}")
        self.type_name = type_name
        self.cause = cause


class SinkWriteError(FixcsvError):
    """The output sink rejected a write or flush."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"fixcsv: sink write failed: {cause}")
        self.cause = cause


__all__ = [
    "FixcsvError",
    "ConfigError",
    "MetadataError",
    "MalformedMetadataError",
    "InvalidPositionError",
    "InvalidLengthError",
    "UnsupportedTypeError",
    "CustomRenderError",
    "SinkWriteError",
]
