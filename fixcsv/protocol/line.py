"""Line assembly: ordering, truncation and joining of rendered fields."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..const import LINE_SEPARATOR
from .structures import RenderedField


def sort_fields(fields: Iterable[RenderedField]) -> list[RenderedField]:
    """Order fields by position; equal positions keep declaration order."""
    # sorted() is stable.
    return sorted(fields, key=lambda field: field.position)


def truncate(value: bytes, length: int) -> bytes:
    """Return at most ``length`` leading bytes of ``value``, unpadded."""
    if len(value) > length:
        return value[:length]
    return value


def join_fields(fields: Iterable[RenderedField], delimiter: bytes) -> bytes:
    """Assemble one line from rendered fields.

    Fields are sorted by position, each value is cut to its declared
    length, and values are separated by ``delimiter`` with nothing before
    the first or after the last. No fields yields ``b""``.
    """
    return delimiter.join(truncate(field.value, field.length) for field in sort_fields(fields))


def join_lines(lines: Sequence[bytes]) -> bytes:
    """Join record lines with a newline, without a trailing newline."""
    return LINE_SEPARATOR.join(lines)


__all__ = ["sort_fields", "truncate", "join_fields", "join_lines"]
