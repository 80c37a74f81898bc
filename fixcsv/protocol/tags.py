"""Field metadata parsing.

A field tag has the form ``<position>:<length>``, both parts base-10
non-negative integers with no sign, whitespace or digit separators::

    "1:5"   -> position 1, at most 5 bytes
    "12:0"  -> position 12, always emitted empty
"""

from __future__ import annotations

import re
from typing import Final

from ..const import TAG_SEPARATOR
from ..errors import InvalidLengthError, InvalidPositionError, MalformedMetadataError

# int() would also accept "+1", " 1", "1_0" and non-ASCII digits.
_DIGITS: Final[re.Pattern[str]] = re.compile(r"[0-9]+")


def _parse_unsigned(part: str) -> int | None:
    if _DIGITS.fullmatch(part) is None:
        return None
    return int(part)


def parse_tag(tag: str) -> tuple[int, int]:
    """Parse a field tag into ``(position, length)``.

    Raises:
        MalformedMetadataError: if the tag is not exactly two parts.
        InvalidPositionError: if the position is not a non-negative integer.
        InvalidLengthError: if the length is not a non-negative integer.
    """
    parts = tag.split(TAG_SEPARATOR)
    if len(parts) != 2:
        raise MalformedMetadataError(
            f"expected '<position>{TAG_SEPARATOR}<length>', got {tag!r}", tag=tag
        )

    position = _parse_unsigned(parts[0])
    if position is None:
        raise InvalidPositionError(f"position must be numeric, got {parts[0]!r}", tag=tag)

    length = _parse_unsigned(parts[1])
    if length is None:
        raise InvalidLengthError(f"length must be numeric, got {parts[1]!r}", tag=tag)

    return position, length


def format_tag(position: int, length: int) -> str:
    """Build the tag string for ``position`` and ``length``."""
    if position < 0 or length < 0:
        raise ValueError(f"position and length must be non-negative, got {position}, {length}")
    return f"{position}{TAG_SEPARATOR}{length}"


__all__ = ["parse_tag", "format_tag"]
