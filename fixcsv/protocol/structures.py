"""Record building blocks.

Records are ``msgspec.Struct`` classes (dataclasses and NamedTuples work
too) whose fields carry their position and maximum length as msgspec
metadata::

    class Payment(msgspec.Struct, frozen=True):
        account: Annotated[str, tag("1:10")]
        amount: Annotated[Float64, tag("3:12")]
        memo: Annotated[str | None, tag("2:20")] = None

Fields without a tag are never emitted. The tag must be the outermost
annotation of the field (``Annotated[str | None, tag(...)]``, not
``Annotated[str, tag(...)] | None``).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Annotated, Any, Final, Protocol, runtime_checkable

import msgspec

from ..const import DEFAULT_TAG_KEY, FLOAT_BITS_KEY
from ..errors import MetadataError
from .tags import format_tag

Renderer = Callable[[Any], bytes]


def tag(spec: str | int, length: int | None = None, *, key: str = DEFAULT_TAG_KEY) -> msgspec.Meta:
    """Return the field metadata placing a field in the output line.

    ``tag("1:5")`` and ``tag(1, 5)`` are equivalent. The string form is not
    validated here; a malformed tag excludes the field at encode time.
    """
    if length is not None:
        if not isinstance(spec, int):
            raise TypeError("tag(position, length) expects an integer position")
        spec = format_tag(spec, length)
    elif not isinstance(spec, str):
        raise TypeError("tag() expects '<position>:<length>' or (position, length)")
    return msgspec.Meta(extra={key: spec})


# --- Sized numeric aliases ---

Int8 = Annotated[int, msgspec.Meta(ge=-(2**7), le=2**7 - 1)]
Int16 = Annotated[int, msgspec.Meta(ge=-(2**15), le=2**15 - 1)]
Int32 = Annotated[int, msgspec.Meta(ge=-(2**31), le=2**31 - 1)]
Int64 = Annotated[int, msgspec.Meta(ge=-(2**63), le=2**63 - 1)]

Float32 = Annotated[float, msgspec.Meta(extra={FLOAT_BITS_KEY: 32})]
Float64 = float


@runtime_checkable
class TextMarshaler(Protocol):
    """A value that supplies its own field text.

    Takes priority over every built-in rendering rule. Returning ``str``
    is allowed; it is UTF-8 encoded.
    """

    def marshal_text(self) -> bytes | str: ...


def implements_text_marshaler(cls: type) -> bool:
    return callable(getattr(cls, "marshal_text", None))


# --- Descriptor table entries ---


class FieldSpec(msgspec.Struct, frozen=True):
    """Compiled descriptor for one tagged field of a record class.

    Exactly one of ``render`` and ``error`` is set. ``error`` is the class
    of the tag parse failure and ``reason`` its message; strict encoders
    raise a new instance per encode.
    """

    name: str
    tag: str
    position: int = -1
    length: int = -1
    render: Renderer | None = None
    error: type[MetadataError] | None = None
    reason: str = ""

    def metadata_error(self) -> MetadataError | None:
        if self.error is None:
            return None
        return self.error(self.reason, tag=self.tag)


class RenderedField(msgspec.Struct, frozen=True):
    position: int
    length: int
    value: bytes


EMPTY: Final[bytes] = b""

__all__ = [
    "Renderer",
    "tag",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Float32",
    "Float64",
    "TextMarshaler",
    "implements_text_marshaler",
    "FieldSpec",
    "RenderedField",
    "EMPTY",
]
