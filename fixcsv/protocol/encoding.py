"""Value rendering and record encoding.

A renderer is compiled once per declared type from ``msgspec.inspect``
type information and applied to each value of that type. Dispatch order:

1. types implementing ``marshal_text`` (``TextMarshaler``)
2. ``T | None``: ``None`` is empty, anything else uses the ``T`` renderer;
   ``Any`` and wider unions dispatch on the runtime type of the value
3. records (Struct, dataclass, NamedTuple), encoded as one sub-line
4. ``str``, ``int``, ``float`` and ``Float32``
5. ``None``
6. everything else raises ``UnsupportedTypeError`` when rendered

Per-record descriptor tables are cached per (record class, config).
"""

from __future__ import annotations

import dataclasses
import logging
import math
from collections.abc import Sequence
from decimal import Decimal
from functools import lru_cache
from typing import Annotated, Any, Final, get_origin, get_type_hints

import msgspec
import msgspec.inspect as mi
from construct import ConstructError, Float32b  # type: ignore

from ..config.model import EncoderConfig
from ..const import FLOAT_BITS_KEY, TEXT_ENCODING
from ..errors import CustomRenderError, MalformedMetadataError, MetadataError, UnsupportedTypeError
from .line import join_fields, join_lines
from .structures import EMPTY, FieldSpec, RenderedField, Renderer, implements_text_marshaler
from .tags import parse_tag

logger = logging.getLogger(__name__)

_RECORD_TYPES: Final = (mi.StructType, mi.DataclassType, mi.NamedTupleType)


def _unwrap(t: mi.Type) -> tuple[mi.Type, dict[str, Any]]:
    """Strip ``Metadata`` wrappers, merging their ``extra`` dicts."""
    extra: dict[str, Any] = {}
    while isinstance(t, mi.Metadata):
        if t.extra:
            extra.update(t.extra)
        t = t.type
    return t, extra


def _type_name(t: mi.Type) -> str:
    cls = getattr(t, "cls", None)
    if isinstance(cls, type):
        return cls.__name__
    name = type(t).__name__
    if name.endswith("Type"):
        name = name[: -len("Type")]
    return name.lower()


def _value_type_name(value: Any) -> str:
    return type(value).__name__


def _type_info(tp: Any) -> mi.Type:
    try:
        return mi.type_info(tp)
    except (TypeError, NameError) as exc:
        # msgspec rejects some annotations outright (Callable fields, unions
        # of several Struct types) and fails on unresolved forward references.
        raise UnsupportedTypeError(getattr(tp, "__name__", repr(tp))) from exc


def _record_field_names(cls: Any) -> tuple[str, ...] | None:
    """Attribute names of a record class in declaration order, else None."""
    if not isinstance(cls, type):
        return None
    if issubclass(cls, msgspec.Struct):
        return cls.__struct_fields__
    if dataclasses.is_dataclass(cls):
        return tuple(field.name for field in dataclasses.fields(cls))
    if issubclass(cls, tuple) and hasattr(cls, "_fields"):
        return tuple(cls._fields)
    return None


def _record_hints(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls, include_extras=True)
    except (TypeError, NameError) as exc:
        raise UnsupportedTypeError(cls.__name__) from exc


def _annotation_tag(hint: Any, key: str) -> Any:
    """The tag stored under ``key`` in the outermost ``Annotated`` metadata."""
    if get_origin(hint) is not Annotated:
        return None
    extra: dict[str, Any] = {}
    for meta in hint.__metadata__:
        if isinstance(meta, msgspec.Meta) and meta.extra:
            extra.update(meta.extra)
    return extra.get(key)


# --- Scalar renderers ---


def _render_nil(value: Any) -> bytes:
    return EMPTY


def _render_text_marshaler(value: Any) -> bytes:
    try:
        text = value.marshal_text()
    except Exception as exc:
        raise CustomRenderError(_value_type_name(value), exc) from exc
    if isinstance(text, str):
        return text.encode(TEXT_ENCODING)
    return bytes(text)


def _render_str(value: Any) -> bytes:
    if not isinstance(value, str):
        raise UnsupportedTypeError(_value_type_name(value))
    return value.encode(TEXT_ENCODING)


def _render_int(value: Any) -> bytes:
    if isinstance(value, bool) or not isinstance(value, int):
        raise UnsupportedTypeError(_value_type_name(value))
    return str(value).encode("ascii")


def _as_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise UnsupportedTypeError(_value_type_name(value))
    return float(value)


def _format_special(value: float) -> str | None:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return None


def _format_fixed(digits: str) -> str:
    """Render a shortest-digits float string without an exponent or ``.0``."""
    text = format(Decimal(digits), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_float64(value: float) -> str:
    special = _format_special(value)
    if special is not None:
        return special
    # repr() is the shortest string that round-trips a double.
    return _format_fixed(repr(value))


def format_float32(value: float) -> str:
    special = _format_special(value)
    if special is not None:
        return special
    try:
        packed = Float32b.build(value)
    except ConstructError:
        # Rounds past FLT_MAX.
        return "+Inf" if value > 0 else "-Inf"
    single = Float32b.parse(packed)
    for precision in range(1, 10):
        candidate = f"{single:.{precision}g}"
        try:
            if Float32b.build(float(candidate)) == packed:
                return _format_fixed(candidate)
        except ConstructError:
            continue
    return _format_fixed(repr(single))


def _render_float64(value: Any) -> bytes:
    return format_float64(_as_float(value)).encode("ascii")


def _render_float32(value: Any) -> bytes:
    return format_float32(_as_float(value)).encode("ascii")


def _unknown_type_renderer(type_name: str) -> Renderer:
    def render(value: Any) -> bytes:
        raise UnsupportedTypeError(type_name)

    return render


# --- Composite renderers ---


def _optional_renderer(inner: Renderer) -> Renderer:
    def render(value: Any) -> bytes:
        if value is None:
            return EMPTY
        return inner(value)

    return render


def _dynamic_renderer(config: EncoderConfig) -> Renderer:
    def render(value: Any) -> bytes:
        return renderer_for_type(type(value), config)(value)

    return render


def _record_renderer(config: EncoderConfig) -> Renderer:
    # Resolved per value so self-referencing schemas compile lazily.
    def render(value: Any) -> bytes:
        return encode_record(value, config)

    return render


def new_value_renderer(t: mi.Type, config: EncoderConfig) -> Renderer:
    """Compile the renderer for a declared type."""
    t, extra = _unwrap(t)

    cls = getattr(t, "cls", None)
    if isinstance(cls, type) and implements_text_marshaler(cls):
        return _render_text_marshaler

    if isinstance(t, mi.NoneType):
        return _render_nil
    if isinstance(t, mi.AnyType):
        return _dynamic_renderer(config)
    if isinstance(t, mi.UnionType):
        members = [m for m in t.types if not isinstance(m, mi.NoneType)]
        if len(members) == 1:
            return _optional_renderer(new_value_renderer(members[0], config))
        return _optional_renderer(_dynamic_renderer(config))
    if isinstance(t, _RECORD_TYPES):
        return _record_renderer(config)
    if isinstance(t, mi.StrType):
        return _render_str
    if isinstance(t, mi.IntType):
        return _render_int
    if isinstance(t, mi.FloatType):
        if extra.get(FLOAT_BITS_KEY) == 32:
            return _render_float32
        return _render_float64
    return _unknown_type_renderer(_type_name(t))


@lru_cache(maxsize=None)
def renderer_for_type(tp: type, config: EncoderConfig) -> Renderer:
    """Renderer for values whose runtime type is ``tp``."""
    # Record classes are walked field by field; msgspec would inspect
    # untagged fields too.
    if not implements_text_marshaler(tp) and _record_field_names(tp) is not None:
        return _record_renderer(config)
    return new_value_renderer(_type_info(tp), config)


def render_value(value: Any, config: EncoderConfig) -> bytes:
    """Render a single value by its runtime type."""
    return renderer_for_type(type(value), config)(value)


# --- Records ---


def _field_renderer(cls: type, name: str, hint: Any, config: EncoderConfig) -> Renderer:
    try:
        info = _type_info(hint)
    except UnsupportedTypeError as exc:
        # Values still go through the runtime-type rules, so unsupported
        # ones fail when rendered.
        logger.debug("Field %s.%s renders by value type: %s", cls.__name__, name, exc)
        return _dynamic_renderer(config)
    return new_value_renderer(info, config)


@lru_cache(maxsize=None)
def compile_schema(cls: type, config: EncoderConfig) -> tuple[FieldSpec, ...]:
    """Build the descriptor table for a record class.

    Untagged fields are left out without looking at their types. Fields
    with malformed tags keep their parse failure so strict encoders can
    report it.

    Raises:
        UnsupportedTypeError: if ``cls`` is not a record type or its
            annotations cannot be resolved.
    """
    names = _record_field_names(cls)
    if names is None:
        raise UnsupportedTypeError(cls.__name__)
    hints = _record_hints(cls)

    specs: list[FieldSpec] = []
    for name in names:
        raw_tag = _annotation_tag(hints.get(name), config.tag_key)
        if raw_tag is None:
            continue
        try:
            if not isinstance(raw_tag, str):
                raise MalformedMetadataError(f"tag must be a string, got {raw_tag!r}", tag=str(raw_tag))
            position, length = parse_tag(raw_tag)
        except MetadataError as exc:
            logger.debug("Excluding field %s.%s: %s", cls.__name__, name, exc)
            specs.append(FieldSpec(name=name, tag=str(raw_tag), error=type(exc), reason=str(exc)))
            continue
        specs.append(
            FieldSpec(
                name=name,
                tag=raw_tag,
                position=position,
                length=length,
                render=_field_renderer(cls, name, hints[name], config),
            )
        )
    return tuple(specs)


def render_fields(record: Any, config: EncoderConfig) -> list[RenderedField]:
    """Render every qualifying field of ``record`` in declaration order.

    Raises:
        MetadataError: in strict mode, for the first malformed tag.
        UnsupportedTypeError, CustomRenderError: if any field fails to render.
    """
    rendered: list[RenderedField] = []
    for spec in compile_schema(type(record), config):
        if spec.render is None:
            error = spec.metadata_error()
            if config.strict and error is not None:
                raise error
            continue
        value = spec.render(getattr(record, spec.name))
        rendered.append(RenderedField(position=spec.position, length=spec.length, value=value))
    return rendered


def encode_record(record: Any, config: EncoderConfig) -> bytes:
    """Encode one record as a single delimited line."""
    return join_fields(render_fields(record, config), config.delimiter_bytes)


def encode_sequence(records: Sequence[Any], config: EncoderConfig) -> bytes:
    """Encode records in order, one line each, newline separated.

    The first failing record aborts the whole sequence.
    """
    return join_lines([render_value(record, config) for record in records])


__all__ = [
    "new_value_renderer",
    "renderer_for_type",
    "render_value",
    "compile_schema",
    "render_fields",
    "encode_record",
    "encode_sequence",
    "format_float32",
    "format_float64",
]
