"""Encoding engine: tags, renderers and line assembly."""

from .encoding import compile_schema, encode_record, encode_sequence, render_value
from .line import join_fields, join_lines
from .structures import (
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    TextMarshaler,
    tag,
)
from .tags import format_tag, parse_tag
from . import encoding, line, structures, tags

__all__ = [
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "TextMarshaler",
    "compile_schema",
    "encode_record",
    "encode_sequence",
    "format_tag",
    "join_fields",
    "join_lines",
    "parse_tag",
    "render_value",
    "tag",
    "encoding",
    "line",
    "structures",
    "tags",
]
