"""Marshmallow schema for EncoderConfig validation."""

from __future__ import annotations

from typing import Any, Dict

from marshmallow import Schema, ValidationError, fields, post_load, pre_load, validate, validates_schema

from ..const import DEFAULT_DEBUG_LOGGING, DEFAULT_DELIMITER, DEFAULT_STRICT, DEFAULT_TAG_KEY
from .model import EncoderConfig

_LINE_BREAKS = ("\n", "\r")


class EncoderConfigSchema(Schema):
    """Declarative validation schema for encoder configuration."""

    delimiter = fields.Str(load_default=DEFAULT_DELIMITER, validate=validate.Length(min=1))
    strict = fields.Bool(load_default=DEFAULT_STRICT)
    tag_key = fields.Str(load_default=DEFAULT_TAG_KEY, validate=validate.Length(min=1))
    debug_logging = fields.Bool(load_default=DEFAULT_DEBUG_LOGGING)

    @pre_load
    def map_debug_alias(self, data: Dict[str, Any], **kwargs: Any) -> Dict[str, Any]:
        # 'debug' is accepted as a short alias for 'debug_logging'.
        if "debug" in data:
            data = dict(data)
            data["debug_logging"] = data.pop("debug")
        return data

    @validates_schema
    def validate_delimiter(self, data: Dict[str, Any], **kwargs: Any) -> None:
        delimiter = data.get("delimiter", DEFAULT_DELIMITER)
        if any(ch in delimiter for ch in _LINE_BREAKS):
            raise ValidationError(
                "delimiter must not contain line breaks; records are newline separated",
                field_name="delimiter",
            )

    @post_load
    def make_config(self, data: Dict[str, Any], **kwargs: Any) -> EncoderConfig:
        return EncoderConfig(**data)
