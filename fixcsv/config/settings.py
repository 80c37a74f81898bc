"""Settings loader for the fixcsv encoder.

Configuration comes from keyword overrides (for example CLI flags) layered
over an optional TOML file::

    [fixcsv]
    delimiter = "||"
    strict = false
    debug = true
"""

from __future__ import annotations

import dataclasses
import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from marshmallow import ValidationError

from ..const import CONFIG_TABLE
from ..errors import ConfigError
from .model import EncoderConfig
from .schema import EncoderConfigSchema

logger = logging.getLogger(__name__)


def get_default_config() -> dict[str, Any]:
    """Default configuration values, derived from ``EncoderConfig`` fields."""
    return {field.name: field.default for field in dataclasses.fields(EncoderConfig)}


def load_config(overrides: Mapping[str, Any] | None = None) -> EncoderConfig:
    """Validate ``overrides`` and build an :class:`EncoderConfig`.

    Keys with a ``None`` value are ignored so unset CLI flags keep defaults.

    Raises:
        ConfigError: if validation fails.
    """
    raw = get_default_config()
    if overrides:
        raw.update({key: value for key, value in overrides.items() if value is not None})

    try:
        config: EncoderConfig = EncoderConfigSchema().load(raw)
    except ValidationError as exc:
        raise ConfigError(f"invalid fixcsv configuration: {exc.messages}") from exc

    logger.debug("Loaded encoder configuration: %s", config)
    return config


def load_config_file(path: str | Path, overrides: Mapping[str, Any] | None = None) -> EncoderConfig:
    """Load the ``[fixcsv]`` table of a TOML file, then apply ``overrides``.

    Raises:
        ConfigError: if the file cannot be read or parsed, or fails validation.
    """
    config_path = Path(path)
    try:
        document = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"cannot read configuration file {config_path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"malformed configuration file {config_path}: {exc}") from exc

    table = document.get(CONFIG_TABLE, {})
    if not isinstance(table, dict):
        raise ConfigError(f"[{CONFIG_TABLE}] in {config_path} must be a table")

    merged: dict[str, Any] = dict(table)
    if overrides:
        merged.update({key: value for key, value in overrides.items() if value is not None})
    return load_config(merged)


__all__ = ["get_default_config", "load_config", "load_config_file"]
