"""Configuration helpers for the fixcsv encoder."""

from .model import DEFAULT_CONFIG, EncoderConfig
from .settings import get_default_config, load_config, load_config_file

__all__ = [
    "DEFAULT_CONFIG",
    "EncoderConfig",
    "get_default_config",
    "load_config",
    "load_config_file",
]
