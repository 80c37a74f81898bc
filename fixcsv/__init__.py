"""fixcsv: fixed-position, length-bounded record lines from typed data."""

__version__ = "1.0.0"

from .config import EncoderConfig, load_config, load_config_file
from .encoder import Encoder, encode_value, marshal
from .errors import (
    ConfigError,
    CustomRenderError,
    FixcsvError,
    InvalidLengthError,
    InvalidPositionError,
    MalformedMetadataError,
    MetadataError,
    SinkWriteError,
    UnsupportedTypeError,
)
from .protocol.structures import (
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    TextMarshaler,
    tag,
)
from .protocol.tags import parse_tag

__all__ = [
    "__version__",
    "ConfigError",
    "CustomRenderError",
    "Encoder",
    "EncoderConfig",
    "FixcsvError",
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "InvalidLengthError",
    "InvalidPositionError",
    "MalformedMetadataError",
    "MetadataError",
    "SinkWriteError",
    "TextMarshaler",
    "UnsupportedTypeError",
    "encode_value",
    "load_config",
    "load_config_file",
    "marshal",
    "parse_tag",
    "tag",
]
