"""Command-line interface for fixcsv.

Encodes JSON input with a record class from an importable module::

    fixcsv myapp.records:Payment payments.json > payments.txt
    cat payment.json | fixcsv myapp.records:Payment --delimiter "|"

The input holds one JSON object or an array of objects. Output is written
to stdout without a trailing newline.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from typing import Any

import msgspec

from .config.logging import configure_logging
from .config.model import EncoderConfig
from .config.settings import load_config, load_config_file
from .encoder import Encoder
from .errors import FixcsvError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 2


def _resolve_schema(target: str) -> type:
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"schema must look like 'package.module:Class', got {target!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ValueError(f"cannot import schema module {module_name!r}: {exc}") from exc

    obj: Any = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ValueError(f"{module_name!r} has no attribute {attr!r}") from exc
    if not isinstance(obj, type):
        raise ValueError(f"{target!r} is not a class")
    return obj


def _read_input(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as fh:
        return fh.read()


def decode_records(data: bytes, schema: type) -> Any:
    """Decode JSON ``data`` into one ``schema`` instance or a list of them."""
    raw = msgspec.json.decode(data)
    if isinstance(raw, list):
        return msgspec.convert(raw, list[schema])
    return msgspec.convert(raw, schema)


def _build_config(args: argparse.Namespace) -> EncoderConfig:
    overrides = {
        "delimiter": args.delimiter,
        "strict": True if args.strict else None,
        "debug_logging": True if args.debug else None,
    }
    if args.config:
        return load_config_file(args.config, overrides)
    return load_config(overrides)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fixcsv",
        description="Encode JSON records as fixed-position, length-bounded lines.",
    )
    parser.add_argument("schema", help="Record class as 'package.module:Class'.")
    parser.add_argument("path", nargs="?", default="-", help="JSON input file or '-' for stdin.")
    parser.add_argument("--delimiter", default=None, help="Field delimiter (default '||').")
    parser.add_argument("--strict", action="store_true", help="Fail on malformed field tags.")
    parser.add_argument("--config", default=None, help="TOML file with a [fixcsv] table.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging on stderr.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)

    try:
        config = _build_config(args)
    except FixcsvError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_FAILURE
    configure_logging(config)

    try:
        schema = _resolve_schema(args.schema)
        records = decode_records(_read_input(args.path), schema)
        Encoder(sys.stdout.buffer, config).encode(records)
    except (ValueError, OSError, msgspec.DecodeError, FixcsvError) as exc:
        # msgspec.ValidationError subclasses DecodeError.
        logger.debug("Encoding failed", exc_info=True)
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
