"""Top-level encoding entry points.

``marshal`` returns the encoded bytes; ``Encoder`` writes them to a binary
sink. Both accept:

- ``None``: nothing is produced
- a list/tuple of records: one line per record, newline separated
- anything else: a single record (or a single renderable value)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, BinaryIO

from .config.model import DEFAULT_CONFIG, EncoderConfig
from .errors import SinkWriteError
from .protocol.encoding import encode_sequence, render_value
from .util import log_hexdump

logger = logging.getLogger(__name__)

_SCALAR_SEQUENCES = (str, bytes, bytearray, memoryview)


def _is_record_sequence(value: Any) -> bool:
    if isinstance(value, _SCALAR_SEQUENCES) or not isinstance(value, Sequence):
        return False
    # NamedTuple instances are records, not sequences of records.
    return not hasattr(type(value), "_fields")


def encode_value(value: Any, config: EncoderConfig = DEFAULT_CONFIG) -> bytes:
    """Encode ``value`` (record, sequence of records, or ``None``)."""
    if value is None:
        return b""
    if _is_record_sequence(value):
        return encode_sequence(value, config)
    return render_value(value, config)


def marshal(value: Any, config: EncoderConfig | None = None) -> bytes:
    """Return the fixcsv encoding of ``value``.

    Raises:
        UnsupportedTypeError: if a field type has no rendering rule.
        CustomRenderError: if a ``marshal_text`` implementation fails.
        MetadataError: in strict mode, if a field tag is malformed.
    """
    return encode_value(value, config or DEFAULT_CONFIG)


class Encoder:
    """Writes fixcsv lines to a binary sink.

    The sink is any object with ``write(bytes)``; ``flush()`` is called
    after each successful encode when available. Nothing is written when
    encoding fails.
    """

    def __init__(self, sink: BinaryIO, config: EncoderConfig | None = None) -> None:
        self._sink = sink
        self.config = config or DEFAULT_CONFIG

    def encode(self, value: Any) -> None:
        """Encode ``value`` and write it to the sink.

        Raises:
            SinkWriteError: if the sink rejects the write or flush.
        """
        if value is None:
            return
        data = encode_value(value, self.config)
        log_hexdump(logger, logging.DEBUG, "encoded", data)
        self._write(data)

    def _write(self, data: bytes) -> None:
        try:
            if data:
                self._sink.write(data)
            flush = getattr(self._sink, "flush", None)
            if flush is not None:
                flush()
        except (OSError, ValueError) as exc:
            logger.error("Sink rejected %d encoded bytes: %s", len(data), exc)
            raise SinkWriteError(exc) from exc


__all__ = ["Encoder", "encode_value", "marshal"]
