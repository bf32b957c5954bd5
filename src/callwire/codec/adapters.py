"""Built-in adapters for common Python values.

Fixed-width numbers use big-endian struct formats. Variable-width values
(str, bytes, json) consume the rest of the source, since every value is
carried in its own bounded span (a parameter block or a whole response).
"""

from __future__ import annotations

import json
import struct
from typing import Any

from ..exc import EncodeError, DecodeError
from ..protocol.buffer import ByteBuffer


class UnitAdapter:
    """``None``, encoded as zero bytes."""

    name = 'unit'

    def encode(self, value: Any, sink: ByteBuffer) -> None:
        if value is not None:
            raise EncodeError(f"unit expects None, got {type(value).__name__}")

    def decode(self, source: ByteBuffer) -> None:
        return None


class BoolAdapter:
    name = 'bool'

    def encode(self, value: Any, sink: ByteBuffer) -> None:
        if not isinstance(value, bool):
            raise EncodeError(f"bool expects bool, got {type(value).__name__}")
        sink.write_byte(1 if value else 0)

    def decode(self, source: ByteBuffer) -> bool:
        b = source.read_byte()
        if b not in (0, 1):
            raise DecodeError(f"Invalid bool byte: {b}")
        return b == 1


class StructAdapter:
    """A single fixed-width number packed with :mod:`struct`."""

    def __init__(self, name: str, fmt: str, python_type: type) -> None:
        self.name = name
        self.python_type = python_type
        self._struct = struct.Struct(f'>{fmt}')

    def encode(self, value: Any, sink: ByteBuffer) -> None:
        # bool is an int subclass; keep the two tags distinct
        if isinstance(value, bool) or not isinstance(value, self.python_type):
            raise EncodeError(
                f"{self.name} expects {self.python_type.__name__}, "
                f"got {type(value).__name__}"
            )
        try:
            sink.write(self._struct.pack(value))
        except (struct.error, OverflowError) as exc:
            raise EncodeError(f"Cannot encode {value!r} as {self.name}: {exc}") from exc

    def decode(self, source: ByteBuffer) -> Any:
        (value,) = self._struct.unpack(source.read(self._struct.size))
        return value


class FloatAdapter(StructAdapter):
    def __init__(self) -> None:
        super().__init__('float', 'd', float)

    def encode(self, value: Any, sink: ByteBuffer) -> None:
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                value = float(value)
            except OverflowError as exc:
                raise EncodeError(f"Cannot encode {value!r} as float: {exc}") from exc
        super().encode(value, sink)


class StrAdapter:
    """UTF-8 text, no length prefix."""

    name = 'str'

    def encode(self, value: Any, sink: ByteBuffer) -> None:
        if not isinstance(value, str):
            raise EncodeError(f"str expects str, got {type(value).__name__}")
        try:
            sink.write(value.encode('utf-8'))
        except UnicodeEncodeError as exc:
            raise EncodeError(f"Cannot encode string as UTF-8: {exc}") from exc

    def decode(self, source: ByteBuffer) -> str:
        raw = source.read_all()
        try:
            return raw.decode('utf-8')
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Invalid UTF-8 in str value: {exc}") from exc


class BytesAdapter:
    name = 'bytes'

    def encode(self, value: Any, sink: ByteBuffer) -> None:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise EncodeError(f"bytes expects bytes, got {type(value).__name__}")
        sink.write(value)

    def decode(self, source: ByteBuffer) -> bytes:
        return source.read_all()


class JsonAdapter:
    """Any JSON-serializable value, as a UTF-8 JSON document."""

    name = 'json'

    def encode(self, value: Any, sink: ByteBuffer) -> None:
        try:
            text = json.dumps(value, separators=(',', ':'))
        except (TypeError, ValueError) as exc:
            raise EncodeError(f"Cannot encode value as JSON: {exc}") from exc
        sink.write(text.encode('utf-8'))

    def decode(self, source: ByteBuffer) -> Any:
        raw = source.read_all()
        try:
            return json.loads(raw.decode('utf-8'))
        except (UnicodeDecodeError, ValueError) as exc:
            raise DecodeError(f"Invalid JSON value: {exc}") from exc


def int_adapter() -> StructAdapter:
    """64-bit signed integer."""
    return StructAdapter('int', 'q', int)
