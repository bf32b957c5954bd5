"""Growable byte buffer used as both encoder sink and decoder source.

Writes append at the tail; reads consume from the head via a cursor over
a memoryview, so decoding does not copy the underlying storage.
"""

from __future__ import annotations

from ..exc import BufferUnderflowError
from .constants import INT_STRUCT, INT_SIZE


class ByteBuffer:
    """Append-only byte sink with a consuming read cursor."""

    def __init__(self, data: bytes | bytearray = b'') -> None:
        self._buf = bytearray(data)
        self._pos = 0

    def __len__(self) -> int:
        return len(self._buf) - self._pos

    def __repr__(self) -> str:
        return f"ByteBuffer(size={len(self)})"

    @property
    def size(self) -> int:
        """Number of unread bytes."""
        return len(self)

    def exhausted(self) -> bool:
        return self._pos >= len(self._buf)

    # ── Sink ───────────────────────────────────────────────────────

    def write(self, data: bytes | bytearray | memoryview) -> None:
        self._buf += data

    def write_byte(self, b: int) -> None:
        self._buf.append(b & 0xFF)

    def write_int(self, value: int) -> None:
        """Append a 4-byte big-endian signed integer."""
        self._buf += INT_STRUCT.pack(value)

    # ── Source ─────────────────────────────────────────────────────

    def _require(self, n: int) -> None:
        available = len(self)
        if n > available:
            raise BufferUnderflowError(
                f"Need {n} bytes, only {available} available"
            )

    def read_byte(self) -> int:
        self._require(1)
        b = self._buf[self._pos]
        self._pos += 1
        return b

    def read(self, n: int) -> bytes:
        if n < 0:
            raise BufferUnderflowError(f"Negative read length: {n}")
        self._require(n)
        with memoryview(self._buf) as view:
            result = bytes(view[self._pos:self._pos + n])
        self._pos += n
        return result

    def read_int(self) -> int:
        self._require(INT_SIZE)
        (value,) = INT_STRUCT.unpack_from(self._buf, self._pos)
        self._pos += INT_SIZE
        return value

    def read_all(self) -> bytes:
        """Return every unread byte and leave the buffer empty."""
        with memoryview(self._buf) as view:
            result = bytes(view[self._pos:])
        self.clear()
        return result

    def clear(self) -> None:
        self._buf = bytearray()
        self._pos = 0
