"""Call envelope framing: count header plus length-prefixed parameter blocks."""

from __future__ import annotations

import struct
from typing import Iterable

from ..exc import FramingError
from .constants import INT_STRUCT, INT_SIZE, HEADER_SIZE, MAX_INT32


def pack_int32(value: int) -> bytes:
    """Pack a count or length field (4 bytes, big-endian)."""
    if not 0 <= value <= MAX_INT32:
        raise ValueError(f"Value out of int32 range: {value}")
    return INT_STRUCT.pack(value)


def unpack_int32(data: bytes | bytearray | memoryview, offset: int = 0) -> int:
    """Unpack a count or length field at *offset*."""
    try:
        (value,) = INT_STRUCT.unpack_from(data, offset)
    except struct.error as exc:
        raise FramingError(
            f"Truncated int32 at offset {offset} (have {len(data)} bytes)"
        ) from exc
    return value


def build_request(blocks: Iterable[bytes | bytearray]) -> bytes:
    """Assemble a request payload from already-encoded parameter blocks."""
    blocks = list(blocks)
    parts = [pack_int32(len(blocks))]
    for block in blocks:
        parts.append(pack_int32(len(block)))
        parts.append(bytes(block))
    return b''.join(parts)


def parse_request(payload: bytes | bytearray | memoryview) -> list[bytes]:
    """Split a request payload into its parameter blocks, in order.

    Raises
    ------
    FramingError
        If the count header is negative, a block is truncated, or bytes
        remain after the declared number of blocks.
    """
    view = memoryview(payload)
    count = unpack_int32(view, 0)
    if count < 0:
        raise FramingError(f"Negative parameter count: {count}")
    pos = HEADER_SIZE
    blocks: list[bytes] = []
    for i in range(count):
        length = unpack_int32(view, pos)
        pos += INT_SIZE
        if length < 0:
            raise FramingError(f"Negative length for parameter {i}: {length}")
        end = pos + length
        if end > len(view):
            raise FramingError(
                f"Parameter {i} truncated: need {length} bytes, "
                f"have {len(view) - pos}"
            )
        blocks.append(bytes(view[pos:end]))
        pos = end
    if pos != len(view):
        raise FramingError(
            f"{len(view) - pos} trailing bytes after {count} parameters"
        )
    return blocks
