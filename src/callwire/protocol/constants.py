"""Wire constants for the call envelope."""

from __future__ import annotations

import struct

# ── Integer fields ─────────────────────────────────────────────────
# Counts and lengths are signed 32-bit big-endian integers.
INT_FORMAT = '>i'
INT_STRUCT = struct.Struct(INT_FORMAT)
INT_SIZE = INT_STRUCT.size  # 4

MAX_INT32 = 2**31 - 1

# ── Envelope layout ────────────────────────────────────────────────
# request        := parameterCount:int32 parameterBlock*
# parameterBlock := length:int32 payload:byte[length]
# response       := raw codec bytes (no framing)
HEADER_SIZE = INT_SIZE
