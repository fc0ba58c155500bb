# =============================================================================
# dword.py — Little-endian 32-bit Word Primitives
# =============================================================================
#
# Leaf dependency of the whole codec. Every header field in a ttyrec record is
# an unsigned 32-bit little-endian word ("DWORD").
#
# Reads do NOT bounds-check: callers must guarantee offset + 4 <= len(buffer).
# The frame parser validates every header before reading it, so a short read
# here is always a caller bug and surfaces as struct.error.
#
# Writes mask to 32 bits first, which is the same as keeping the low byte of
# the value four times over (value & 0xFF, value >>= 8).
# =============================================================================

from __future__ import annotations
import struct

from TREC.FMM.constants import DWORD_FORMAT, DWORD_MASK

_DWORD = struct.Struct(DWORD_FORMAT)


def decode_uint32_le(buffer, offset: int) -> int:
    """Read the unsigned little-endian word at ``buffer[offset:offset+4]``."""
    return _DWORD.unpack_from(buffer, offset)[0]


def encode_uint32_le(value: int) -> bytes:
    """
    Pack ``value`` as 4 little-endian bytes.

    Out-of-range values (negative, or >= 2**32) wrap modulo 2**32 rather than
    raising, so garbage timestamps still produce a 12-byte header.
    """
    return _DWORD.pack(value & DWORD_MASK)


def append_uint32_le(out: bytearray, value: int) -> None:
    """Append ``value`` to ``out`` as a little-endian word."""
    out += _DWORD.pack(value & DWORD_MASK)
