#!/usr/bin/env python3
# =============================================================================
# validate.py — TREC Self-Validation Suite
# =============================================================================
#
# Run directly:  python -m TREC.FVM.validate
#             or python TREC/FVM/validate.py (from project root)
#
# Tests:
#   1. Constants integrity   — header layout adds up, defaults parse
#   2. DWORD primitives      — little-endian layout, 32-bit wrap
#   3. Decoder               — delays, payload slicing, malformed streams
#   4. Encoder               — carry boundary, payload escapes, bad rows
#   5. Round trip            — parse → editable → serialize is byte-exact
# =============================================================================

import sys
import os

# Allow running from project root without installing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from TREC.FMM.constants import (
    DWORD_SIZE, HEADER_SIZE,
    SECONDS_OFFSET, MICROSECONDS_OFFSET, LENGTH_OFFSET,
    DEFAULT_DELAY_TEXT, ESCAPE_GROUP_SIZE, ESCAPE_PREFIX,
)
from TREC.FMM.dword import decode_uint32_le, encode_uint32_le
from TREC.FGM.frame_writer import (
    EditableFrame, decode_payload_text, encode_payload_text,
    parse_delay_text, serialize, to_editable,
)
from TREC.FVM.frame_parser import parse
from TREC.errors import (
    EmptyStreamError, InvalidDelayTextError, MalformedPayloadEncodingError,
    MisalignedStreamError, TruncatedFrameError,
)

PASS = "[PASS]"
FAIL = "[FAIL]"
INFO = "[INFO]"

failures = 0

def check(label: str, condition: bool, detail: str = "") -> bool:
    global failures
    if condition:
        print(f"  {PASS} {label}")
    else:
        print(f"  {FAIL} {label}{(' -- ' + detail) if detail else ''}")
        failures += 1
    return condition


def raises(exc_type, fn, *args) -> bool:
    try:
        fn(*args)
    except exc_type:
        return True
    except Exception:
        return False
    return False


def record(sec: int, usec: int, payload: bytes) -> bytes:
    return (encode_uint32_le(sec) + encode_uint32_le(usec)
            + encode_uint32_le(len(payload)) + payload)


# =============================================================================
# TEST 1 — Constants Integrity
# =============================================================================
print("\n" + "="*60)
print("TEST 1 — Constants Integrity")
print("="*60)

check("DWORD_SIZE = 4",                DWORD_SIZE == 4)
check("HEADER_SIZE = 3 * DWORD_SIZE",  HEADER_SIZE == 3 * DWORD_SIZE)
check("Header offsets are contiguous",
      (SECONDS_OFFSET, MICROSECONDS_OFFSET, LENGTH_OFFSET) == (0, 4, 8))
check("Escape group = prefix + 2 hex digits",
      ESCAPE_GROUP_SIZE == len(ESCAPE_PREFIX) + 2)
check("Default delay text parses to 0.1",
      parse_delay_text(DEFAULT_DELAY_TEXT) == 0.1)


# =============================================================================
# TEST 2 — DWORD Primitives
# =============================================================================
print("\n" + "="*60)
print("TEST 2 — DWORD Primitives")
print("="*60)

check("encode 1 → 01 00 00 00",        encode_uint32_le(1) == b"\x01\x00\x00\x00")
check("encode 0x12345678 is LE",       encode_uint32_le(0x12345678) == b"\x78\x56\x34\x12")
check("encode 2**32 wraps to 0",       encode_uint32_le(2 ** 32) == b"\x00" * 4)
check("encode -1 wraps to FF FF FF FF", encode_uint32_le(-1) == b"\xff" * 4)
check("decode at offset",
      decode_uint32_le(b"\x00\x00\xff\xff\xff\xff", 2) == 0xFFFFFFFF)


# =============================================================================
# TEST 3 — Decoder
# =============================================================================
print("\n" + "="*60)
print("TEST 3 — Decoder")
print("="*60)

stream  = record(10, 0, b"ab") + record(10, 500_000, b"") + record(9, 0, b"c")
session = parse(stream)
check("Three frames decoded",          len(session.frames) == 3)
check("Baseline = first frame",
      (session.start_seconds, session.start_microseconds) == (10, 0))
check("Frame 0 delay = 0.0",           session.frames[0].delay == 0.0)
check("Frame 1 delay = 0.5",           abs(session.frames[1].delay - 0.5) < 1e-9,
      f"got {session.frames[1].delay}")
check("Frame 1 empty payload",         session.frames[1].payload == b"")
check("Frame 2 negative delay kept",   session.frames[2].delay < 0,
      f"got {session.frames[2].delay}")

check("Empty buffer → EmptyStreamError",
      raises(EmptyStreamError, parse, b""))
check("Short payload → TruncatedFrameError",
      raises(TruncatedFrameError, parse, record(0, 0, b"abcd")[:-1]))
check("Trailing partial header → MisalignedStreamError",
      raises(MisalignedStreamError, parse, record(0, 0, b"x") + b"\x00" * 5))


# =============================================================================
# TEST 4 — Encoder
# =============================================================================
print("\n" + "="*60)
print("TEST 4 — Encoder")
print("="*60)

out = serialize(10, 999_999, [EditableFrame("0.000002", "")])
check("usec 1,000,001 carries into seconds",
      out == record(11, 1, b""), f"got {out.hex()}")

out = serialize(10, 999_999, [EditableFrame("0.000001", "")])
check("usec exactly 1,000,000 is NOT carried",
      out == record(10, 1_000_000, b""), f"got {out.hex()}")

check("Payload escapes are lowercase",
      encode_payload_text(b"\x00\xff\x1a") == "\\x00\\xff\\x1a")
check("Upper-case escapes accepted",
      decode_payload_text("\\x00\\xFF\\x1A") == b"\x00\xff\x1a")
check("Odd payload length → MalformedPayloadEncodingError",
      raises(MalformedPayloadEncodingError, decode_payload_text, "\\x0"))
check("Non-numeric delay → InvalidDelayTextError",
      raises(InvalidDelayTextError, serialize, 0, 0, [EditableFrame("soon", "")]))


# =============================================================================
# TEST 5 — Round Trip
# =============================================================================
print("\n" + "="*60)
print("TEST 5 — Round Trip")
print("="*60)

scenario = bytes.fromhex("00000000" "00000000" "02000000" "aabb")
decoded  = parse(scenario)
check("14-byte scenario: one frame, payload AA BB",
      len(decoded.frames) == 1 and decoded.frames[0].payload == b"\xaa\xbb")
rebuilt = serialize(decoded.start_seconds, decoded.start_microseconds,
                    to_editable(decoded))
check("14-byte scenario re-encodes identically", rebuilt == scenario,
      f"got {rebuilt.hex()}")

rows = [EditableFrame("0.000000", "\\x1b\\x5b\\x48"),
        EditableFrame("0.250000", ""),
        EditableFrame("0.000007", "\\x41"),
        EditableFrame("1.999999", "\\x42\\x43")]
first  = serialize(1_700_000_000, 750_000, rows)
again  = parse(first)
second = serialize(again.start_seconds, again.start_microseconds, to_editable(again))
print(f"  {INFO} Round-trip stream: {len(first)} bytes, {len(again.frames)} frames")
check("Editor rows round-trip byte-exact", first == second)


# =============================================================================
# Summary
# =============================================================================
print("\n" + "="*60)
if failures == 0:
    print(f"  ALL TESTS PASSED")
else:
    print(f"  {failures} TEST(S) FAILED")
print("="*60 + "\n")
sys.exit(0 if failures == 0 else 1)
