# =============================================================================
# frame_writer.py — ttyrec Stream Encoder
# =============================================================================
#
# Rebuilds a ttyrec byte stream from the editable form of a session: one
# (delay_text, data_text) row per frame, in playback order.
#
# Absolute timestamps are NOT stored in the editable rows. They are
# re-derived at save time by accumulating each row's delay onto the session's
# baseline timestamp:
#
#   sec, usec = start_sec, start_usec
#   for each row:
#       delay_sec, delay_usec = split_delay(row.delay)
#       sec  += delay_sec
#       usec += delay_usec
#       while usec > 1_000_000:          ← strictly greater-than
#           sec  += 1
#           usec -= 1_000_000
#       emit  sec | usec | len(payload) | payload
#
# The carry test is ">" and not ">=": a running usec of exactly 1,000,000 is
# written as-is. Existing recordings saved by the browser editor carry that
# value, and re-saving them must stay byte-identical.
#
# Payload text:
#   "\x1b\x5b\x48" → b"\x1b[H". Groups of 4 characters, each "\x" + 2 hex
#   digits. Hex digits are accepted in either case; output is lowercase.
# =============================================================================

from __future__ import annotations
import math
import re
from typing import Iterable, NamedTuple

from TREC.FMM.constants import (
    DELAY_TEXT_FORMAT,
    ESCAPE_GROUP_SIZE, ESCAPE_PREFIX,
    USEC_CARRY_LIMIT, USEC_PER_SEC,
)
from TREC.FMM.dword import append_uint32_le
from TREC.errors import (
    FrameEncodeError,
    InvalidDelayTextError,
    MalformedPayloadEncodingError,
)

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

# ASCII decimal or exponent notation only; float() alone also takes "1_0".
_DELAY_RE = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


class EditableFrame(NamedTuple):
    delay_text: str    # decimal seconds since the previous frame
    data_text:  str    # payload as concatenated \xNN escapes


# ── Delay text ───────────────────────────────────────────────────────────────

def format_delay(delay: float) -> str:
    """Render a decoded delay for editing, e.g. 0.1 → "0.100000"."""
    return DELAY_TEXT_FORMAT % delay


def parse_delay_text(text: str, index: int | None = None) -> float:
    """Parse a delay cell. Rejects empty, non-numeric, NaN and infinite text."""
    if not isinstance(text, str) or not _DELAY_RE.fullmatch(text.strip()):
        raise InvalidDelayTextError(f"invalid delay {text!r}", index, text)
    value = float(text.strip())
    if not math.isfinite(value):
        raise InvalidDelayTextError(f"delay must be finite, got {text!r}", index, text)
    return value


def split_delay(delay: float) -> tuple[int, int]:
    """
    Split a delay in seconds into (whole seconds, microseconds).

    The delay is first rounded to the nearest microsecond so that values
    such as 7e-06 (stored as 6.999…e-06) keep their last microsecond. Both
    parts truncate toward zero, so a negative delay yields two non-positive
    parts.
    """
    total   = int(round(delay * USEC_PER_SEC))
    seconds = abs(total) // USEC_PER_SEC
    if total < 0:
        seconds = -seconds
    return seconds, total - seconds * USEC_PER_SEC


# ── Payload text ─────────────────────────────────────────────────────────────

def encode_payload_text(payload: bytes) -> str:
    """Render payload bytes as lowercase \\xNN escapes."""
    return "".join(f"{ESCAPE_PREFIX}{b:02x}" for b in payload)


def decode_payload_text(text: str, index: int | None = None) -> bytes:
    """
    Parse a data cell back into raw bytes.

    Raises:
        MalformedPayloadEncodingError: length is not a multiple of 4, or a
                                        group is not "\\x" + two hex digits.
    """
    if not isinstance(text, str):
        raise MalformedPayloadEncodingError(
            f"payload text must be a string, got {type(text).__name__}",
            index, text,
        )
    if len(text) % ESCAPE_GROUP_SIZE:
        raise MalformedPayloadEncodingError(
            f"payload text length {len(text)} is not a multiple of "
            f"{ESCAPE_GROUP_SIZE}", index, text,
        )

    out = bytearray()
    for pos in range(0, len(text), ESCAPE_GROUP_SIZE):
        group  = text[pos:pos + ESCAPE_GROUP_SIZE]
        prefix = group[:2]
        digits = group[2:]
        if prefix.lower() != ESCAPE_PREFIX or not set(digits) <= _HEX_DIGITS:
            raise MalformedPayloadEncodingError(
                f"bad escape {group!r} at character {pos}", index, text,
            )
        out.append(int(digits, 16))
    return bytes(out)


# ── Session ↔ editable rows ──────────────────────────────────────────────────

def to_editable(session) -> list[EditableFrame]:
    """Editable rows for a decoded Session, one per frame, unmodified."""
    return [
        EditableFrame(format_delay(f.delay), encode_payload_text(f.payload))
        for f in session.frames
    ]


def serialize(
    start_seconds:      int,
    start_microseconds: int,
    edited_frames:      Iterable[EditableFrame],
) -> bytes:
    """
    Encode editable rows into a ttyrec byte stream.

    Args:
        start_seconds:      baseline seconds (the decoded session's start).
        start_microseconds: baseline microseconds.
        edited_frames:      rows in playback order. Plain (delay_text,
                            data_text) tuples are accepted as well.

    Returns:
        The complete stream. Nothing precedes or follows the records.

    Raises:
        FrameEncodeError: a row is not a (delay_text, data_text) pair.
        InvalidDelayTextError, MalformedPayloadEncodingError: the first
        malformed row aborts the whole call.
    """
    out  = bytearray()
    sec  = start_seconds
    usec = start_microseconds

    for index, row in enumerate(edited_frames):
        try:
            if isinstance(row, str):
                raise ValueError
            delay_text, data_text = row
        except (TypeError, ValueError):
            raise FrameEncodeError(
                "row must hold exactly (delay_text, data_text)", index,
            ) from None
        delay_sec, delay_usec = split_delay(parse_delay_text(delay_text, index))
        payload = decode_payload_text(data_text, index)

        sec  += delay_sec
        usec += delay_usec
        while usec > USEC_CARRY_LIMIT:
            sec  += 1
            usec -= USEC_PER_SEC

        append_uint32_le(out, sec)
        append_uint32_le(out, usec)
        append_uint32_le(out, len(payload))
        out += payload

    return bytes(out)
