# =============================================================================
# frame_parser.py — ttyrec Stream Decoder
# =============================================================================
#
# Turns a complete, already-read byte buffer into a Session: the baseline
# timestamp plus an ordered list of decoded frames.
#
# Delay model:
#   The first frame's own timestamp is the baseline, so frame #0 always has a
#   delay of 0.0. Every later frame's delay is measured from its predecessor:
#
#       delay = (sec - prev_sec) + (usec - prev_usec) * 0.000001
#
#   The subtraction is done on Python ints, so a stream whose clock goes
#   backwards yields a NEGATIVE delay. That is surfaced, never rejected.
#
# Bounds:
#   Every header and payload is bounds-checked before it is read. A short
#   buffer raises one of the FrameDecodeError subclasses instead of returning
#   a short payload.
# =============================================================================

from __future__ import annotations
from typing import NamedTuple

from TREC.FMM.constants import (
    HEADER_SIZE,
    SECONDS_OFFSET, MICROSECONDS_OFFSET, LENGTH_OFFSET,
    USEC_TO_SEC,
)
from TREC.FMM.dword import decode_uint32_le
from TREC.errors import (
    EmptyStreamError,
    MisalignedStreamError,
    TruncatedFrameError,
)


class Frame(NamedTuple):
    seconds:      int      # absolute Unix seconds (uint32)
    microseconds: int      # sub-second offset (uint32, not range-checked)
    delay:        float    # seconds since previous frame (derived)
    payload:      bytes    # raw terminal output

    @property
    def size(self) -> int:
        return len(self.payload)


class Session(NamedTuple):
    start_seconds:      int
    start_microseconds: int
    frames:             list[Frame]

    @property
    def duration(self) -> float:
        """Playback length in seconds (sum of all frame delays)."""
        return sum(f.delay for f in self.frames)

    def to_editable(self):
        """Return the unmodified editable rows for this session."""
        from TREC.FGM.frame_writer import to_editable
        return to_editable(self)


def parse(buffer) -> Session:
    """
    Parse a whole ttyrec byte buffer.

    Args:
        buffer: bytes, bytearray or memoryview holding the entire file.

    Returns:
        Session with one Frame per record, in stream order.

    Raises:
        EmptyStreamError:      buffer is zero-length.
        MisalignedStreamError: fewer than 12 bytes left where a header
                               should start.
        TruncatedFrameError:   a header declares more payload bytes than
                               the buffer still holds.
    """
    data   = bytes(buffer)
    length = len(data)

    if length == 0:
        raise EmptyStreamError()
    if length < HEADER_SIZE:
        raise MisalignedStreamError(frame_index=0, offset=0, remaining=length)

    # Baseline comes from the first header but is NOT consumed: the first
    # frame is still read by the main loop below.
    start_sec  = decode_uint32_le(data, SECONDS_OFFSET)
    start_usec = decode_uint32_le(data, MICROSECONDS_OFFSET)

    prev_sec, prev_usec = start_sec, start_usec
    frames: list[Frame] = []
    offset = 0

    while offset < length:
        index     = len(frames)
        remaining = length - offset

        if remaining < HEADER_SIZE:
            raise MisalignedStreamError(index, offset, remaining)

        sec  = decode_uint32_le(data, offset + SECONDS_OFFSET)
        usec = decode_uint32_le(data, offset + MICROSECONDS_OFFSET)
        size = decode_uint32_le(data, offset + LENGTH_OFFSET)

        start = offset + HEADER_SIZE
        end   = start + size
        if end > length:
            raise TruncatedFrameError(index, offset, size, length - start)

        delay = (sec - prev_sec) + (usec - prev_usec) * USEC_TO_SEC
        frames.append(Frame(sec, usec, delay, data[start:end]))

        prev_sec, prev_usec = sec, usec
        offset = end

    return Session(start_sec, start_usec, frames)
