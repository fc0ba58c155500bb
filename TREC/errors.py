# =============================================================================
# errors.py — ttyrec Codec Error Taxonomy
# =============================================================================
#
#   TTYRecError (ValueError)
#   ├── FrameDecodeError              parse() of a byte buffer
#   │   ├── EmptyStreamError          zero-length input
#   │   ├── TruncatedFrameError       declared payload runs past end of buffer
#   │   └── MisalignedStreamError     end of buffer is not a frame boundary
#   └── FrameEncodeError              serialize() of editable rows
#       ├── MalformedPayloadEncodingError   data text is not \xNN groups
#       └── InvalidDelayTextError           delay text is not a number
#
# All of them are fatal to the call that raised them. Nothing is retried and
# no partial Session or partial byte buffer is ever returned.
# =============================================================================

from __future__ import annotations


class TTYRecError(ValueError):
    """Base class for every malformed-content error raised by TREC."""


# ── Decode ───────────────────────────────────────────────────────────────────

class FrameDecodeError(TTYRecError):
    """A byte buffer could not be parsed as a ttyrec stream."""

    def __init__(self, message: str, offset: int | None = None,
                 frame_index: int | None = None) -> None:
        super().__init__(message)
        self.offset      = offset
        self.frame_index = frame_index


class EmptyStreamError(FrameDecodeError):
    def __init__(self) -> None:
        super().__init__("empty stream: a ttyrec file needs at least one frame",
                         offset=0, frame_index=None)


class TruncatedFrameError(FrameDecodeError):
    """A frame header claims more payload bytes than remain in the buffer."""

    def __init__(self, frame_index: int, offset: int, declared: int,
                 available: int) -> None:
        super().__init__(
            f"truncated frame #{frame_index} at offset {offset}: header declares "
            f"{declared} payload bytes but only {available} remain",
            offset=offset, frame_index=frame_index,
        )
        self.declared  = declared
        self.available = available


class MisalignedStreamError(FrameDecodeError):
    """Trailing bytes too short to hold a 12-byte frame header."""

    def __init__(self, frame_index: int, offset: int, remaining: int) -> None:
        super().__init__(
            f"misaligned frame boundary at offset {offset}: {remaining} trailing "
            f"byte(s) cannot hold frame #{frame_index}'s header",
            offset=offset, frame_index=frame_index,
        )
        self.remaining = remaining


# ── Encode ───────────────────────────────────────────────────────────────────

class FrameEncodeError(TTYRecError):
    """An editable row could not be turned back into a ttyrec record."""

    def __init__(self, message: str, frame_index: int | None = None,
                 text: str | None = None) -> None:
        if frame_index is not None:
            message = f"row {frame_index}: {message}"
        super().__init__(message)
        self.frame_index = frame_index
        self.text        = text


class MalformedPayloadEncodingError(FrameEncodeError):
    pass


class InvalidDelayTextError(FrameEncodeError):
    pass
