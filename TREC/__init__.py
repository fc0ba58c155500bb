# =============================================================================
# Terminal Recording Editor Core (TREC)
# Runs inside Pyodide (Python-in-browser) or CPython behind the Flask bridge.
# =============================================================================
#
# ── PYTHON OWNS EVERY BYTE OF THE RECORDING ──────────────────────────────────
#
# RESPONSIBLE for (Python owns these completely):
#   - Decoding a whole .ttyrec buffer into frames with derived delays
#       Frame delay = time since the previous frame's timestamp; the first
#       frame is its own baseline, so its delay is always 0.0.
#   - Re-encoding edited rows into a byte-exact stream
#       Absolute timestamps are rebuilt from the baseline plus the running
#       sum of row delays, with the browser editor's microsecond carry rule.
#   - Reporting malformed content
#       Truncated frames, misaligned tails, bad delay or payload text all
#       raise a TTYRecError subclass. Nothing is silently cut short.
#
# NOT responsible for:
#   - File I/O (the page's FileReader, or the CLI / Flask wrappers, read files)
#   - Table rendering, Add / Remove links, drag & drop, the save-as download
#   - Playback timing
#
# ── WIRE FORMAT ──────────────────────────────────────────────────────────────
#
# ┌──────────────┬──────────────┬──────────────┬─────────────────────────┐
# │ seconds  u32 │ usec     u32 │ length   u32 │ payload (length bytes)  │ × N
# └──────────────┴──────────────┴──────────────┴─────────────────────────┘
#   All integers little-endian, unsigned. No file header, no footer, no
#   padding, no end marker: end of buffer is end of stream.
#
# ── Module layout ────────────────────────────────────────────────────────────
#   FMM/  — format constants + 32-bit LE primitives
#   FVM/  — decoder, session inspector, self-validation suite
#   FGM/  — encoder, editable row collection
#   FEM/  — JSON bridge for the browser editor
#   errors.py — TTYRecError taxonomy
# =============================================================================

from TREC.errors import (
    TTYRecError,
    FrameDecodeError,
    EmptyStreamError,
    TruncatedFrameError,
    MisalignedStreamError,
    FrameEncodeError,
    MalformedPayloadEncodingError,
    InvalidDelayTextError,
)
from TREC.FVM.frame_parser import Frame, Session, parse
from TREC.FGM.frame_writer import (
    EditableFrame,
    serialize,
    to_editable,
    format_delay,
    encode_payload_text,
    decode_payload_text,
)
from TREC.FGM.edit_session import EditSession, SavedRecording

__all__ = [
    'TTYRecError',
    'FrameDecodeError',
    'EmptyStreamError',
    'TruncatedFrameError',
    'MisalignedStreamError',
    'FrameEncodeError',
    'MalformedPayloadEncodingError',
    'InvalidDelayTextError',
    'Frame',
    'Session',
    'parse',
    'EditableFrame',
    'serialize',
    'to_editable',
    'format_delay',
    'encode_payload_text',
    'decode_payload_text',
    'EditSession',
    'SavedRecording',
]
