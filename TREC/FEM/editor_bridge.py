# =============================================================================
# TREC/FEM/editor_bridge.py — Browser Editor Bridge (Pyodide)
# =============================================================================
#
# JSON entry points for the in-browser ttyrec editor. The page reads the
# user's file, hands the bytes to Python, renders the returned rows as an
# editable table, and on "Save" posts the rows back for re-encoding. No file
# I/O happens here.
#
# Entry points (available as Pyodide globals after import):
#
#   parse_ttyrec_json(ttyrec_b64) -> str
#       ttyrec_b64 : base64 of the whole .ttyrec file
#       returns    : JSON {start_seconds, start_microseconds, frame_count,
#                          duration, frames: [{index, seconds, microseconds,
#                          delay, delay_text, data_text, size}, ...]}
#
#   serialize_ttyrec_json(document_json) -> str
#       document_json : JSON {start_seconds, start_microseconds,
#                             frames: [{delay_text, data_text}, ...]}
#       returns       : JSON {ttyrec_b64, size, frame_count, filename,
#                             mime_type}
#
# The JavaScript caller:
#   1. Decodes ttyrec_b64 → Uint8Array
#   2. Wraps it in a Blob of mime_type and triggers a download of filename
#
# Both *_json functions always return a JSON string. On error they return
# {error, kind, traceback}; kind is the exception class name, e.g.
# "TruncatedFrameError", so the page can word its message.
# =============================================================================

import base64
import json

from TREC.FMM.constants import DEFAULT_FILENAME, MIME_TYPE
from TREC.FGM.frame_writer import (
    EditableFrame,
    encode_payload_text,
    format_delay,
    serialize,
)
from TREC.FVM.frame_parser import parse
from TREC.errors import FrameEncodeError


# ---------------------------------------------------------------------------
# Public bridge API
# ---------------------------------------------------------------------------

def parse_ttyrec(buffer):
    """
    Decode a ttyrec buffer into the row dicts the editor table renders.

    Parameters
    ----------
    buffer : bytes
        Entire .ttyrec file contents.

    Returns
    -------
    dict  {start_seconds, start_microseconds, frame_count, duration, frames}
    """
    session = parse(buffer)
    frames  = []
    for i, f in enumerate(session.frames):
        frames.append({
            "index":        i,
            "seconds":      f.seconds,
            "microseconds": f.microseconds,
            "delay":        f.delay,
            "delay_text":   format_delay(f.delay),
            "data_text":    encode_payload_text(f.payload),
            "size":         f.size,
        })

    return {
        "start_seconds":      session.start_seconds,
        "start_microseconds": session.start_microseconds,
        "frame_count":        len(frames),
        "duration":           session.duration,
        "frames":             frames,
    }


def _row_from_dict(index, row):
    if not isinstance(row, dict):
        raise FrameEncodeError("row must be an object", index)
    # Rows straight from parse_ttyrec may only carry the numeric delay.
    if "delay_text" in row:
        delay_text = row["delay_text"]
    elif "delay" in row:
        delay_text = format_delay(float(row["delay"]))
    else:
        delay_text = ""
    return EditableFrame(str(delay_text), row.get("data_text", ""))


def serialize_ttyrec(document):
    """
    Re-encode editor rows into a ttyrec file.

    Parameters
    ----------
    document : dict
        {start_seconds: int, start_microseconds: int,
         frames: [{delay_text: str, data_text: str}, ...]}

    Returns
    -------
    dict  {ttyrec_b64, size, frame_count, filename, mime_type}
    """
    rows = [_row_from_dict(i, r)
            for i, r in enumerate(document.get("frames", []))]
    data = serialize(
        int(document.get("start_seconds", 0)),
        int(document.get("start_microseconds", 0)),
        rows,
    )
    return {
        "ttyrec_b64":  base64.b64encode(data).decode("ascii"),
        "size":        len(data),
        "frame_count": len(rows),
        "filename":    document.get("filename") or DEFAULT_FILENAME,
        "mime_type":   MIME_TYPE,
    }


def _error_json(exc):
    import traceback as _tb
    return json.dumps({
        "error":     str(exc),
        "kind":      type(exc).__name__,
        "traceback": _tb.format_exc(),
    })


def parse_ttyrec_json(ttyrec_b64):
    """
    Safe Pyodide entry point.  Always returns a JSON string.
    On error returns {error, kind, traceback}.
    """
    try:
        buffer = base64.b64decode(ttyrec_b64, validate=True)
        return json.dumps(parse_ttyrec(buffer))
    except Exception as _exc:
        return _error_json(_exc)


def serialize_ttyrec_json(document_json):
    """
    Safe Pyodide entry point.  Always returns a JSON string.
    On error returns {error, kind, traceback}.
    """
    try:
        document = json.loads(document_json)
        return json.dumps(serialize_ttyrec(document))
    except Exception as _exc:
        return _error_json(_exc)
