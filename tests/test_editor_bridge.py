import base64
import json

import pytest

from TREC.FEM.editor_bridge import (
    parse_ttyrec,
    parse_ttyrec_json,
    serialize_ttyrec,
    serialize_ttyrec_json,
)
from TREC.errors import FrameEncodeError, MalformedPayloadEncodingError


def test_parse_ttyrec_rows(sample_stream):
    doc = parse_ttyrec(sample_stream)

    assert doc["start_seconds"] == 1_700_000_000
    assert doc["start_microseconds"] == 250_000
    assert doc["frame_count"] == 3
    assert doc["duration"] == pytest.approx(0.85)
    assert doc["frames"][2] == {
        "index": 2,
        "seconds": 1_700_000_001,
        "microseconds": 100_000,
        "delay": pytest.approx(0.35),
        "delay_text": "0.350000",
        "data_text": "\\x68\\x69",
        "size": 2,
    }


def test_parse_then_serialize_is_identity(sample_stream):
    result = serialize_ttyrec(parse_ttyrec(sample_stream))

    assert base64.b64decode(result["ttyrec_b64"]) == sample_stream
    assert result["size"] == len(sample_stream)
    assert result["frame_count"] == 3
    assert result["filename"] == "file.ttyrec"
    assert result["mime_type"] == "application/octet-stream; charset=binary"


def test_serialize_accepts_numeric_delay(record):
    result = serialize_ttyrec({
        "start_seconds": 4,
        "start_microseconds": 0,
        "frames": [{"delay": 0.5, "data_text": "\\x41"}],
    })
    assert base64.b64decode(result["ttyrec_b64"]) == record(4, 500_000, b"A")


def test_serialize_raises_on_bad_payload():
    with pytest.raises(MalformedPayloadEncodingError):
        serialize_ttyrec({"frames": [{"delay_text": "0", "data_text": "\\x4"}]})


def test_serialize_rejects_non_object_rows():
    with pytest.raises(FrameEncodeError) as excinfo:
        serialize_ttyrec({"frames": [{"delay_text": "0"}, ["0", ""]]})
    assert excinfo.value.frame_index == 1


def test_json_round_trip(sample_stream):
    parsed = json.loads(parse_ttyrec_json(base64.b64encode(sample_stream).decode()))
    saved = json.loads(serialize_ttyrec_json(json.dumps(parsed)))

    assert "error" not in saved
    assert base64.b64decode(saved["ttyrec_b64"]) == sample_stream


def test_parse_json_reports_truncated_frame(record):
    broken = record(0, 0, b"abcdef")[:-1]
    result = json.loads(parse_ttyrec_json(base64.b64encode(broken).decode()))

    assert result["kind"] == "TruncatedFrameError"
    assert "truncated frame #0" in result["error"]
    assert "Traceback" in result["traceback"]


def test_parse_json_reports_empty_stream():
    result = json.loads(parse_ttyrec_json(""))
    assert result["kind"] == "EmptyStreamError"


def test_parse_json_reports_bad_base64():
    result = json.loads(parse_ttyrec_json("not base64!"))
    assert "error" in result


def test_serialize_json_reports_bad_delay():
    doc = {"frames": [{"delay_text": "soon", "data_text": ""}]}
    result = json.loads(serialize_ttyrec_json(json.dumps(doc)))

    assert result["kind"] == "InvalidDelayTextError"
    assert "row 0" in result["error"]


def test_serialize_json_reports_bad_json():
    result = json.loads(serialize_ttyrec_json("{"))
    assert result["kind"] == "JSONDecodeError"
