import pytest

from TREC.FGM.frame_writer import (
    EditableFrame,
    decode_payload_text,
    encode_payload_text,
    format_delay,
    parse_delay_text,
    serialize,
    split_delay,
    to_editable,
)
from TREC.FVM.frame_parser import parse
from TREC.errors import (
    FrameEncodeError,
    InvalidDelayTextError,
    MalformedPayloadEncodingError,
)


def test_serialize_single_frame_scenario():
    out = serialize(0, 0, [EditableFrame("0.0", "\\xaa\\xbb")])
    assert out == bytes.fromhex("00000000" "00000000" "02000000" "aabb")


def test_serialize_empty_row_list():
    assert serialize(5, 5, []) == b""


def test_serialize_accumulates_delays(record):
    rows = [
        EditableFrame("0.000000", "\\x61"),
        EditableFrame("1.250000", ""),
        EditableFrame("0.100000", "\\x62\\x63"),
    ]
    expected = (
        record(100, 0, b"a")
        + record(101, 250_000, b"")
        + record(101, 350_000, b"bc")
    )
    assert serialize(100, 0, rows) == expected


def test_carry_when_usec_exceeds_one_million(record):
    out = serialize(10, 999_999, [EditableFrame("0.000002", "")])
    assert out == record(11, 1)


def test_exactly_one_million_usec_is_not_carried(record):
    out = serialize(10, 999_999, [EditableFrame("0.000001", "")])
    assert out == record(10, 1_000_000)


def test_whole_and_fractional_delay_across_boundary(record):
    # 1.000001 s on top of usec=999_999: one second from the whole part,
    # and the micro part lands exactly on the uncarried boundary.
    out = serialize(10, 999_999, [EditableFrame("1.000001", "")])
    assert out == record(11, 1_000_000)

    out = serialize(10, 999_999, [EditableFrame("1.000001", ""),
                                  EditableFrame("0.000001", "")])
    assert out[12:] == record(12, 1)


def test_empty_payload_row_emits_zero_length(record):
    out = serialize(3, 0, [EditableFrame("0", "")])
    assert out == record(3, 0)
    assert len(out) == 12


def test_plain_tuples_are_accepted(record):
    assert serialize(0, 0, [("0.5", "\\x00")]) == record(0, 500_000, b"\x00")


def test_negative_delay_wraps_to_uint32():
    out = serialize(0, 0, [EditableFrame("-1.000000", "")])
    assert out[:4] == b"\xff\xff\xff\xff"


def test_delay_text_whitespace_is_ignored(record):
    assert serialize(0, 0, [EditableFrame("  0.25\n", "")]) == record(0, 250_000)


@pytest.mark.parametrize("text", [
    "", "   ", "abc", "0.1s", "nan", "inf", "1,5",
    "1_0", "\u0661", "0x10", "1e999", ".", "+-1",
])
def test_invalid_delay_text(text):
    with pytest.raises(InvalidDelayTextError):
        parse_delay_text(text)


@pytest.mark.parametrize("text, expected", [
    ("0.5", 0.5), ("-0.25", -0.25), (".5", 0.5), ("2.", 2.0), ("1e-3", 0.001),
])
def test_valid_delay_text(text, expected):
    assert parse_delay_text(text) == expected


def test_serialize_rejects_mistyped_delay_instead_of_reading_it():
    with pytest.raises(InvalidDelayTextError) as excinfo:
        serialize(0, 0, [EditableFrame("1_0", "")])
    assert excinfo.value.frame_index == 0


def test_invalid_delay_names_the_row():
    rows = [EditableFrame("0.1", ""), EditableFrame("later", "")]
    with pytest.raises(InvalidDelayTextError) as excinfo:
        serialize(0, 0, rows)
    assert excinfo.value.frame_index == 1
    assert excinfo.value.text == "later"
    assert "row 1" in str(excinfo.value)


@pytest.mark.parametrize("text", ["\\x0", "\\x000", "\\x00\\x1"])
def test_payload_text_length_must_be_multiple_of_four(text):
    with pytest.raises(MalformedPayloadEncodingError):
        decode_payload_text(text)


@pytest.mark.parametrize("text", ["\\xzz", "abcd", "\\y00", "\\x-1"])
def test_payload_group_must_be_hex_escape(text):
    with pytest.raises(MalformedPayloadEncodingError):
        decode_payload_text(text)


def test_malformed_payload_aborts_whole_serialize():
    rows = [EditableFrame("0", "\\x41"), EditableFrame("0", "\\x4")]
    with pytest.raises(FrameEncodeError) as excinfo:
        serialize(0, 0, rows)
    assert isinstance(excinfo.value, MalformedPayloadEncodingError)
    assert excinfo.value.frame_index == 1


def test_hex_text_round_trip():
    assert encode_payload_text(bytes([0x00, 0xFF, 0x1A])) == "\\x00\\xff\\x1a"
    assert decode_payload_text("\\x00\\xFF\\x1A") == bytes([0x00, 0xFF, 0x1A])
    assert decode_payload_text("\\X0a") == b"\n"


def test_empty_payload_text():
    assert decode_payload_text("") == b""
    assert encode_payload_text(b"") == ""


def test_format_delay_uses_microsecond_precision():
    assert format_delay(0.1) == "0.100000"
    assert format_delay(0.0) == "0.000000"
    assert format_delay(7e-06) == "0.000007"


@pytest.mark.parametrize("delay, expected", [
    (0.0, (0, 0)),
    (0.5, (0, 500_000)),
    (1.000001, (1, 1)),
    (7e-06, (0, 7)),
    (2.9999996, (3, 0)),
    (-1.5, (-1, -500_000)),
])
def test_split_delay(delay, expected):
    assert split_delay(delay) == expected


def test_round_trip_of_serialized_stream():
    rows = [
        EditableFrame("0.000000", "\\x1b\\x5b\\x48"),
        EditableFrame("0.250000", ""),
        EditableFrame("0.000007", "\\x41"),
        EditableFrame("1.999999", "\\x42\\x43"),
        EditableFrame("0.500000", "\\x0d\\x0a"),
    ]
    first = serialize(1_700_000_000, 750_000, rows)
    session = parse(first)
    again = serialize(session.start_seconds, session.start_microseconds,
                      to_editable(session))
    assert again == first


def test_to_editable_does_not_modify_session(sample_stream):
    session = parse(sample_stream)
    before = list(session.frames)
    rows = to_editable(session)
    rows[0] = EditableFrame("9.0", "")
    serialize(session.start_seconds, session.start_microseconds, rows)
    assert session.frames == before


def test_non_string_payload_text_is_malformed():
    with pytest.raises(MalformedPayloadEncodingError) as excinfo:
        serialize(0, 0, [("0", None)])
    assert excinfo.value.frame_index == 0


def test_non_string_delay_text_is_invalid():
    with pytest.raises(InvalidDelayTextError):
        serialize(0, 0, [(None, "")])


@pytest.mark.parametrize("row", [("0",), ("0", "", ""), "ab", 5])
def test_row_must_have_two_fields(row):
    rows = [EditableFrame("0", ""), row]
    with pytest.raises(FrameEncodeError) as excinfo:
        serialize(0, 0, rows)
    assert excinfo.value.frame_index == 1
