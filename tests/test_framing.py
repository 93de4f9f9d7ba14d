"""Tests for command tokens and wire framing."""

import pytest

from ftx1_cat_mcp.protocol.errors import InvalidArgumentError
from ftx1_cat_mcp.protocol.framing import (
    MAX_PAYLOAD_LENGTH,
    TERMINATOR,
    CatCommand,
    CommandKind,
    decode_reply,
    encode_command,
    expected_reply_length,
    is_valid_response,
    parse_frame,
)


def test_to_wire_appends_terminator():
    """Wire text is opcode + payload + ';'."""
    cmd = CatCommand("FA", "014250000")
    assert cmd.to_wire() == "FA014250000;"
    assert str(cmd) == "FA014250000;"


def test_encode_command_ascii_bytes():
    assert encode_command(CatCommand("PC", "100")) == b"PC100;"


def test_read_without_payload():
    """A bare read has no payload."""
    cmd = CatCommand("MD", kind=CommandKind.READ)
    assert not cmd.has_payload
    assert cmd.to_wire() == "MD;"


def test_read_with_addressing_digit_has_payload():
    """MD0 differs from MD: the VFO digit counts as a payload."""
    cmd = CatCommand("MD", "0", CommandKind.READ)
    assert cmd.has_payload
    assert cmd.to_wire() == "MD0;"


@pytest.mark.parametrize("opcode", ["F", "FAX", "fa", "F1", "", "ÄB"])
def test_bad_opcode_rejected(opcode):
    with pytest.raises(InvalidArgumentError):
        CatCommand(opcode)


def test_payload_at_bound_accepted():
    cmd = CatCommand("ZZ", "9" * MAX_PAYLOAD_LENGTH)
    assert len(cmd.payload) == MAX_PAYLOAD_LENGTH


def test_payload_over_bound_rejected():
    """The payload can never exceed the parameter buffer."""
    with pytest.raises(InvalidArgumentError):
        CatCommand("ZZ", "9" * (MAX_PAYLOAD_LENGTH + 1))


def test_payload_with_terminator_rejected():
    with pytest.raises(InvalidArgumentError):
        CatCommand("FA", "014;FB")


def test_non_ascii_payload_rejected():
    with pytest.raises(InvalidArgumentError):
        CatCommand("VE", "vé")


def test_invalid_argument_is_value_error():
    with pytest.raises(ValueError):
        CatCommand("X")


def test_decode_reply_strips_terminator_and_whitespace():
    assert decode_reply(b"FA014250000;\r\n") == "FA014250000"
    assert decode_reply("  MD003; ") == "MD003"


def test_decode_reply_without_terminator_unchanged():
    assert decode_reply("PC050") == "PC050"


def test_decode_reply_garbage_bytes_do_not_raise():
    text = decode_reply(b"\xffA;")
    assert text.endswith("A")


def test_is_valid_response():
    assert is_valid_response("FA014250000")
    assert is_valid_response("ST")
    assert not is_valid_response(None)
    assert not is_valid_response("")
    assert not is_valid_response("F")
    assert not is_valid_response("1A000")
    assert not is_valid_response("?")


def test_expected_reply_length():
    assert expected_reply_length("FA") == len("FA014250000;")
    assert expected_reply_length("MD") == len("MD003;")
    assert expected_reply_length("AG") == len("AG0128;")
    assert expected_reply_length("PC") == len("PC100;")
    assert expected_reply_length("GT") == len("GT03;")
    assert expected_reply_length("CN") == len("CN0012;")
    assert expected_reply_length("pc") == 6


def test_expected_reply_length_variable_or_unknown():
    assert expected_reply_length("VE") is None
    assert expected_reply_length("RI") is None
    assert expected_reply_length("ZZ") is None


def test_parse_frame_answer_token():
    frame = parse_frame("KS020")
    assert frame == CatCommand("KS", "020", CommandKind.ANSWER)


def test_parse_frame_invalid():
    assert parse_frame("?") is None
    assert parse_frame(None) is None
    assert parse_frame("ks020") is None


def test_terminator_constant():
    assert TERMINATOR == ";"


def test_command_is_immutable():
    cmd = CatCommand("FA")
    with pytest.raises(AttributeError):
        cmd.opcode = "FB"
