"""Tests for reply parsing."""

import pytest

from ftx1_cat_mcp.models.enums import AgcType, Band, Mode, PttState, ToneType, Vfo
from ftx1_cat_mcp.models.readings import (
    AfGainInfo,
    AgcInfo,
    AutoInfo,
    BandInfo,
    CtcssInfo,
    FirmwareInfo,
    FrequencyInfo,
    ModeInfo,
    PowerInfo,
    PttInfo,
    RadioInfo,
    RfGainInfo,
    SplitInfo,
    SquelchInfo,
    VfoSelectInfo,
    VoxGainInfo,
    VoxInfo,
)
from ftx1_cat_mcp.protocol.commands import SET_BUILDERS, build_set
from ftx1_cat_mcp.protocol.errors import MalformedReplyError, RangeViolationError
from ftx1_cat_mcp.protocol.framing import CatCommand, CommandKind, decode_reply
from ftx1_cat_mcp.protocol.parser import (
    FIRMWARE_TEXT_CAPACITY,
    REPLY_PARSERS,
    parse_af_gain,
    parse_agc,
    parse_auto_info,
    parse_ctcss,
    parse_firmware_version,
    parse_frequency,
    parse_mode,
    parse_power,
    parse_ptt,
    parse_radio_info,
    parse_response,
    parse_rf_gain,
    parse_split,
    parse_squelch,
    parse_vfo_select,
    parse_vox,
    parse_vox_gain,
)


def test_parse_frequency_main_and_sub():
    assert parse_frequency("FA014250000") == FrequencyInfo(14_250_000, Vfo.MAIN)
    assert parse_frequency("FB007074000") == FrequencyInfo(7_074_000, Vfo.SUB)


def test_parse_frequency_needs_digits():
    with pytest.raises(MalformedReplyError):
        parse_frequency("FA")
    with pytest.raises(MalformedReplyError):
        parse_frequency("FAabc")


def test_parse_frequency_too_large():
    with pytest.raises(RangeViolationError):
        parse_frequency("FA1000000000")


def test_parse_mode():
    """MD103 is CW on SUB."""
    assert parse_mode("MD103") == ModeInfo(Mode.CW, Vfo.SUB)
    assert parse_mode("MD014") == ModeInfo(Mode.C4FM, Vfo.MAIN)


def test_parse_mode_rejects_frequency_reply():
    """Opcode mismatch is a failure, not a partial decode."""
    with pytest.raises(MalformedReplyError):
        parse_mode("FA014250000")


def test_parse_mode_bad_vfo():
    with pytest.raises(RangeViolationError):
        parse_mode("MD203")


def test_parse_mode_undefined_code():
    with pytest.raises(RangeViolationError):
        parse_mode("MD000")
    with pytest.raises(RangeViolationError):
        parse_mode("MD015")


def test_parse_mode_missing_mode_field():
    with pytest.raises(MalformedReplyError):
        parse_mode("MD0")
    with pytest.raises(MalformedReplyError):
        parse_mode("MD")


@pytest.mark.parametrize(
    "parser, opcode, cls",
    [
        (parse_af_gain, "AG", AfGainInfo),
        (parse_rf_gain, "RG", RfGainInfo),
        (parse_squelch, "SQ", SquelchInfo),
    ],
)
def test_parse_levels(parser, opcode, cls):
    assert parser(f"{opcode}0128") == cls(128, Vfo.MAIN)
    assert parser(f"{opcode}1255") == cls(255, Vfo.SUB)
    assert parser(f"{opcode}0000") == cls(0, Vfo.MAIN)
    with pytest.raises(RangeViolationError):
        parser(f"{opcode}0256")
    with pytest.raises(MalformedReplyError):
        parser(f"{opcode}0")


def test_parse_level_wrong_opcode():
    with pytest.raises(MalformedReplyError):
        parse_af_gain("RG0128")


def test_parse_power():
    assert parse_power("PC100") == PowerInfo(100)
    assert parse_power("PC005") == PowerInfo(5)


def test_parse_power_range_violation():
    """101 is well-formed but outside 5-100."""
    with pytest.raises(RangeViolationError):
        parse_power("PC101")
    with pytest.raises(RangeViolationError):
        parse_power("PC004")


def test_plus_sign_is_malformed():
    with pytest.raises(MalformedReplyError):
        parse_frequency("FA+14250000")
    with pytest.raises(MalformedReplyError):
        parse_power("PC+50")


def test_parse_power_negative_is_range_violation():
    with pytest.raises(RangeViolationError):
        parse_power("PC-10")


def test_parse_agc():
    assert parse_agc("GT03") == AgcInfo(AgcType.SLOW, Vfo.MAIN)
    assert parse_agc("GT10") == AgcInfo(AgcType.AUTO, Vfo.SUB)


def test_parse_agc_wire_bound_wider_than_set_domain():
    """Codes 5-9 parse, as plain ints."""
    info = parse_agc("GT07")
    assert info.agc == 7
    assert not isinstance(info.agc, AgcType)
    with pytest.raises(RangeViolationError):
        parse_agc("GT010")


def test_parse_split_and_switches():
    assert parse_split("ST1") == SplitInfo(True)
    assert parse_split("ST0") == SplitInfo(False)
    assert parse_auto_info("AI1") == AutoInfo(True)
    assert parse_vox("VX0") == VoxInfo(False)
    with pytest.raises(RangeViolationError):
        parse_split("ST2")
    with pytest.raises(MalformedReplyError):
        parse_split("ST")


def test_parse_ctcss():
    assert parse_ctcss("CN0012") == CtcssInfo(ToneType.CTCSS, 12, Vfo.MAIN)
    assert parse_ctcss("CN1199") == CtcssInfo(ToneType.DCS, 99, Vfo.SUB)


def test_parse_ctcss_errors():
    with pytest.raises(RangeViolationError):
        parse_ctcss("CN00100")
    with pytest.raises(MalformedReplyError):
        parse_ctcss("CN00")
    with pytest.raises(RangeViolationError):
        parse_ctcss("CN2012")


def test_parse_ctcss_other_tone_type_kept_as_int():
    info = parse_ctcss("CN0512")
    assert info.tone_type == 5
    assert info.to_dict()["tone_type"] == 5


def test_parse_ptt_vfo_select_vox_gain():
    assert parse_ptt("TX1") == PttInfo(PttState.TX_CAT)
    assert parse_vfo_select("VS1") == VfoSelectInfo(Vfo.SUB)
    assert parse_vox_gain("VG050") == VoxGainInfo(50)
    with pytest.raises(RangeViolationError):
        parse_ptt("TX3")
    with pytest.raises(RangeViolationError):
        parse_vox_gain("VG101")


def test_parse_firmware_version():
    assert parse_firmware_version("VE0104") == FirmwareInfo("0104", False)


def test_parse_firmware_version_truncates():
    """Long text is cut to capacity - 1 characters and flagged."""
    text = "X" * (FIRMWARE_TEXT_CAPACITY + 10)
    info = parse_firmware_version("VE" + text)
    assert len(info.version) == FIRMWARE_TEXT_CAPACITY - 1
    assert info.truncated


def test_parse_firmware_version_exact_fit_not_truncated():
    info = parse_firmware_version("VE" + "1" * 7, capacity=8)
    assert info.version == "1111111"
    assert not info.truncated


def test_parse_radio_info():
    assert parse_radio_info("RIFTX-1") == RadioInfo("FTX-1", False)
    assert parse_radio_info("RI") == RadioInfo("", False)
    info = parse_radio_info("RIabcdef", capacity=4)
    assert info.model == "abc"
    assert info.truncated


@pytest.mark.parametrize(
    "parser",
    [parse_frequency, parse_mode, parse_power, parse_firmware_version, parse_split],
)
def test_null_and_empty_input(parser):
    with pytest.raises(MalformedReplyError):
        parser(None)
    with pytest.raises(MalformedReplyError):
        parser("")


def test_trailing_text_after_fields_ignored():
    """Numeric fields stop at the first non-digit."""
    assert parse_power("PC050X") == PowerInfo(50)


def test_parse_response_dispatch():
    assert parse_response("FA014250000") == FrequencyInfo(14_250_000, Vfo.MAIN)
    assert parse_response("MD103") == ModeInfo(Mode.CW, Vfo.SUB)
    assert parse_response("PC100") == PowerInfo(100)


def test_parse_response_unknown_opcode_returns_token():
    assert parse_response("KS020") == CatCommand("KS", "020", CommandKind.ANSWER)


def test_parse_response_long_text_reply_truncated():
    info = parse_response("VE" + "1" * 40)
    assert info == FirmwareInfo("1" * (FIRMWARE_TEXT_CAPACITY - 1), truncated=True)


def test_parse_response_text_reply_with_garbled_byte():
    reply = decode_reply(b"VE01\xff04;")
    assert parse_response(reply) == parse_firmware_version(reply)


def test_parse_response_unknown_opcode_too_long_for_token():
    with pytest.raises(MalformedReplyError):
        parse_response("KS" + "0" * 40)


def test_parse_response_propagates_errors():
    with pytest.raises(RangeViolationError):
        parse_response("PC101")
    with pytest.raises(MalformedReplyError):
        parse_response("?")


@pytest.mark.parametrize(
    "reading",
    [
        FrequencyInfo(0, Vfo.MAIN),
        FrequencyInfo(99_999_999, Vfo.SUB),
        ModeInfo(Mode.CW, Vfo.SUB),
        ModeInfo(Mode.DATA_USB, Vfo.MAIN),
        AfGainInfo(0, Vfo.MAIN),
        RfGainInfo(255, Vfo.SUB),
        SquelchInfo(17, Vfo.MAIN),
        PowerInfo(5),
        PowerInfo(100),
        AgcInfo(AgcType.OFF, Vfo.SUB),
        SplitInfo(True),
        AutoInfo(False),
        CtcssInfo(ToneType.DCS, 42, Vfo.SUB),
        PttInfo(PttState.TX_EXTERNAL),
        VfoSelectInfo(Vfo.SUB),
        VoxInfo(True),
        VoxGainInfo(100),
    ],
)
def test_parse_inverts_build(reading):
    """A set command's wire text, read back as a reply, gives the same value."""
    wire = build_set(reading).to_wire()
    assert parse_response(wire[:-1]) == reading


def test_every_writable_reading_has_a_parser():
    """Builders and parsers cover the same value types."""
    parsed_types = {
        FrequencyInfo, ModeInfo, AfGainInfo, RfGainInfo, SquelchInfo,
        PowerInfo, AgcInfo, SplitInfo, AutoInfo, CtcssInfo, PttInfo,
        VfoSelectInfo, VoxInfo, VoxGainInfo,
    }
    # BandInfo is set-only on the radio
    assert set(SET_BUILDERS) == parsed_types | {BandInfo}
    assert len(REPLY_PARSERS) == len(parsed_types) + 1 + 2  # FB, VE, RI
    assert build_set(BandInfo(Band.AIR, Vfo.MAIN)).to_wire() == "BS012;"


@pytest.mark.parametrize(
    "cls",
    [AfGainInfo, RfGainInfo, SquelchInfo],
)
@pytest.mark.parametrize("vfo", list(Vfo))
def test_every_level_reads_back(cls, vfo):
    for level in range(256):
        reading = cls(level, vfo)
        assert parse_response(build_set(reading).to_wire()[:-1]) == reading


def test_every_power_reads_back():
    for watts in range(5, 101):
        reading = PowerInfo(watts)
        assert parse_response(build_set(reading).to_wire()[:-1]) == reading


@pytest.mark.parametrize("tone_type", list(ToneType))
def test_every_tone_code_reads_back(tone_type):
    for code in range(100):
        reading = CtcssInfo(tone_type, code, Vfo.SUB)
        assert parse_response(build_set(reading).to_wire()[:-1]) == reading
