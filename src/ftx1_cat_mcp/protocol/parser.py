"""Reply parsing for CAT answers.

Parsers take reply text with the terminator already stripped (see
:func:`~ftx1_cat_mcp.protocol.framing.decode_reply`). Each one checks the
opcode, reads the payload left to right as fixed-purpose fields and
re-checks every value against the range the builders enforce. A reply
that fails any step raises; no partially filled result is returned.
"""

from __future__ import annotations

from ..models.enums import AgcType, Mode, PttState, ToneType, Vfo
from ..models.readings import (
    AfGainInfo,
    AgcInfo,
    AutoInfo,
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
from ..utils.validation import (
    DIGIT_MAX,
    FREQUENCY_MAX_HZ,
    LEVEL_MAX,
    POWER_MAX_WATTS,
    POWER_MIN_WATTS,
    TONE_CODE_MAX,
    VOX_GAIN_MAX,
    check_enum,
    check_range,
)
from .commands import Opcode
from .errors import MalformedReplyError, RangeViolationError
from .framing import OPCODE_LENGTH, is_valid_response, opcode_text, parse_frame

# Text buffer slots, one of which is reserved for the sentinel
FIRMWARE_TEXT_CAPACITY = 32
RADIO_INFO_TEXT_CAPACITY = 32

_DIGITS = "0123456789"


def _expect_opcode(reply: str | None, *opcodes: Opcode) -> str:
    """Return the reply's opcode if it is one of ``opcodes``."""
    if not isinstance(reply, str) or len(reply) < OPCODE_LENGTH:
        raise MalformedReplyError(f"Reply too short or missing: {reply!r}")
    head = reply[:OPCODE_LENGTH]
    expected = [opcode_text(op) for op in opcodes]
    if head not in expected:
        raise MalformedReplyError(
            f"Expected {'/'.join(expected)} reply, got {reply!r}"
        )
    return head


def _scan_int(reply: str, pos: int, width: int | None = None) -> tuple[int, int]:
    """Read a decimal field starting at ``pos``.

    With ``width`` set, at most that many digits are consumed; otherwise
    the scan takes an optional minus sign and runs to the first non-digit.
    Returns the value and the position after the field.
    """
    end = len(reply) if width is None else min(len(reply), pos + width)
    i = pos
    if width is None and i < end and reply[i] == "-":
        i += 1
    digits_start = i
    while i < end and reply[i] in _DIGITS:
        i += 1
    if i == digits_start:
        raise MalformedReplyError(
            f"Missing numeric field at offset {pos} in {reply!r}"
        )
    return int(reply[pos:i]), i


def _ranged(name: str, value: int, low: int, high: int) -> int:
    return check_range(name, value, low, high, RangeViolationError)


def _vfo_field(reply: str, pos: int) -> tuple[Vfo, int]:
    value, pos = _scan_int(reply, pos, 1)
    return check_enum("VFO", Vfo, value, RangeViolationError), pos


def _flag_field(reply: str, name: str) -> bool:
    value, _ = _scan_int(reply, OPCODE_LENGTH, 1)
    return bool(_ranged(name, value, 0, 1))


def _enum_or_int(enum_cls, value: int):
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _text_field(reply: str, capacity: int) -> tuple[str, bool]:
    if capacity < 1:
        raise ValueError(f"Text capacity must be at least 1, got {capacity}")
    text = reply[OPCODE_LENGTH:]
    limit = capacity - 1
    return text[:limit], len(text) > limit


# ─── FREQUENCY / MODE ─────────────────────────────────────────────────

def parse_frequency(reply: str) -> FrequencyInfo:
    """Parse ``FA``/``FB`` + Hz; the opcode decides the VFO."""
    head = _expect_opcode(reply, Opcode.FREQUENCY_MAIN, Opcode.FREQUENCY_SUB)
    vfo = Vfo.MAIN if head == Opcode.FREQUENCY_MAIN.value else Vfo.SUB
    freq, _ = _scan_int(reply, OPCODE_LENGTH)
    _ranged("Frequency", freq, 0, FREQUENCY_MAX_HZ)
    return FrequencyInfo(frequency=freq, vfo=vfo)


def parse_mode(reply: str) -> ModeInfo:
    """Parse ``MD`` + VFO digit + mode code."""
    _expect_opcode(reply, Opcode.MODE)
    vfo, pos = _vfo_field(reply, OPCODE_LENGTH)
    code, _ = _scan_int(reply, pos)
    mode = check_enum("mode", Mode, code, RangeViolationError)
    return ModeInfo(mode=mode, vfo=vfo)


# ─── GAIN / SQUELCH ───────────────────────────────────────────────────

def _parse_level(reply: str, opcode: Opcode, name: str) -> tuple[Vfo, int]:
    _expect_opcode(reply, opcode)
    vfo, pos = _vfo_field(reply, OPCODE_LENGTH)
    level, _ = _scan_int(reply, pos)
    return vfo, _ranged(name, level, 0, LEVEL_MAX)


def parse_af_gain(reply: str) -> AfGainInfo:
    vfo, level = _parse_level(reply, Opcode.AF_GAIN, "AF gain")
    return AfGainInfo(level=level, vfo=vfo)


def parse_rf_gain(reply: str) -> RfGainInfo:
    vfo, level = _parse_level(reply, Opcode.RF_GAIN, "RF gain")
    return RfGainInfo(level=level, vfo=vfo)


def parse_squelch(reply: str) -> SquelchInfo:
    vfo, level = _parse_level(reply, Opcode.SQUELCH, "Squelch")
    return SquelchInfo(level=level, vfo=vfo)


# ─── POWER / AGC ──────────────────────────────────────────────────────

def parse_power(reply: str) -> PowerInfo:
    """Parse ``PC`` + watts; anything outside 5-100 is rejected."""
    _expect_opcode(reply, Opcode.POWER)
    watts, _ = _scan_int(reply, OPCODE_LENGTH)
    return PowerInfo(
        watts=_ranged("Power", watts, POWER_MIN_WATTS, POWER_MAX_WATTS)
    )


def parse_agc(reply: str) -> AgcInfo:
    """Parse ``GT`` + VFO digit + AGC code.

    The wire bound is 0-9, wider than the five settings a set command
    can write.
    """
    _expect_opcode(reply, Opcode.AGC)
    vfo, pos = _vfo_field(reply, OPCODE_LENGTH)
    code, _ = _scan_int(reply, pos)
    _ranged("AGC", code, 0, DIGIT_MAX)
    return AgcInfo(agc=_enum_or_int(AgcType, code), vfo=vfo)


# ─── SWITCHES ─────────────────────────────────────────────────────────

def parse_split(reply: str) -> SplitInfo:
    _expect_opcode(reply, Opcode.SPLIT)
    return SplitInfo(enabled=_flag_field(reply, "Split"))


def parse_auto_info(reply: str) -> AutoInfo:
    _expect_opcode(reply, Opcode.AUTO_INFO)
    return AutoInfo(enabled=_flag_field(reply, "Auto-info"))


def parse_vox(reply: str) -> VoxInfo:
    _expect_opcode(reply, Opcode.VOX)
    return VoxInfo(enabled=_flag_field(reply, "VOX"))


def parse_ptt(reply: str) -> PttInfo:
    _expect_opcode(reply, Opcode.PTT)
    value, _ = _scan_int(reply, OPCODE_LENGTH, 1)
    return PttInfo(state=check_enum("PTT state", PttState, value, RangeViolationError))


def parse_vfo_select(reply: str) -> VfoSelectInfo:
    _expect_opcode(reply, Opcode.VFO_SELECT)
    vfo, _ = _vfo_field(reply, OPCODE_LENGTH)
    return VfoSelectInfo(vfo=vfo)


def parse_vox_gain(reply: str) -> VoxGainInfo:
    _expect_opcode(reply, Opcode.VOX_GAIN)
    level, _ = _scan_int(reply, OPCODE_LENGTH)
    return VoxGainInfo(level=_ranged("VOX gain", level, 0, VOX_GAIN_MAX))


# ─── CTCSS / DCS ──────────────────────────────────────────────────────

def parse_ctcss(reply: str) -> CtcssInfo:
    """Parse ``CN`` + VFO digit + type digit + tone code."""
    _expect_opcode(reply, Opcode.CTCSS)
    vfo, pos = _vfo_field(reply, OPCODE_LENGTH)
    tone_type, pos = _scan_int(reply, pos, 1)
    _ranged("Tone type", tone_type, 0, DIGIT_MAX)
    code, _ = _scan_int(reply, pos)
    _ranged("Tone code", code, 0, TONE_CODE_MAX)
    return CtcssInfo(
        tone_type=_enum_or_int(ToneType, tone_type), code=code, vfo=vfo
    )


# ─── IDENTITY ─────────────────────────────────────────────────────────

def parse_firmware_version(
    reply: str, capacity: int = FIRMWARE_TEXT_CAPACITY
) -> FirmwareInfo:
    """Copy the ``VE`` text, keeping at most ``capacity - 1`` characters."""
    _expect_opcode(reply, Opcode.FIRMWARE_VERSION)
    text, truncated = _text_field(reply, capacity)
    return FirmwareInfo(version=text, truncated=truncated)


def parse_radio_info(
    reply: str, capacity: int = RADIO_INFO_TEXT_CAPACITY
) -> RadioInfo:
    """Copy the ``RI`` text, keeping at most ``capacity - 1`` characters."""
    _expect_opcode(reply, Opcode.RADIO_INFO)
    text, truncated = _text_field(reply, capacity)
    return RadioInfo(model=text, truncated=truncated)


REPLY_PARSERS = {
    Opcode.FREQUENCY_MAIN: parse_frequency,
    Opcode.FREQUENCY_SUB: parse_frequency,
    Opcode.MODE: parse_mode,
    Opcode.AF_GAIN: parse_af_gain,
    Opcode.RF_GAIN: parse_rf_gain,
    Opcode.SQUELCH: parse_squelch,
    Opcode.POWER: parse_power,
    Opcode.AGC: parse_agc,
    Opcode.SPLIT: parse_split,
    Opcode.AUTO_INFO: parse_auto_info,
    Opcode.CTCSS: parse_ctcss,
    Opcode.PTT: parse_ptt,
    Opcode.VFO_SELECT: parse_vfo_select,
    Opcode.VOX: parse_vox,
    Opcode.VOX_GAIN: parse_vox_gain,
    Opcode.FIRMWARE_VERSION: parse_firmware_version,
    Opcode.RADIO_INFO: parse_radio_info,
}


def parse_response(reply: str):
    """Auto-dispatch a reply to the parser for its opcode.

    Returns the parsed reading, or an ``ANSWER`` :class:`CatCommand` when
    no specific parser exists for the opcode. Errors from a matching
    parser propagate.
    """
    if not is_valid_response(reply):
        raise MalformedReplyError(f"Not a CAT reply: {reply!r}")
    try:
        parser = REPLY_PARSERS.get(Opcode(reply[:OPCODE_LENGTH]))
    except ValueError:
        parser = None
    if parser is not None:
        return parser(reply)

    frame = parse_frame(reply)
    if frame is None:
        raise MalformedReplyError(f"Reply does not fit a CAT token: {reply!r}")
    return frame
