"""Opcode constants and high-level command builders.

Each logical command has a set builder and, where the radio answers it,
a read builder. Read forms keep only the addressing digits (usually the
VFO) and omit the value field. Every builder validates its arguments
before formatting and raises :class:`InvalidArgumentError` rather than
clamping.
"""

from __future__ import annotations

from enum import Enum

from ..models.enums import AgcType, Band, Mode, PttState, Vfo
from ..models.readings import (
    AfGainInfo,
    AgcInfo,
    AutoInfo,
    BandInfo,
    CtcssInfo,
    FrequencyInfo,
    ModeInfo,
    PowerInfo,
    PttInfo,
    Reading,
    RfGainInfo,
    SplitInfo,
    SquelchInfo,
    VfoSelectInfo,
    VoxGainInfo,
    VoxInfo,
)
from ..utils.validation import (
    DIGIT_MAX,
    LEVEL_MAX,
    POWER_MAX_WATTS,
    POWER_MIN_WATTS,
    TONE_CODE_MAX,
    VOX_GAIN_MAX,
    check_enum,
    check_range,
    validate_frequency,
)
from .errors import InvalidArgumentError
from .framing import CatCommand, CommandKind


class Opcode(str, Enum):
    """Two-letter CAT opcodes."""

    FREQUENCY_MAIN = "FA"
    FREQUENCY_SUB = "FB"
    MODE = "MD"
    AF_GAIN = "AG"
    RF_GAIN = "RG"
    SQUELCH = "SQ"
    POWER = "PC"
    AGC = "GT"
    BAND_UP = "BU"
    BAND_DOWN = "BD"
    BAND_SELECT = "BS"
    VFO_A_TO_B = "AB"
    VFO_B_TO_A = "BA"
    SPLIT = "ST"
    CTCSS = "CN"
    AUTO_INFO = "AI"
    FIRMWARE_VERSION = "VE"
    RADIO_INFO = "RI"
    PTT = "TX"
    VFO_SELECT = "VS"
    VOX = "VX"
    VOX_GAIN = "VG"


FREQUENCY_OPCODES: dict[Vfo, Opcode] = {
    Vfo.MAIN: Opcode.FREQUENCY_MAIN,
    Vfo.SUB: Opcode.FREQUENCY_SUB,
}


def _vfo(vfo: Vfo | int) -> Vfo:
    return check_enum("VFO", Vfo, vfo, InvalidArgumentError)


def _level(name: str, level: int, high: int = LEVEL_MAX) -> int:
    return check_range(name, level, 0, high, InvalidArgumentError)


def _flag(name: str, enabled: bool) -> str:
    if not isinstance(enabled, bool):
        raise InvalidArgumentError(f"{name} must be True or False, got {enabled!r}")
    return "1" if enabled else "0"


def build_command(
    opcode: Opcode | str,
    payload: str = "",
    kind: CommandKind = CommandKind.SET,
) -> CatCommand:
    """Build a command for any opcode from a pre-formatted payload.

    Only the token shape is checked (two-letter opcode, payload bound);
    the payload is sent exactly as given.
    """
    return CatCommand(opcode=opcode, payload=payload, kind=kind)


def build_read(opcode: Opcode | str) -> CatCommand:
    """Build a bare read request, e.g. ``PC;``."""
    return build_command(opcode, kind=CommandKind.READ)


# ─── FREQUENCY ────────────────────────────────────────────────────────

def build_frequency_set(vfo: Vfo | int, freq_hz: int) -> CatCommand:
    """Build ``FA``/``FB`` with a 9-digit zero-padded frequency in Hz."""
    vfo = _vfo(vfo)
    validate_frequency(freq_hz, InvalidArgumentError)
    return build_command(FREQUENCY_OPCODES[vfo], f"{freq_hz:09d}")


def build_frequency_read(vfo: Vfo | int) -> CatCommand:
    return build_read(FREQUENCY_OPCODES[_vfo(vfo)])


# ─── MODE ─────────────────────────────────────────────────────────────

def build_mode_set(vfo: Vfo | int, mode: Mode | int) -> CatCommand:
    """Build ``MD`` + VFO digit + 2-digit mode code."""
    vfo = _vfo(vfo)
    mode = check_enum("mode", Mode, mode, InvalidArgumentError)
    return build_command(Opcode.MODE, f"{vfo:d}{mode:02d}")


def build_mode_read(vfo: Vfo | int) -> CatCommand:
    return build_command(Opcode.MODE, f"{_vfo(vfo):d}", CommandKind.READ)


# ─── GAIN / SQUELCH ───────────────────────────────────────────────────

def _build_level_set(opcode: Opcode, name: str, vfo, level: int) -> CatCommand:
    vfo = _vfo(vfo)
    level = _level(name, level)
    return build_command(opcode, f"{vfo:d}{level:03d}")


def build_af_gain_set(vfo: Vfo | int, level: int) -> CatCommand:
    """Build ``AG`` + VFO digit + 3-digit level (0-255)."""
    return _build_level_set(Opcode.AF_GAIN, "AF gain", vfo, level)


def build_af_gain_read(vfo: Vfo | int) -> CatCommand:
    return build_command(Opcode.AF_GAIN, f"{_vfo(vfo):d}", CommandKind.READ)


def build_rf_gain_set(vfo: Vfo | int, level: int) -> CatCommand:
    """Build ``RG`` + VFO digit + 3-digit level (0-255)."""
    return _build_level_set(Opcode.RF_GAIN, "RF gain", vfo, level)


def build_rf_gain_read(vfo: Vfo | int) -> CatCommand:
    return build_command(Opcode.RF_GAIN, f"{_vfo(vfo):d}", CommandKind.READ)


def build_squelch_set(vfo: Vfo | int, level: int) -> CatCommand:
    """Build ``SQ`` + VFO digit + 3-digit level (0-255)."""
    return _build_level_set(Opcode.SQUELCH, "Squelch", vfo, level)


def build_squelch_read(vfo: Vfo | int) -> CatCommand:
    return build_command(Opcode.SQUELCH, f"{_vfo(vfo):d}", CommandKind.READ)


# ─── POWER ────────────────────────────────────────────────────────────

def build_power_set(watts: int) -> CatCommand:
    """Build ``PC`` + 3-digit watts.

    Args:
        watts: Output power 5-100.
    """
    check_range(
        "Power", watts, POWER_MIN_WATTS, POWER_MAX_WATTS, InvalidArgumentError
    )
    return build_command(Opcode.POWER, f"{watts:03d}")


def build_power_read() -> CatCommand:
    return build_read(Opcode.POWER)


# ─── AGC ──────────────────────────────────────────────────────────────

def build_agc_set(vfo: Vfo | int, agc: AgcType | int) -> CatCommand:
    """Build ``GT`` + VFO digit + AGC digit.

    Only the five defined AGC settings can be written, although replies
    may report codes up to 9.
    """
    vfo = _vfo(vfo)
    agc = check_enum("AGC type", AgcType, agc, InvalidArgumentError)
    return build_command(Opcode.AGC, f"{vfo:d}{agc:d}")


def build_agc_read(vfo: Vfo | int) -> CatCommand:
    return build_command(Opcode.AGC, f"{_vfo(vfo):d}", CommandKind.READ)


# ─── BAND ─────────────────────────────────────────────────────────────

def build_band_up(vfo: Vfo | int) -> CatCommand:
    return build_command(Opcode.BAND_UP, f"{_vfo(vfo):d}")


def build_band_down(vfo: Vfo | int) -> CatCommand:
    return build_command(Opcode.BAND_DOWN, f"{_vfo(vfo):d}")


def build_band_select(vfo: Vfo | int, band: Band | int) -> CatCommand:
    """Build ``BS`` + VFO digit + 2-digit band index."""
    vfo = _vfo(vfo)
    band = check_enum("band", Band, band, InvalidArgumentError)
    return build_command(Opcode.BAND_SELECT, f"{vfo:d}{band:02d}")


# ─── VFO ──────────────────────────────────────────────────────────────

def build_vfo_a_to_b() -> CatCommand:
    """Copy MAIN to SUB (``AB;``)."""
    return build_command(Opcode.VFO_A_TO_B)


def build_vfo_b_to_a() -> CatCommand:
    """Copy SUB to MAIN (``BA;``)."""
    return build_command(Opcode.VFO_B_TO_A)


def build_vfo_select_set(vfo: Vfo | int) -> CatCommand:
    return build_command(Opcode.VFO_SELECT, f"{_vfo(vfo):d}")


def build_vfo_select_read() -> CatCommand:
    return build_read(Opcode.VFO_SELECT)


# ─── SPLIT / AUTO-INFO ────────────────────────────────────────────────

def build_split_set(enabled: bool) -> CatCommand:
    return build_command(Opcode.SPLIT, _flag("Split", enabled))


def build_split_read() -> CatCommand:
    return build_read(Opcode.SPLIT)


def build_auto_info_set(enabled: bool) -> CatCommand:
    """Turn unsolicited status reports on or off (``AI``)."""
    return build_command(Opcode.AUTO_INFO, _flag("Auto-info", enabled))


def build_auto_info_read() -> CatCommand:
    return build_read(Opcode.AUTO_INFO)


# ─── CTCSS / DCS ──────────────────────────────────────────────────────

def build_ctcss_set(vfo: Vfo | int, tone_type: int, code: int) -> CatCommand:
    """Build ``CN`` + VFO digit + type digit + 2-digit code.

    Args:
        vfo: MAIN or SUB.
        tone_type: 0 for CTCSS, 1 for DCS (single digit).
        code: Tone or DCS code index 0-99.
    """
    vfo = _vfo(vfo)
    check_range("Tone type", tone_type, 0, DIGIT_MAX, InvalidArgumentError)
    check_range("Tone code", code, 0, TONE_CODE_MAX, InvalidArgumentError)
    return build_command(Opcode.CTCSS, f"{vfo:d}{tone_type:d}{code:02d}")


def build_ctcss_read(vfo: Vfo | int) -> CatCommand:
    return build_command(Opcode.CTCSS, f"{_vfo(vfo):d}", CommandKind.READ)


# ─── PTT / VOX ────────────────────────────────────────────────────────

def build_ptt_set(state: PttState | int) -> CatCommand:
    state = check_enum("PTT state", PttState, state, InvalidArgumentError)
    return build_command(Opcode.PTT, f"{state:d}")


def build_ptt_read() -> CatCommand:
    return build_read(Opcode.PTT)


def build_vox_set(enabled: bool) -> CatCommand:
    return build_command(Opcode.VOX, _flag("VOX", enabled))


def build_vox_read() -> CatCommand:
    return build_read(Opcode.VOX)


def build_vox_gain_set(level: int) -> CatCommand:
    """Build ``VG`` + 3-digit level (0-100)."""
    level = _level("VOX gain", level, VOX_GAIN_MAX)
    return build_command(Opcode.VOX_GAIN, f"{level:03d}")


def build_vox_gain_read() -> CatCommand:
    return build_read(Opcode.VOX_GAIN)


# ─── IDENTITY ─────────────────────────────────────────────────────────

def build_firmware_version_read() -> CatCommand:
    return build_read(Opcode.FIRMWARE_VERSION)


def build_radio_info_read() -> CatCommand:
    return build_read(Opcode.RADIO_INFO)


# ─── TYPED DISPATCH ───────────────────────────────────────────────────

# One entry per writable reading type; FirmwareInfo and RadioInfo are
# read-only on the radio and have no set form.
SET_BUILDERS = {
    FrequencyInfo: lambda r: build_frequency_set(r.vfo, r.frequency),
    ModeInfo: lambda r: build_mode_set(r.vfo, r.mode),
    AfGainInfo: lambda r: build_af_gain_set(r.vfo, r.level),
    RfGainInfo: lambda r: build_rf_gain_set(r.vfo, r.level),
    SquelchInfo: lambda r: build_squelch_set(r.vfo, r.level),
    PowerInfo: lambda r: build_power_set(r.watts),
    AgcInfo: lambda r: build_agc_set(r.vfo, r.agc),
    SplitInfo: lambda r: build_split_set(r.enabled),
    AutoInfo: lambda r: build_auto_info_set(r.enabled),
    CtcssInfo: lambda r: build_ctcss_set(r.vfo, r.tone_type, r.code),
    BandInfo: lambda r: build_band_select(r.vfo, r.band),
    PttInfo: lambda r: build_ptt_set(r.state),
    VfoSelectInfo: lambda r: build_vfo_select_set(r.vfo),
    VoxInfo: lambda r: build_vox_set(r.enabled),
    VoxGainInfo: lambda r: build_vox_gain_set(r.level),
}


def build_set(reading: Reading) -> CatCommand:
    """Build the set command that writes ``reading`` back to the radio."""
    builder = SET_BUILDERS.get(type(reading))
    if builder is None:
        raise InvalidArgumentError(
            f"No set command for {type(reading).__name__}"
        )
    return builder(reading)
