"""Enumerated radio settings and their display names.

Numeric values are the codes the transceiver uses on the wire. Mode codes
follow the radio's own numbering (non-contiguous in meaning, starting at 1);
band codes are a zero-based index.
"""

from __future__ import annotations

from enum import IntEnum


class Vfo(IntEnum):
    """VFO selector, encoded as a single digit."""

    MAIN = 0
    SUB = 1


class Mode(IntEnum):
    """Operating modes (two-digit ``MD`` code)."""

    LSB = 1
    USB = 2
    CW = 3
    FM = 4
    AM = 5
    RTTY_LSB = 6
    CW_R = 7
    DATA_LSB = 8
    RTTY_USB = 9
    DATA_FM = 10
    FM_N = 11
    DATA_USB = 12
    AM_N = 13
    C4FM = 14


class Band(IntEnum):
    """Band selector (two-digit ``BS`` code)."""

    BAND_160M = 0
    BAND_80M = 1
    BAND_60M = 2
    BAND_40M = 3
    BAND_30M = 4
    BAND_20M = 5
    BAND_17M = 6
    BAND_15M = 7
    BAND_12M = 8
    BAND_10M = 9
    BAND_6M = 10
    BAND_4M_GEN = 11
    AIR = 12
    BAND_2M = 13
    BAND_70CM = 14


class AgcType(IntEnum):
    """AGC time constant (single digit)."""

    AUTO = 0
    FAST = 1
    MID = 2
    SLOW = 3
    OFF = 4


class ToneType(IntEnum):
    """Sub-audible tone system used by ``CN``."""

    CTCSS = 0
    DCS = 1


class PttState(IntEnum):
    """Transmit state reported by ``TX``."""

    RX = 0
    TX_CAT = 1
    TX_EXTERNAL = 2


UNKNOWN = "UNKNOWN"

MODE_NAMES: dict[Mode, str] = {
    Mode.LSB: "LSB",
    Mode.USB: "USB",
    Mode.CW: "CW-U",
    Mode.FM: "FM",
    Mode.AM: "AM",
    Mode.RTTY_LSB: "RTTY-L",
    Mode.CW_R: "CW-L",
    Mode.DATA_LSB: "DATA-L",
    Mode.RTTY_USB: "RTTY-U",
    Mode.DATA_FM: "DATA-FM",
    Mode.FM_N: "FM-N",
    Mode.DATA_USB: "DATA-U",
    Mode.AM_N: "AM-N",
    Mode.C4FM: "C4FM",
}

BAND_NAMES: dict[Band, str] = {
    Band.BAND_160M: "160m",
    Band.BAND_80M: "80m",
    Band.BAND_60M: "60m",
    Band.BAND_40M: "40m",
    Band.BAND_30M: "30m",
    Band.BAND_20M: "20m",
    Band.BAND_17M: "17m",
    Band.BAND_15M: "15m",
    Band.BAND_12M: "12m",
    Band.BAND_10M: "10m",
    Band.BAND_6M: "6m",
    Band.BAND_4M_GEN: "GEN",
    Band.AIR: "AIR",
    Band.BAND_2M: "2m",
    Band.BAND_70CM: "70cm",
}

AGC_NAMES: dict[AgcType, str] = {
    AgcType.AUTO: "AUTO",
    AgcType.FAST: "FAST",
    AgcType.MID: "MID",
    AgcType.SLOW: "SLOW",
    AgcType.OFF: "OFF",
}


def _lookup(enum_cls, names: dict, value: int) -> str:
    try:
        return names[enum_cls(value)]
    except ValueError:
        return UNKNOWN


def mode_to_string(mode: Mode | int) -> str:
    """Return the front-panel label for a mode code, or ``UNKNOWN``."""
    return _lookup(Mode, MODE_NAMES, mode)


def band_to_string(band: Band | int) -> str:
    """Return the label for a band index, or ``UNKNOWN``."""
    return _lookup(Band, BAND_NAMES, band)


def agc_to_string(agc: AgcType | int) -> str:
    """Return the label for an AGC code, or ``UNKNOWN``."""
    return _lookup(AgcType, AGC_NAMES, agc)
