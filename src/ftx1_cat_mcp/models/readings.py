"""Typed values carried by CAT commands and replies.

One record per logical domain. The same record is what a parser returns
and what :func:`ftx1_cat_mcp.protocol.commands.build_set` accepts, so a
reading can be written back to the radio unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict

from .enums import (
    AgcType,
    Band,
    Mode,
    PttState,
    ToneType,
    Vfo,
    agc_to_string,
    mode_to_string,
)


class Reading:
    """Base class for reply values."""

    def to_dict(self) -> dict:
        d = asdict(self)
        if "vfo" in d:
            d["vfo"] = Vfo(d["vfo"]).name
        return d


@dataclass
class FrequencyInfo(Reading):
    """VFO frequency in Hz (``FA``/``FB``)."""

    frequency: int
    vfo: Vfo = Vfo.MAIN


@dataclass
class ModeInfo(Reading):
    """Operating mode of one VFO (``MD``)."""

    mode: Mode
    vfo: Vfo = Vfo.MAIN

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["mode"] = mode_to_string(self.mode)
        return d


@dataclass
class AfGainInfo(Reading):
    """AF (volume) gain 0-255 (``AG``)."""

    level: int
    vfo: Vfo = Vfo.MAIN


@dataclass
class RfGainInfo(Reading):
    """RF gain 0-255 (``RG``)."""

    level: int
    vfo: Vfo = Vfo.MAIN


@dataclass
class SquelchInfo(Reading):
    """Squelch level 0-255 (``SQ``)."""

    level: int
    vfo: Vfo = Vfo.MAIN


@dataclass
class PowerInfo(Reading):
    """Transmit power in watts, 5-100 (``PC``)."""

    watts: int


@dataclass
class AgcInfo(Reading):
    """AGC setting of one VFO (``GT``).

    Replies may carry codes 0-9; codes without an :class:`AgcType`
    member are kept as plain ``int``.
    """

    agc: AgcType | int
    vfo: Vfo = Vfo.MAIN

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["agc"] = agc_to_string(self.agc)
        return d


@dataclass
class SplitInfo(Reading):
    """Split operation on/off (``ST``)."""

    enabled: bool


@dataclass
class AutoInfo(Reading):
    """Auto-information reporting on/off (``AI``)."""

    enabled: bool


@dataclass
class CtcssInfo(Reading):
    """CTCSS/DCS tone setting (``CN``).

    ``tone_type`` is 0 for CTCSS and 1 for DCS; ``code`` is the tone
    or DCS code index 0-99.
    """

    tone_type: ToneType | int
    code: int
    vfo: Vfo = Vfo.MAIN

    def to_dict(self) -> dict:
        d = super().to_dict()
        try:
            d["tone_type"] = ToneType(self.tone_type).name
        except ValueError:
            d["tone_type"] = int(self.tone_type)
        return d


@dataclass
class BandInfo(Reading):
    """Band selection on one VFO (``BS``). Set-only on the radio."""

    band: Band
    vfo: Vfo = Vfo.MAIN


@dataclass
class PttInfo(Reading):
    """Transmit state (``TX``)."""

    state: PttState


@dataclass
class VfoSelectInfo(Reading):
    """Currently selected VFO (``VS``)."""

    vfo: Vfo


@dataclass
class VoxInfo(Reading):
    """VOX on/off (``VX``)."""

    enabled: bool


@dataclass
class VoxGainInfo(Reading):
    """VOX gain 0-100 (``VG``)."""

    level: int


@dataclass
class FirmwareInfo(Reading):
    """Firmware version text (``VE``)."""

    version: str
    truncated: bool = False


@dataclass
class RadioInfo(Reading):
    """Radio identity text (``RI``)."""

    model: str
    truncated: bool = False
