"""Data models for radio settings and reply values."""

from .enums import AgcType, Band, Mode, PttState, ToneType, Vfo
from .readings import (
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
    Reading,
    RfGainInfo,
    SplitInfo,
    SquelchInfo,
    VfoSelectInfo,
    VoxGainInfo,
    VoxInfo,
)
