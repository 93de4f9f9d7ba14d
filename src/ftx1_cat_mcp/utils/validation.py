"""Range checks shared by command builders and reply parsers."""

from __future__ import annotations

from ..models.enums import Band

FREQUENCY_MAX_HZ = 999_999_999  # nine wire digits
LEVEL_MAX = 255
POWER_MIN_WATTS = 5
POWER_MAX_WATTS = 100
VOX_GAIN_MAX = 100
TONE_CODE_MAX = 99
DIGIT_MAX = 9

# Band edges in Hz, used to suggest a band for a frequency
BAND_EDGES: dict[Band, tuple[int, int]] = {
    Band.BAND_160M: (1_800_000, 2_000_000),
    Band.BAND_80M: (3_500_000, 4_000_000),
    Band.BAND_60M: (5_250_000, 5_450_000),
    Band.BAND_40M: (7_000_000, 7_300_000),
    Band.BAND_30M: (10_100_000, 10_150_000),
    Band.BAND_20M: (14_000_000, 14_350_000),
    Band.BAND_17M: (18_068_000, 18_168_000),
    Band.BAND_15M: (21_000_000, 21_450_000),
    Band.BAND_12M: (24_890_000, 24_990_000),
    Band.BAND_10M: (28_000_000, 29_700_000),
    Band.BAND_6M: (50_000_000, 54_000_000),
    Band.BAND_4M_GEN: (70_000_000, 70_500_000),
    Band.AIR: (108_000_000, 137_000_000),
    Band.BAND_2M: (144_000_000, 148_000_000),
    Band.BAND_70CM: (420_000_000, 450_000_000),
}


def in_range(value: int, low: int, high: int) -> bool:
    """Return True if ``value`` is an int within ``[low, high]``.

    ``bool`` is rejected so ``True`` is never taken for a level of 1.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return low <= value <= high


def check_range(name: str, value: int, low: int, high: int, error=ValueError) -> int:
    """Return ``value`` unchanged or raise ``error`` naming the bounds."""
    if not in_range(value, low, high):
        raise error(f"{name} must be {low}-{high}, got {value!r}")
    return value


def check_enum(name: str, enum_cls, value, error=ValueError):
    """Coerce ``value`` to a member of ``enum_cls`` or raise ``error``."""
    if isinstance(value, bool):
        raise error(f"Invalid {name}: {value!r}")
    try:
        return enum_cls(value)
    except ValueError:
        valid = ", ".join(m.name for m in enum_cls)
        raise error(f"Invalid {name} {value!r}. Valid: {valid}") from None


def validate_frequency(freq_hz: int, error=ValueError) -> int:
    """Ensure ``freq_hz`` fits the nine-digit frequency field."""
    return check_range("Frequency", freq_hz, 0, FREQUENCY_MAX_HZ, error)


def suggest_band(freq_hz: int) -> Band | None:
    """Return the band whose edges contain ``freq_hz``, if any."""
    for band, (low, high) in BAND_EDGES.items():
        if low <= freq_hz <= high:
            return band
    return None
