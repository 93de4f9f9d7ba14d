"""MCP server entry point for the Yaesu FTX-1.

Exposes tools and resources via the Model Context Protocol using the
official Python MCP SDK with stdio transport. Each tool is a thin
wrapper: build a command, hand it to the serial connection, parse the
reply.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from mcp.server.fastmcp import FastMCP

from .models.enums import (
    AGC_NAMES,
    BAND_NAMES,
    MODE_NAMES,
    AgcType,
    Band,
    Mode,
    PttState,
    ToneType,
    Vfo,
)
from .models.readings import Reading
from .protocol.commands import (
    build_af_gain_read,
    build_af_gain_set,
    build_agc_read,
    build_agc_set,
    build_auto_info_set,
    build_band_down,
    build_band_select,
    build_band_up,
    build_command,
    build_ctcss_read,
    build_ctcss_set,
    build_firmware_version_read,
    build_frequency_read,
    build_frequency_set,
    build_mode_read,
    build_mode_set,
    build_power_read,
    build_power_set,
    build_ptt_read,
    build_ptt_set,
    build_radio_info_read,
    build_rf_gain_read,
    build_rf_gain_set,
    build_split_read,
    build_split_set,
    build_squelch_read,
    build_squelch_set,
    build_vfo_a_to_b,
    build_vfo_b_to_a,
)
from .protocol.errors import CatError
from .protocol.framing import CatCommand
from .protocol.parser import (
    parse_af_gain,
    parse_agc,
    parse_ctcss,
    parse_firmware_version,
    parse_frequency,
    parse_mode,
    parse_power,
    parse_ptt,
    parse_radio_info,
    parse_rf_gain,
    parse_split,
    parse_squelch,
)
from .transport.serial_connection import (
    DEFAULT_BAUD,
    DEFAULT_DEVICE,
    SerialConfig,
    SerialConnection,
)
from .utils.validation import suggest_band

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "ftx1-cat",
    instructions="MCP server for CAT control of the Yaesu FTX-1 transceiver",
)

# Global connection state
_connection: SerialConnection | None = None


def _get_connection() -> SerialConnection:
    """Get the active serial connection, raising if not connected."""
    if _connection is None or not _connection.connected:
        raise RuntimeError(
            "Not connected to radio. Use the 'connect' tool first."
        )
    return _connection


def _enum_arg(enum_cls, value: str | int):
    """Accept an enum member name (any case) or its numeric code."""
    if isinstance(value, str):
        key = value.strip().upper().replace("-", "_")
        if key.isdigit():
            return enum_cls(int(key))
        return enum_cls[key]
    return enum_cls(value)


def _execute(command: CatCommand) -> dict[str, Any]:
    """Send a set command that the radio does not answer."""
    conn = _get_connection()
    conn.send(command)
    return {"sent": str(command)}


def _query(command: CatCommand, parser: Callable[[str], Reading]) -> dict[str, Any]:
    """Send a read command and parse the reply into a dict."""
    conn = _get_connection()
    reply = conn.send(command, expect_reply=True)
    if reply is None:
        return {"error": "No response from radio"}
    try:
        return parser(reply).to_dict()
    except CatError as e:
        logger.warning("Bad reply to %s: %s", command, e)
        return {"error": str(e), "reply": reply}


def _guarded(build: Callable[[], CatCommand]) -> CatCommand | dict[str, Any]:
    """Run a builder, turning argument errors into a tool error result."""
    try:
        return build()
    except (CatError, KeyError, ValueError) as e:
        return {"error": str(e)}


# ─── CONNECTION TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def connect(device: str = DEFAULT_DEVICE, baudrate: int = DEFAULT_BAUD) -> dict[str, Any]:
    """Open the CAT serial port and identify the radio.

    Args:
        device: Serial device path (default /dev/ttyUSB0).
        baudrate: Line speed; must match the radio's CAT RATE menu setting.
    """
    global _connection
    if _connection is not None and _connection.connected:
        return {
            "connected": True,
            "message": "Already connected",
            "device": _connection.config.device,
        }

    try:
        config = SerialConfig(device=device, baudrate=baudrate)
    except ValueError as e:
        return {"error": str(e)}

    _connection = SerialConnection(config)
    _connection.open()

    result: dict[str, Any] = {
        "connected": True,
        "device": config.device,
        "baudrate": config.baudrate,
    }

    reply = _connection.send(build_firmware_version_read(), expect_reply=True)
    if reply:
        try:
            result["firmware"] = parse_firmware_version(reply).version
        except CatError as e:
            logger.debug("Firmware reply not understood: %s", e)

    return result


@mcp.tool()
def disconnect() -> dict[str, bool]:
    """Close the CAT serial port."""
    global _connection
    if _connection is None:
        return {"disconnected": True}
    _connection.close()
    _connection = None
    return {"disconnected": True}


@mcp.tool()
def get_firmware_version() -> dict[str, Any]:
    """Read the firmware version text (VE)."""
    return _query(build_firmware_version_read(), parse_firmware_version)


@mcp.tool()
def get_radio_info() -> dict[str, Any]:
    """Read the radio identity text (RI)."""
    return _query(build_radio_info_read(), parse_radio_info)


# ─── FREQUENCY / MODE TOOLS ───────────────────────────────────────────

@mcp.tool()
def get_frequency(vfo: str = "MAIN") -> dict[str, Any]:
    """Read a VFO frequency in Hz.

    Args:
        vfo: MAIN or SUB.
    """
    cmd = _guarded(lambda: build_frequency_read(_enum_arg(Vfo, vfo)))
    if isinstance(cmd, dict):
        return cmd
    result = _query(cmd, parse_frequency)
    if "frequency" in result:
        band = suggest_band(result["frequency"])
        result["band"] = BAND_NAMES[band] if band is not None else None
    return result


@mcp.tool()
def set_frequency(frequency_hz: int, vfo: str = "MAIN") -> dict[str, Any]:
    """Tune a VFO.

    Args:
        frequency_hz: Frequency in Hz (e.g. 14074000).
        vfo: MAIN or SUB.
    """
    cmd = _guarded(lambda: build_frequency_set(_enum_arg(Vfo, vfo), frequency_hz))
    if isinstance(cmd, dict):
        return cmd
    return _execute(cmd)


@mcp.tool()
def get_mode(vfo: str = "MAIN") -> dict[str, Any]:
    """Read the operating mode of a VFO."""
    cmd = _guarded(lambda: build_mode_read(_enum_arg(Vfo, vfo)))
    if isinstance(cmd, dict):
        return cmd
    return _query(cmd, parse_mode)


@mcp.tool()
def set_mode(mode: str, vfo: str = "MAIN") -> dict[str, Any]:
    """Set the operating mode of a VFO.

    Args:
        mode: Mode name, e.g. USB, CW, DATA_USB, C4FM (see ftx1://catalog/modes).
        vfo: MAIN or SUB.
    """
    cmd = _guarded(
        lambda: build_mode_set(_enum_arg(Vfo, vfo), _enum_arg(Mode, mode))
    )
    if isinstance(cmd, dict):
        return cmd
    return _execute(cmd)


# ─── LEVEL TOOLS ──────────────────────────────────────────────────────

@mcp.tool()
def get_af_gain(vfo: str = "MAIN") -> dict[str, Any]:
    """Read AF (volume) gain, 0-255."""
    cmd = _guarded(lambda: build_af_gain_read(_enum_arg(Vfo, vfo)))
    if isinstance(cmd, dict):
        return cmd
    return _query(cmd, parse_af_gain)


@mcp.tool()
def set_af_gain(level: int, vfo: str = "MAIN") -> dict[str, Any]:
    """Set AF (volume) gain, 0-255."""
    cmd = _guarded(lambda: build_af_gain_set(_enum_arg(Vfo, vfo), level))
    if isinstance(cmd, dict):
        return cmd
    return _execute(cmd)


@mcp.tool()
def get_rf_gain(vfo: str = "MAIN") -> dict[str, Any]:
    """Read RF gain, 0-255."""
    cmd = _guarded(lambda: build_rf_gain_read(_enum_arg(Vfo, vfo)))
    if isinstance(cmd, dict):
        return cmd
    return _query(cmd, parse_rf_gain)


@mcp.tool()
def set_rf_gain(level: int, vfo: str = "MAIN") -> dict[str, Any]:
    """Set RF gain, 0-255."""
    cmd = _guarded(lambda: build_rf_gain_set(_enum_arg(Vfo, vfo), level))
    if isinstance(cmd, dict):
        return cmd
    return _execute(cmd)


@mcp.tool()
def get_squelch(vfo: str = "MAIN") -> dict[str, Any]:
    """Read squelch level, 0-255."""
    cmd = _guarded(lambda: build_squelch_read(_enum_arg(Vfo, vfo)))
    if isinstance(cmd, dict):
        return cmd
    return _query(cmd, parse_squelch)


@mcp.tool()
def set_squelch(level: int, vfo: str = "MAIN") -> dict[str, Any]:
    """Set squelch level, 0-255."""
    cmd = _guarded(lambda: build_squelch_set(_enum_arg(Vfo, vfo), level))
    if isinstance(cmd, dict):
        return cmd
    return _execute(cmd)


@mcp.tool()
def get_power() -> dict[str, Any]:
    """Read transmit power in watts."""
    return _query(build_power_read(), parse_power)


@mcp.tool()
def set_power(watts: int) -> dict[str, Any]:
    """Set transmit power.

    Args:
        watts: 5-100.
    """
    cmd = _guarded(lambda: build_power_set(watts))
    if isinstance(cmd, dict):
        return cmd
    return _execute(cmd)


@mcp.tool()
def get_agc(vfo: str = "MAIN") -> dict[str, Any]:
    """Read the AGC setting of a VFO."""
    cmd = _guarded(lambda: build_agc_read(_enum_arg(Vfo, vfo)))
    if isinstance(cmd, dict):
        return cmd
    return _query(cmd, parse_agc)


@mcp.tool()
def set_agc(agc: str, vfo: str = "MAIN") -> dict[str, Any]:
    """Set the AGC time constant.

    Args:
        agc: AUTO, FAST, MID, SLOW or OFF.
        vfo: MAIN or SUB.
    """
    cmd = _guarded(
        lambda: build_agc_set(_enum_arg(Vfo, vfo), _enum_arg(AgcType, agc))
    )
    if isinstance(cmd, dict):
        return cmd
    return _execute(cmd)


# ─── BAND / VFO TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def band_up(vfo: str = "MAIN") -> dict[str, Any]:
    """Step a VFO to the next band."""
    cmd = _guarded(lambda: build_band_up(_enum_arg(Vfo, vfo)))
    if isinstance(cmd, dict):
        return cmd
    return _execute(cmd)


@mcp.tool()
def band_down(vfo: str = "MAIN") -> dict[str, Any]:
    """Step a VFO to the previous band."""
    cmd = _guarded(lambda: build_band_down(_enum_arg(Vfo, vfo)))
    if isinstance(cmd, dict):
        return cmd
    return _execute(cmd)


@mcp.tool()
def select_band(band: str, vfo: str = "MAIN") -> dict[str, Any]:
    """Jump a VFO to a band.

    Args:
        band: Band name, e.g. BAND_20M, AIR, BAND_70CM (see ftx1://catalog/bands).
        vfo: MAIN or SUB.
    """
    cmd = _guarded(
        lambda: build_band_select(_enum_arg(Vfo, vfo), _enum_arg(Band, band))
    )
    if isinstance(cmd, dict):
        return cmd
    return _execute(cmd)


@mcp.tool()
def copy_vfo(direction: str = "A_TO_B") -> dict[str, Any]:
    """Copy one VFO's settings onto the other.

    Args:
        direction: A_TO_B (MAIN to SUB) or B_TO_A (SUB to MAIN).
    """
    builders = {"A_TO_B": build_vfo_a_to_b, "B_TO_A": build_vfo_b_to_a}
    builder = builders.get(direction.strip().upper())
    if builder is None:
        return {"error": f"Unknown direction '{direction}'. Valid: {list(builders)}"}
    return _execute(builder())


@mcp.tool()
def get_split() -> dict[str, Any]:
    """Read whether split operation is on."""
    return _query(build_split_read(), parse_split)


@mcp.tool()
def set_split(enabled: bool) -> dict[str, Any]:
    """Turn split operation on or off."""
    return _execute(build_split_set(enabled))


@mcp.tool()
def get_ctcss(vfo: str = "MAIN") -> dict[str, Any]:
    """Read the CTCSS/DCS tone setting of a VFO."""
    cmd = _guarded(lambda: build_ctcss_read(_enum_arg(Vfo, vfo)))
    if isinstance(cmd, dict):
        return cmd
    return _query(cmd, parse_ctcss)


@mcp.tool()
def set_ctcss(code: int, tone_type: str = "CTCSS", vfo: str = "MAIN") -> dict[str, Any]:
    """Set the CTCSS tone or DCS code.

    Args:
        code: Tone or DCS code index, 0-99.
        tone_type: CTCSS or DCS.
        vfo: MAIN or SUB.
    """
    cmd = _guarded(
        lambda: build_ctcss_set(
            _enum_arg(Vfo, vfo), _enum_arg(ToneType, tone_type), code
        )
    )
    if isinstance(cmd, dict):
        return cmd
    return _execute(cmd)


@mcp.tool()
def set_auto_info(enabled: bool) -> dict[str, Any]:
    """Turn the radio's unsolicited status reports on or off.

    Leave this off while using the other tools: unsolicited reports would
    be read in place of the expected replies.
    """
    return _execute(build_auto_info_set(enabled))


@mcp.tool()
def get_ptt() -> dict[str, Any]:
    """Read the transmit state."""
    return _query(build_ptt_read(), parse_ptt)


@mcp.tool()
def set_ptt(transmit: bool) -> dict[str, Any]:
    """Key or unkey the transmitter over CAT."""
    state = PttState.TX_CAT if transmit else PttState.RX
    return _execute(build_ptt_set(state))


@mcp.tool()
def send_raw(opcode: str, payload: str = "", expect_reply: bool = True) -> dict[str, Any]:
    """Send any CAT command, e.g. opcode "KS" payload "020".

    The payload is sent as given with no validation of its meaning.

    Args:
        opcode: Two-letter opcode.
        payload: Pre-formatted parameters, without the terminator.
        expect_reply: Wait for and return one reply line.
    """
    cmd = _guarded(lambda: build_command(opcode.upper(), payload))
    if isinstance(cmd, dict):
        return cmd
    conn = _get_connection()
    reply = conn.send(cmd, expect_reply=expect_reply)
    result: dict[str, Any] = {"sent": str(cmd)}
    if expect_reply:
        result["reply"] = reply
    return result


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("ftx1://device/info")
def resource_device_info() -> str:
    """Serial port settings and connection state."""
    if _connection is None or not _connection.connected:
        return json.dumps({"connected": False})

    cfg = _connection.config
    return json.dumps({
        "connected": True,
        "device": cfg.device,
        "baudrate": cfg.baudrate,
        "timeout": cfg.timeout,
    })


@mcp.resource("ftx1://catalog/modes")
def resource_mode_catalog() -> str:
    """Operating modes with their CAT codes."""
    modes = [
        {"code": m.value, "name": m.name, "label": MODE_NAMES[m]} for m in Mode
    ]
    return json.dumps({"modes": modes, "count": len(modes)})


@mcp.resource("ftx1://catalog/bands")
def resource_band_catalog() -> str:
    """Band selector codes."""
    bands = [
        {"code": b.value, "name": b.name, "label": BAND_NAMES[b]} for b in Band
    ]
    return json.dumps({"bands": bands, "count": len(bands)})


@mcp.resource("ftx1://catalog/agc")
def resource_agc_catalog() -> str:
    """AGC settings with their CAT codes."""
    agc = [{"code": a.value, "name": AGC_NAMES[a]} for a in AgcType]
    return json.dumps({"agc": agc})


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
