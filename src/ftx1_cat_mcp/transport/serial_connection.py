"""Serial connection to the FTX-1 CAT port.

The radio's USB "Enhanced COM" port speaks 8N1 with no flow control.
Commands are written whole; replies are read up to the ``;`` terminator
or until the read timeout expires. Line settings are carried in a
:class:`SerialConfig` handed to the connection, never held globally.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import serial

from ..protocol.errors import InvalidArgumentError
from ..protocol.framing import (
    TERMINATOR,
    CatCommand,
    decode_reply,
    encode_command,
    expected_reply_length,
)

logger = logging.getLogger(__name__)

DEFAULT_DEVICE = "/dev/ttyUSB0"
DEFAULT_BAUD = 38400
DEFAULT_TIMEOUT = 0.5
DEFAULT_REPLY_CAPACITY = 128

SUPPORTED_BAUD_RATES: tuple[int, ...] = (
    1200,
    2400,
    4800,
    9600,
    19200,
    38400,
    57600,
    115200,
    230400,
    460800,
    921600,
)


@dataclass(frozen=True)
class SerialConfig:
    """Line settings for the CAT port."""

    device: str = DEFAULT_DEVICE
    baudrate: int = DEFAULT_BAUD
    timeout: float = DEFAULT_TIMEOUT
    reply_capacity: int = DEFAULT_REPLY_CAPACITY

    def __post_init__(self) -> None:
        if self.baudrate not in SUPPORTED_BAUD_RATES:
            raise ValueError(
                f"Unsupported baud rate {self.baudrate}. "
                f"Valid: {list(SUPPORTED_BAUD_RATES)}"
            )
        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")
        if self.reply_capacity < 2:
            raise ValueError(
                f"Reply capacity must be at least 2, got {self.reply_capacity}"
            )


class SerialConnection:
    """Manages the serial connection to the radio.

    Usage::

        conn = SerialConnection(SerialConfig("/dev/ttyUSB0", 38400))
        conn.open()
        reply = conn.send(build_frequency_read(Vfo.MAIN), expect_reply=True)
        conn.close()
    """

    def __init__(self, config: SerialConfig | None = None) -> None:
        self._config = config or SerialConfig()
        self._port: serial.Serial | None = None

    @property
    def config(self) -> SerialConfig:
        return self._config

    @property
    def connected(self) -> bool:
        return self._port is not None and self._port.is_open

    def open(self) -> SerialConfig:
        """Open and configure the serial device.

        Raises:
            ConnectionError: If the device cannot be opened.
        """
        cfg = self._config
        try:
            port = serial.Serial(
                port=cfg.device,
                baudrate=cfg.baudrate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                timeout=cfg.timeout,
                write_timeout=cfg.timeout,
                xonxoff=False,
                rtscts=False,
                dsrdtr=False,
            )
        except serial.SerialException as e:
            raise ConnectionError(
                f"Could not open {cfg.device} at {cfg.baudrate} baud: {e}"
            ) from e

        port.reset_input_buffer()
        port.reset_output_buffer()
        self._port = port
        logger.info("Opened %s at %d baud", cfg.device, cfg.baudrate)
        return cfg

    def close(self) -> None:
        """Close the serial port."""
        if self._port is None:
            return

        try:
            self._port.close()
        except serial.SerialException as e:
            logger.warning("Error closing %s: %s", self._config.device, e)
        finally:
            self._port = None
            logger.info("Disconnected")

    def __enter__(self) -> SerialConnection:
        self.open()
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _require_port(self) -> serial.Serial:
        if not self.connected:
            raise ConnectionError("Not connected to radio")
        return self._port

    def write(self, command: CatCommand | str) -> int:
        """Write one command to the radio.

        Plain strings are sent as typed, with the terminator appended when
        missing.

        Returns:
            Number of bytes written.

        Raises:
            ConnectionError: If not connected.
            InvalidArgumentError: If plain text is not ASCII.
        """
        port = self._require_port()
        if isinstance(command, CatCommand):
            data = encode_command(command)
        else:
            text = command.strip()
            if not text.endswith(TERMINATOR):
                text += TERMINATOR
            if not text.isascii():
                raise InvalidArgumentError(f"Command text must be ASCII: {text!r}")
            data = text.encode("ascii")
        logger.debug("TX: %s", data.decode("ascii"))
        written = port.write(data)
        port.flush()
        return written

    def read_reply(self, size: int | None = None) -> str | None:
        """Read one reply up to the terminator.

        Args:
            size: Maximum characters to read; defaults to the configured
                reply capacity.

        Returns:
            The reply with terminator and whitespace stripped, or None if
            the read timed out before the terminator arrived. Any partial
            reply is discarded from the input buffer.

        Raises:
            ConnectionError: If not connected.
        """
        port = self._require_port()
        limit = min(size or self._config.reply_capacity, self._config.reply_capacity)
        data = port.read_until(TERMINATOR.encode("ascii"), limit)
        if not data.endswith(TERMINATOR.encode("ascii")):
            logger.debug("RX timeout after %r", data)
            port.reset_input_buffer()
            return None
        reply = decode_reply(data)
        logger.debug("RX: %s;", reply)
        return reply

    def send(
        self,
        command: CatCommand | str,
        expect_reply: bool = False,
    ) -> str | None:
        """Send a command and, if asked, wait for its reply.

        Returns:
            Reply text (terminator stripped), or None when no reply was
            expected or none arrived in time.
        """
        self.write(command)
        if not expect_reply:
            return None
        reply = self.read_reply()
        opcode = command.opcode if isinstance(command, CatCommand) else command.strip()[:2]
        expected = expected_reply_length(opcode)
        if reply is not None and expected is not None and len(reply) + 1 != expected:
            logger.debug("Reply %r is not the usual %d characters", reply, expected)
        return reply
