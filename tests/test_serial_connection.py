"""Tests for the serial transport, with pyserial mocked out."""

from unittest.mock import MagicMock, patch

import pytest
import serial

from ftx1_cat_mcp.protocol.commands import build_frequency_read, build_power_set
from ftx1_cat_mcp.protocol.errors import InvalidArgumentError
from ftx1_cat_mcp.transport.serial_connection import (
    DEFAULT_REPLY_CAPACITY,
    SerialConfig,
    SerialConnection,
)

SERIAL_CLS = "ftx1_cat_mcp.transport.serial_connection.serial.Serial"


def _open_connection(read_data: bytes = b"", **config) -> tuple[SerialConnection, MagicMock]:
    port = MagicMock()
    port.is_open = True
    port.read_until.return_value = read_data
    port.write.side_effect = lambda data: len(data)
    with patch(SERIAL_CLS, return_value=port):
        conn = SerialConnection(SerialConfig(**config))
        conn.open()
    return conn, port


def test_config_defaults():
    cfg = SerialConfig()
    assert cfg.device == "/dev/ttyUSB0"
    assert cfg.baudrate == 38400
    assert cfg.reply_capacity == DEFAULT_REPLY_CAPACITY


def test_config_rejects_unsupported_baud():
    with pytest.raises(ValueError, match="Unsupported baud rate"):
        SerialConfig(baudrate=12345)


def test_config_rejects_bad_timeout():
    with pytest.raises(ValueError):
        SerialConfig(timeout=0)


def test_open_uses_8n1_settings():
    port = MagicMock()
    port.is_open = True
    with patch(SERIAL_CLS, return_value=port) as serial_cls:
        conn = SerialConnection(SerialConfig("/dev/ttyACM0", 115200))
        conn.open()
    kwargs = serial_cls.call_args.kwargs
    assert kwargs["port"] == "/dev/ttyACM0"
    assert kwargs["baudrate"] == 115200
    assert kwargs["bytesize"] == serial.EIGHTBITS
    assert kwargs["parity"] == serial.PARITY_NONE
    assert kwargs["stopbits"] == serial.STOPBITS_ONE
    assert kwargs["rtscts"] is False
    port.reset_input_buffer.assert_called_once()
    assert conn.connected


def test_open_failure_raises_connection_error():
    with patch(SERIAL_CLS, side_effect=serial.SerialException("no such device")):
        conn = SerialConnection()
        with pytest.raises(ConnectionError, match="/dev/ttyUSB0"):
            conn.open()
    assert not conn.connected


def test_write_requires_connection():
    conn = SerialConnection()
    with pytest.raises(ConnectionError):
        conn.write(build_power_set(50))


def test_write_command_token():
    conn, port = _open_connection()
    assert conn.write(build_power_set(50)) == len(b"PC050;")
    port.write.assert_called_once_with(b"PC050;")
    port.flush.assert_called_once()


def test_write_rejects_non_ascii_text():
    conn, port = _open_connection()
    with pytest.raises(InvalidArgumentError):
        conn.write("FA\u00b0")
    port.write.assert_not_called()


def test_write_plain_text_adds_terminator():
    conn, port = _open_connection()
    conn.write("FA")
    port.write.assert_called_once_with(b"FA;")
    port.write.reset_mock()
    conn.write("MD0;\n")
    port.write.assert_called_once_with(b"MD0;")


def test_send_without_reply_does_not_read():
    conn, port = _open_connection()
    assert conn.send(build_power_set(50)) is None
    port.read_until.assert_not_called()


def test_send_reads_up_to_terminator():
    conn, port = _open_connection(read_data=b"FA014250000;")
    reply = conn.send(build_frequency_read(0), expect_reply=True)
    assert reply == "FA014250000"
    port.read_until.assert_called_once_with(b";", DEFAULT_REPLY_CAPACITY)


def test_send_plain_text_reply():
    conn, port = _open_connection(read_data=b"VE0104;")
    assert conn.send("VE", expect_reply=True) == "VE0104"
    port.read_until.assert_called_once_with(b";", DEFAULT_REPLY_CAPACITY)


def test_read_timeout_returns_none():
    """A partial reply without terminator is not handed on."""
    conn, port = _open_connection(read_data=b"FA0142")
    port.reset_input_buffer.reset_mock()
    assert conn.read_reply() is None
    port.reset_input_buffer.assert_called_once()


def test_read_capped_at_reply_capacity():
    conn, port = _open_connection(read_data=b"RI;", reply_capacity=16)
    conn.read_reply(size=500)
    port.read_until.assert_called_once_with(b";", 16)


def test_close():
    conn, port = _open_connection()
    conn.close()
    port.close.assert_called_once()
    assert not conn.connected
    conn.close()  # idempotent


def test_context_manager():
    port = MagicMock()
    port.is_open = True
    with patch(SERIAL_CLS, return_value=port):
        with SerialConnection() as conn:
            assert conn.connected
    port.close.assert_called_once()


class _BufferedPort:
    """Stand-in port that serves bytes from a buffer like a real UART."""

    def __init__(self):
        self.buffer = bytearray()
        self.is_open = True
        self.written = []

    def write(self, data):
        self.written.append(data)
        return len(data)

    def flush(self):
        pass

    def read_until(self, expected, size):
        end = self.buffer.find(expected)
        n = len(self.buffer) if end < 0 else end + len(expected)
        n = min(n, size)
        data = bytes(self.buffer[:n])
        del self.buffer[:n]
        return data

    def reset_input_buffer(self):
        self.buffer.clear()

    def reset_output_buffer(self):
        pass

    def close(self):
        self.is_open = False


def test_longer_than_usual_reply_keeps_stream_in_step():
    port = _BufferedPort()
    with patch(SERIAL_CLS, return_value=port):
        conn = SerialConnection()
        conn.open()

    port.buffer.extend(b"MD0030;PC050;")
    assert conn.send("MD0;", expect_reply=True) == "MD0030"
    assert conn.send("PC;", expect_reply=True) == "PC050"


def test_partial_reply_is_flushed_before_next_command():
    port = _BufferedPort()
    with patch(SERIAL_CLS, return_value=port):
        conn = SerialConnection(SerialConfig(reply_capacity=8))
        conn.open()

    port.buffer.extend(b"VE0123456789;")
    assert conn.send("VE;", expect_reply=True) is None
    port.buffer.extend(b"PC050;")
    assert conn.send("PC;", expect_reply=True) == "PC050"
