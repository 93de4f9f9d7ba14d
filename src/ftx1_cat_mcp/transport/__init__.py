"""Serial transport to the transceiver."""

from .serial_connection import SerialConfig, SerialConnection, SUPPORTED_BAUD_RATES
