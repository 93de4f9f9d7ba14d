"""Line-oriented CAT terminal.

Type a command such as ``FA;`` or ``MD0`` and press Enter; the
terminator is added when missing and the radio's reply is printed.
Replies with a known opcode are also shown decoded. Ctrl-D or ``quit``
exits.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from .protocol.errors import CatError
from .protocol.framing import TERMINATOR
from .protocol.parser import parse_response
from .transport.serial_connection import (
    DEFAULT_BAUD,
    DEFAULT_DEVICE,
    SUPPORTED_BAUD_RATES,
    SerialConfig,
    SerialConnection,
)

logger = logging.getLogger(__name__)

QUIT_WORDS = {"quit", "exit", "bye"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ftx1-cat-console",
        description="Interactive CAT terminal for the Yaesu FTX-1.",
    )
    parser.add_argument(
        "-d", "--device", default=DEFAULT_DEVICE,
        help=f"serial device (default: {DEFAULT_DEVICE})",
    )
    parser.add_argument(
        "-b", "--baud", type=int, default=DEFAULT_BAUD,
        help=f"baud rate (default: {DEFAULT_BAUD}); see -l",
    )
    parser.add_argument(
        "-l", "--list-bauds", action="store_true",
        help="list supported baud rates and exit",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="log every byte sent and received",
    )
    return parser


def describe_reply(reply: str) -> str | None:
    """Return a decoded form of ``reply`` for display, if it has one."""
    try:
        value = parse_response(reply)
    except CatError:
        return None
    to_dict = getattr(value, "to_dict", None)
    return str(to_dict()) if to_dict else None


def run(conn: SerialConnection, stdin: TextIO, stdout: TextIO) -> int:
    """Read commands from ``stdin`` until EOF, echoing replies.

    Returns the number of commands sent.
    """
    sent = 0
    for line in stdin:
        text = line.strip()
        if not text:
            continue
        if text.lower() in QUIT_WORDS:
            break
        if not text.endswith(TERMINATOR):
            text += TERMINATOR

        try:
            reply = conn.send(text, expect_reply=True)
        except CatError as e:
            print(f"[!!] {e}", file=stdout)
            continue
        sent += 1
        if reply is None:
            print(f"[->] {text}  (no reply)", file=stdout)
            continue

        print(f"[<-] {reply}{TERMINATOR}", file=stdout)
        decoded = describe_reply(reply)
        if decoded:
            print(f"     {decoded}", file=stdout)
    return sent


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.list_bauds:
        print("Supported baud rates:")
        for baud in SUPPORTED_BAUD_RATES:
            print(f"  {baud:6d}")
        return 0

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = SerialConfig(device=args.device, baudrate=args.baud)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    conn = SerialConnection(config)
    try:
        conn.open()
    except ConnectionError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(f"Port {config.device} open at {config.baudrate} baud.")
    print("Type a CAT command and press Enter. Ctrl-D to quit.")
    try:
        run(conn, sys.stdin, sys.stdout)
    except KeyboardInterrupt:
        pass
    finally:
        conn.close()
    print("Port closed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
