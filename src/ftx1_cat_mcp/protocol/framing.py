"""Command token model and ASCII wire framing.

Wire layout::

    +--------+---------------------------+------------+
    | Opcode |         Payload           | Terminator |
    | 2 char |  0-31 chars, opcode-given |    ';'     |
    +--------+---------------------------+------------+

- Opcode: two uppercase ASCII letters
- Payload: zero-padded decimal fields or free text; absent on most reads
- Terminator: a single ``;``

Replies echo the opcode followed by the value in the same field layout
as the corresponding set command.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import InvalidArgumentError

TERMINATOR = ";"
ENCODING = "ascii"
OPCODE_LENGTH = 2
MAX_PAYLOAD_LENGTH = 31  # 32-byte parameter buffer minus terminator
MIN_REPLY_LENGTH = OPCODE_LENGTH

# Expected reply length in characters, terminator included, for replies
# with a fixed layout. Text replies (VE, RI) are variable and absent here.
REPLY_LENGTHS: dict[str, int] = {
    "FA": 12,  # FA + 9-digit Hz
    "FB": 12,
    "MD": 6,   # MD + VFO + 2-digit mode
    "AG": 7,   # AG + VFO + 3-digit level
    "RG": 7,
    "SQ": 7,
    "PC": 6,   # PC + 3-digit watts
    "GT": 5,   # GT + VFO + AGC digit
    "ST": 4,
    "AI": 4,
    "CN": 7,   # CN + VFO + type + 2-digit code
    "TX": 4,
    "VS": 4,
    "VX": 4,
    "VG": 6,   # VG + 3-digit level
}


class CommandKind(Enum):
    """Whether a token is a request we issue or an answer we parsed."""

    SET = "set"
    READ = "read"
    ANSWER = "answer"


def opcode_text(opcode) -> str:
    """Return the two-letter text of an opcode given as str or enum."""
    return opcode.value if isinstance(opcode, Enum) else opcode


@dataclass(frozen=True)
class CatCommand:
    """A single CAT command token.

    Construction enforces the opcode shape and the payload buffer bound,
    so an instance can always be encoded without overflow.
    """

    opcode: str
    payload: str = ""
    kind: CommandKind = CommandKind.SET

    def __post_init__(self) -> None:
        opcode = opcode_text(self.opcode)
        object.__setattr__(self, "opcode", opcode)
        if (
            not isinstance(opcode, str)
            or len(opcode) != OPCODE_LENGTH
            or not (opcode.isascii() and opcode.isalpha() and opcode.isupper())
        ):
            raise InvalidArgumentError(
                f"Opcode must be two uppercase ASCII letters, got {opcode!r}"
            )
        if not isinstance(self.payload, str) or not self.payload.isascii():
            raise InvalidArgumentError(
                f"Payload must be ASCII text, got {self.payload!r}"
            )
        if len(self.payload) > MAX_PAYLOAD_LENGTH:
            raise InvalidArgumentError(
                f"Payload exceeds {MAX_PAYLOAD_LENGTH} characters "
                f"({len(self.payload)})"
            )
        if TERMINATOR in self.payload:
            raise InvalidArgumentError(
                f"Payload must not contain the terminator {TERMINATOR!r}"
            )

    @property
    def has_payload(self) -> bool:
        return bool(self.payload)

    def to_wire(self) -> str:
        """Return the command text including the terminator."""
        return f"{self.opcode}{self.payload}{TERMINATOR}"

    def __str__(self) -> str:
        return self.to_wire()


def encode_command(command: CatCommand) -> bytes:
    """Encode a command token to the bytes written to the serial port."""
    return command.to_wire().encode(ENCODING)


def decode_reply(data: bytes | str) -> str:
    """Turn raw received data into reply text for the parsers.

    Surrounding whitespace and one trailing terminator are removed.
    Undecodable bytes are replaced so a garbled reply fails parsing
    instead of raising here.
    """
    if isinstance(data, bytes):
        data = data.decode(ENCODING, errors="replace")
    text = data.strip()
    if text.endswith(TERMINATOR):
        text = text[: -len(TERMINATOR)].rstrip()
    return text


def is_valid_response(reply: str | None) -> bool:
    """Cheap well-formedness check before calling a specific parser."""
    if not reply or len(reply) < MIN_REPLY_LENGTH:
        return False
    head = reply[:OPCODE_LENGTH]
    return head.isascii() and head.isalpha()


def expected_reply_length(opcode) -> int | None:
    """Return the full reply length for ``opcode``, or None if variable."""
    return REPLY_LENGTHS.get(opcode_text(opcode).upper())


def parse_frame(reply: str | None) -> CatCommand | None:
    """Split reply text into an ``ANSWER`` token.

    Returns None when the reply does not start with a two-letter opcode
    or its payload would not fit a token.
    """
    if not is_valid_response(reply):
        return None
    try:
        return CatCommand(
            opcode=reply[:OPCODE_LENGTH],
            payload=reply[OPCODE_LENGTH:],
            kind=CommandKind.ANSWER,
        )
    except InvalidArgumentError:
        return None
