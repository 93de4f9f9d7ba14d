"""Protocol layer: command tokens, wire framing, builders, and reply parsing."""

from .framing import CatCommand, CommandKind, encode_command, decode_reply
from .commands import Opcode, build_command, build_read, build_set
from .parser import parse_response
from .errors import (
    CatError,
    InvalidArgumentError,
    MalformedReplyError,
    RangeViolationError,
)
