"""Exceptions raised by the CAT codec."""

from __future__ import annotations


class CatError(Exception):
    """Base class for all codec failures."""


class InvalidArgumentError(CatError, ValueError):
    """A builder was given a value outside its domain."""


class MalformedReplyError(CatError, ValueError):
    """A reply is empty, has the wrong opcode, or lacks a mandatory field."""


class RangeViolationError(CatError, ValueError):
    """A reply field parsed cleanly but holds a value outside its domain."""
