"""
Error taxonomy for FSM construction and transformation.

Argument errors subclass ValueError so callers that only care about
"bad input" can catch that; the operation error subclasses RuntimeError.
"""

from __future__ import annotations


class FsmError(Exception):
    """Base class for every error raised by fsmsolver."""


class NullArgumentError(FsmError, ValueError):
    """A required argument was None."""


class OutOfRangeError(FsmError, ValueError):
    """A count or state id lies outside its permitted range."""


class InvalidArgumentError(FsmError, ValueError):
    """An argument is structurally inconsistent with the rest of the description."""

    def __init__(self, message: str, invalid_transitions: tuple = ()):
        super().__init__(message)
        self.invalid_transitions = tuple(invalid_transitions)


class InvalidOperationError(FsmError, RuntimeError):
    """The FSM is not in a state that allows the requested operation."""
