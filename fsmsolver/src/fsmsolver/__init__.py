"""
fsmsolver: construction, determinization and minimization of finite state machines.
"""

import logging

from fsmsolver.core.alphabet import EMPTY_ALPHABET, Alphabet
from fsmsolver.core.errors import (
    FsmError,
    InvalidArgumentError,
    InvalidOperationError,
    NullArgumentError,
    OutOfRangeError,
)
from fsmsolver.core.machine import FSM
from fsmsolver.core.types import FsmType, MachineSpec, State, Transition

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Alphabet",
    "EMPTY_ALPHABET",
    "FSM",
    "FsmError",
    "FsmType",
    "InvalidArgumentError",
    "InvalidOperationError",
    "MachineSpec",
    "NullArgumentError",
    "OutOfRangeError",
    "State",
    "Transition",
    "__version__",
]
