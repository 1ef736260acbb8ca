"""
Core types for fsmsolver: FsmType, State, Transition, MachineSpec.

Pure data containers. No algorithm logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from fsmsolver.core.alphabet import Alphabet

# Raw (from id, to id, symbol) triple as supplied by callers.
TransitionTriple = tuple[int, int, str]


class FsmType(Enum):
    """Classification of an FSM's transition function."""

    # exactly one transition per state for each alphabet symbol
    DETERMINISTIC = "deterministic"
    # some (state, symbol) pair has zero or several transitions
    NON_DETERMINISTIC = "non_deterministic"


@dataclass(frozen=True)
class State:
    """A node of an FSM. ``id`` is its position in the owning FSM's state tuple."""

    id: int
    is_accepting: bool = False


@dataclass(frozen=True)
class Transition:
    """Labelled edge ``start --symbol--> end``. Equal iff all three fields are equal."""

    start: State
    end: State
    symbol: str

    def as_triple(self) -> TransitionTriple:
        return (self.start.id, self.end.id, self.symbol)


@dataclass(frozen=True)
class MachineSpec:
    """
    Raw description of an FSM, consumed by ``FSM.from_spec``.

    Only normalises its collections; range and membership checks happen
    in ``FSM.create`` so that every entry point reports the same errors.
    """

    alphabet: Optional[Alphabet]
    number_of_states: int
    accepted_states: Optional[Iterable[int]] = None
    start_state: int = 0
    transitions: Optional[Iterable[TransitionTriple]] = None

    def __post_init__(self):
        accepted = () if self.accepted_states is None else tuple(self.accepted_states)
        transitions = () if self.transitions is None else tuple(
            tuple(t) for t in self.transitions
        )
        # frozen dataclass: bypass __setattr__
        object.__setattr__(self, "accepted_states", accepted)
        object.__setattr__(self, "transitions", transitions)
