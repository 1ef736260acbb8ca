from __future__ import annotations

from collections import Counter
from typing import Sequence

from fsmsolver.core.alphabet import Alphabet
from fsmsolver.core.types import FsmType, State, Transition


def is_deterministic(
    states: Sequence[State],
    alphabet: Alphabet,
    transitions: Sequence[Transition],
) -> bool:
    """
    True iff every state has exactly one transition per alphabet symbol.

    Machines with no states or no transitions are never deterministic.
    Transitions are indexed by (state id, symbol) and each pair must be
    matched exactly once with nothing left over.
    """
    if not states or not transitions:
        return False
    if len(transitions) != len(states) * alphabet.cardinality:
        return False

    counts = Counter((t.start.id, t.symbol) for t in transitions)
    for state in states:
        for symbol in alphabet.symbols:
            # missing (underdefined) or duplicated (overdefined)
            if counts.pop((state.id, symbol), 0) != 1:
                return False

    return not counts


def classify(
    states: Sequence[State],
    alphabet: Alphabet,
    transitions: Sequence[Transition],
) -> FsmType:
    if is_deterministic(states, alphabet, transitions):
        return FsmType.DETERMINISTIC
    return FsmType.NON_DETERMINISTIC
