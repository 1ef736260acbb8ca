from __future__ import annotations

from fsmsolver.core.alphabet import Alphabet
from fsmsolver.core.machine import FSM


def make_div3_fsm() -> FSM:
    """Binary numbers divisible by three. Deterministic and already minimal."""
    return FSM.create(
        alphabet=Alphabet.create("01"),
        number_of_states=3,
        accepted_states=[0],
        start_state=0,
        transitions=[
            (0, 0, "0"),
            (0, 1, "1"),
            (1, 2, "0"),
            (1, 0, "1"),
            (2, 1, "0"),
            (2, 2, "1"),
        ],
    )


def make_mimic_pairs_fsm() -> FSM:
    """
    Deterministic machine over {a, b} made of two pairs of equivalent states.

    0 and 1 swap on b and both go to 2 on a; 2 and 3 swap on a and b.
    Minimizes to 2 states.
    """
    return FSM.create(
        alphabet=Alphabet.create("ab"),
        number_of_states=4,
        accepted_states=[2, 3],
        start_state=0,
        transitions=[
            (0, 2, "a"),
            (0, 1, "b"),
            (1, 2, "a"),
            (1, 0, "b"),
            (2, 3, "a"),
            (2, 3, "b"),
            (3, 2, "a"),
            (3, 2, "b"),
        ],
    )


def make_partial_fsm() -> FSM:
    """Accepts exactly "a"; every other transition is missing."""
    return FSM.create(
        alphabet=Alphabet.create("ab"),
        number_of_states=2,
        accepted_states=[1],
        start_state=0,
        transitions=[(0, 1, "a")],
    )


def make_ends_with_one_nfa() -> FSM:
    """Binary strings ending in 1. State 0 has two transitions on "1"."""
    return FSM.create(
        alphabet=Alphabet.create("01"),
        number_of_states=2,
        accepted_states=[1],
        start_state=0,
        transitions=[
            (0, 0, "0"),
            (0, 0, "1"),
            (0, 1, "1"),
        ],
    )
