"""
Validation of raw FSM descriptions.

Checks run in a fixed order and the first violated check raises. Nothing
is materialised here; ``FSM.create`` builds states only after
``validate_description`` returns.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from fsmsolver.core.alphabet import Alphabet
from fsmsolver.core.errors import InvalidArgumentError, NullArgumentError, OutOfRangeError
from fsmsolver.core.types import TransitionTriple

logger = logging.getLogger(__name__)


def _in_range(state_id: int, number_of_states: int) -> bool:
    return 0 <= state_id < number_of_states


def _is_invalid_transition(
    triple: TransitionTriple,
    alphabet: Alphabet,
    number_of_states: int,
) -> bool:
    from_id, to_id, symbol = triple
    if not _in_range(from_id, number_of_states):
        return True
    if not _in_range(to_id, number_of_states):
        return True
    return not alphabet.contains(symbol)


def find_invalid_transitions(
    alphabet: Alphabet,
    number_of_states: int,
    transitions: Optional[Iterable[TransitionTriple]],
) -> list[TransitionTriple]:
    """
    Return every triple whose endpoints fall outside ``[0, number_of_states)``
    or whose symbol is not in ``alphabet``, in input order.

    Callers can use this to diagnose a description before handing it to
    ``FSM.create``.
    """
    if alphabet is None:
        raise NullArgumentError("alphabet must not be None")
    if transitions is None:
        return []
    return [
        tuple(t) for t in transitions
        if _is_invalid_transition(tuple(t), alphabet, number_of_states)
    ]


def validate_description(
    alphabet: Optional[Alphabet],
    number_of_states: int,
    accepted_states: Optional[Iterable[int]],
    start_state: int,
    transitions: Optional[Iterable[TransitionTriple]],
) -> tuple[tuple[int, ...], tuple[TransitionTriple, ...]]:
    """
    Check a raw FSM description.

    Args:
        alphabet: Alphabet of the machine; must not be None.
        number_of_states: State count, >= 0.
        accepted_states: Accepting state ids, or None for none.
        start_state: Start state id; ignored when number_of_states == 0.
        transitions: (from id, to id, symbol) triples, or None for none.

    Returns:
        The accepted ids and transition triples materialised as tuples.

    Raises:
        NullArgumentError: alphabet is None.
        OutOfRangeError: negative state count, or start state out of range.
        InvalidArgumentError: too many or out-of-range accepted states, or
            invalid transitions (listed in ``invalid_transitions``).
    """
    if alphabet is None:
        raise NullArgumentError("alphabet must not be None")
    if number_of_states < 0:
        raise OutOfRangeError("number_of_states must be >= 0")
    if number_of_states > 0 and not _in_range(start_state, number_of_states):
        raise OutOfRangeError(
            f"start_state must be in [0, {number_of_states}), got {start_state}"
        )

    accepted = () if accepted_states is None else tuple(accepted_states)
    if len(accepted) > number_of_states:
        raise InvalidArgumentError("accepted_states contains more states than the state count")
    out_of_range = [s for s in accepted if not _in_range(s, number_of_states)]
    if out_of_range:
        raise InvalidArgumentError(
            f"accepted_states contains out of range states: {out_of_range}"
        )

    triples = () if transitions is None else tuple(tuple(t) for t in transitions)
    invalid = find_invalid_transitions(alphabet, number_of_states, triples)
    if invalid:
        logger.error("Invalid transitions:")
        for from_id, to_id, symbol in invalid:
            logger.error("[%s;%s;%s]", from_id, to_id, symbol)
        raise InvalidArgumentError(
            f"{len(invalid)} invalid transition(s): {invalid}",
            invalid_transitions=invalid,
        )

    return accepted, triples
