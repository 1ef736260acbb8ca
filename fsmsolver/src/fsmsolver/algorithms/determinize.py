"""
Determinization: turn a non-deterministic FSM into an equivalent deterministic one.

Two repairs run in order:
- complete_transitions: totalise the transition function through a sink state
- powerset_construction: resolve (state, symbol) pairs with several destinations

Completing first means every subset reached during powerset construction
has a destination for every symbol.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Optional, Sequence

from fsmsolver.core.alphabet import Alphabet
from fsmsolver.core.types import State, Transition
from fsmsolver.util.sequences import group_and_split, permutation_equals

logger = logging.getLogger(__name__)


def complete_transitions(
    states: Sequence[State],
    alphabet: Alphabet,
    transitions: Sequence[Transition],
) -> tuple[tuple[State, ...], tuple[Transition, ...]]:
    """
    Add transitions so that every state has at least one per alphabet symbol.

    An empty machine becomes a single non-accepting state looping on every
    symbol. Otherwise each original state missing some symbols gets an edge
    to one shared, non-accepting sink state (id = last id + 1) for each of
    them; the sink loops on every symbol. Machines that already cover every
    (state, symbol) pair are returned unchanged.
    """
    if not states:
        garbage = State(0, False)
        loops = tuple(Transition(garbage, garbage, symbol) for symbol in alphabet.symbols)
        return (garbage,), loops

    outgoing: dict[int, list[str]] = {state.id: [] for state in states}
    for group in group_and_split(transitions, key=lambda t: t.start.id):
        outgoing[group[0].start.id] = list(dict.fromkeys(t.symbol for t in group))

    underdefined = [
        state for state in states
        if not permutation_equals(outgoing[state.id], alphabet.symbols)
    ]
    if not underdefined:
        return tuple(states), tuple(transitions)

    sink = State(states[-1].id + 1, False)
    added: list[Transition] = []
    for state in underdefined:
        present = set(outgoing[state.id])
        added.extend(
            Transition(state, sink, symbol)
            for symbol in alphabet.symbols
            if symbol not in present
        )
    added.extend(Transition(sink, sink, symbol) for symbol in alphabet.symbols)

    logger.debug(
        "completed %d underdefined state(s) with sink %d (%d transitions added)",
        len(underdefined), sink.id, len(added),
    )
    return tuple(states) + (sink,), tuple(transitions) + tuple(added)


def has_overdefined_states(transitions: Sequence[Transition]) -> bool:
    """True if some state has two or more transitions on the same symbol."""
    for group in group_and_split(transitions, key=lambda t: t.start.id):
        symbols = [t.symbol for t in group]
        if len(symbols) != len(set(symbols)):
            return True
    return False


def powerset_construction(
    states: Sequence[State],
    alphabet: Alphabet,
    transitions: Sequence[Transition],
    start: State,
) -> tuple[tuple[State, ...], State, tuple[Transition, ...]]:
    """
    Subset construction over the states reachable from ``start``.

    Each new state stands for a set of original state ids (keyed by
    frozenset) and accepts iff any member accepts. The set {start} is
    numbered 0 and becomes the new start state; the remaining ids follow
    breadth-first discovery order with symbols visited in alphabet order.

    Returns:
        (states, start state, transitions) of the deterministic machine.
    """
    successors: dict[tuple[int, str], set[int]] = {}
    for t in transitions:
        successors.setdefault((t.start.id, t.symbol), set()).add(t.end.id)
    accepting_ids = {state.id for state in states if state.is_accepting}

    start_key = frozenset({start.id})
    table: dict[frozenset[int], State] = {
        start_key: State(0, not accepting_ids.isdisjoint(start_key)),
    }
    queue = deque([start_key])
    new_transitions: list[Transition] = []

    while queue:
        key = queue.popleft()
        for symbol in alphabet.symbols:
            target = frozenset().union(
                *(successors.get((state_id, symbol), ()) for state_id in sorted(key))
            )
            if target not in table:
                table[target] = State(len(table), not accepting_ids.isdisjoint(target))
                queue.append(target)
            new_transitions.append(Transition(table[key], table[target], symbol))

    logger.debug(
        "powerset construction: %d state(s) -> %d state(s)", len(states), len(table)
    )
    return tuple(table.values()), table[start_key], tuple(new_transitions)


def determinize(
    states: Sequence[State],
    alphabet: Alphabet,
    transitions: Sequence[Transition],
    start: Optional[State],
) -> tuple[tuple[State, ...], State, tuple[Transition, ...]]:
    """
    Run completion, then powerset construction if any state is still overdefined.

    Args:
        states: Dense states of the machine (state i at position i).
        alphabet: Alphabet of the machine.
        transitions: Current transitions.
        start: Start state, or None for the empty machine.

    Returns:
        (states, start state, transitions) of the deterministic machine.
    """
    completed_states, completed = complete_transitions(states, alphabet, transitions)
    if start is None:
        start = completed_states[0]

    if has_overdefined_states(completed):
        return powerset_construction(completed_states, alphabet, completed, start)

    return completed_states, start, completed
