"""
Minimization of deterministic FSMs by Moore partition refinement.

A partition is an ordered list of groups, each an ordered list of state
ids. The partition matrix has one row per state and one column per
alphabet symbol (alphabet order); entry (i, j) is the index of the group
that state i reaches on symbol j. Groups are split by identical rows until
the partition stops changing.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from fsmsolver.core.alphabet import Alphabet
from fsmsolver.core.types import State, Transition
from fsmsolver.util.sequences import first_index_where, group_and_split

logger = logging.getLogger(__name__)

Partition = list[list[int]]


def initial_partition(states: Sequence[State]) -> Partition:
    """Split states into accepting / non-accepting groups, in first-appearance order."""
    return [
        [state.id for state in group]
        for group in group_and_split(states, key=lambda s: s.is_accepting)
    ]


def destination_matrix(
    states: Sequence[State],
    alphabet: Alphabet,
    transitions: Sequence[Transition],
) -> np.ndarray:
    """
    Destination state id for every (state id, symbol column) pair.

    Requires a total transition function; raises ValueError otherwise.
    """
    matrix = np.full((len(states), alphabet.cardinality), -1, dtype=np.int64)
    for t in transitions:
        matrix[t.start.id, alphabet.index(t.symbol)] = t.end.id
    if (matrix < 0).any():
        raise ValueError("transition function must be defined for every state and symbol")
    return matrix


def partition_matrix(destinations: np.ndarray, partition: Partition) -> np.ndarray:
    """Replace every destination id by the index of its group in ``partition``."""
    group_of = np.empty(destinations.shape[0], dtype=np.int64)
    for group_idx, group in enumerate(partition):
        group_of[group] = group_idx
    return group_of[destinations]


def split_groups(partition: Partition, matrix: np.ndarray) -> Partition:
    """
    Split every group into sub-groups of states with identical matrix rows.

    Sub-groups keep the order in which they first appear inside their
    group, and groups keep their relative order, so the same input always
    produces the same output sequence.
    """
    refined: Partition = []
    for group in partition:
        refined.extend(
            group_and_split(group, key=lambda state_id: tuple(matrix[state_id].tolist()))
        )
    return refined


def refine(destinations: np.ndarray, partition: Partition) -> tuple[Partition, np.ndarray]:
    """
    Refine ``partition`` until it is stable.

    Returns:
        (stable partition, partition matrix computed against it)
    """
    matrix = partition_matrix(destinations, partition)
    refined = split_groups(partition, matrix)
    rounds = 1

    # groups only ever split, so this terminates after at most n rounds
    while refined != partition:
        partition = refined
        matrix = partition_matrix(destinations, partition)
        refined = split_groups(partition, matrix)
        rounds += 1

    logger.debug("partition refinement stable after %d round(s): %d group(s)", rounds, len(refined))
    return refined, matrix


def minimize(
    states: Sequence[State],
    alphabet: Alphabet,
    transitions: Sequence[Transition],
    start: State,
) -> tuple[tuple[State, ...], State, tuple[Transition, ...]]:
    """
    Build the minimal deterministic machine equivalent to the given one.

    Each group of the stable partition becomes one state, numbered by its
    position. Its outgoing transitions are read from the matrix row of any
    member, since all members of a stable group share the same row.

    Args:
        states: Dense states of a deterministic machine.
        alphabet: Alphabet of the machine.
        transitions: Total, conflict-free transitions.
        start: Start state.

    Returns:
        (states, start state, transitions) of the minimal machine.
    """
    destinations = destination_matrix(states, alphabet, transitions)
    partition, matrix = refine(destinations, initial_partition(states))

    minimal = tuple(
        State(group_idx, any(states[state_id].is_accepting for state_id in group))
        for group_idx, group in enumerate(partition)
    )
    start_idx = first_index_where(partition, lambda group: start.id in group)

    new_transitions: list[Transition] = []
    for group_idx, group in enumerate(partition):
        row = matrix[group[0]]
        new_transitions.extend(
            Transition(minimal[group_idx], minimal[int(row[col])], symbol)
            for col, symbol in enumerate(alphabet.symbols)
        )

    logger.debug("minimized %d state(s) to %d", len(states), len(minimal))
    return minimal, minimal[start_idx], tuple(new_transitions)
