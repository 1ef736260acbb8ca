"""
Small sequence helpers shared by the automata algorithms.

- first_index_of / first_index_where: positional lookup, -1 when absent
- group_and_split: order-preserving grouping into plain lists
- permutation_equals: order-independent sequence comparison
- is_empty: emptiness test for arbitrary iterables
"""

from __future__ import annotations

from typing import Callable, Hashable, Iterable, TypeVar

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def first_index_of(items: Iterable[T], element: T) -> int:
    for idx, item in enumerate(items):
        if item == element:
            return idx
    return -1


def first_index_where(items: Iterable[T], predicate: Callable[[T], bool]) -> int:
    for idx, item in enumerate(items):
        if predicate(item):
            return idx
    return -1


def group_and_split(items: Iterable[T], key: Callable[[T], K]) -> list[list[T]]:
    """
    Group items by key and return the groups as plain lists.

    Groups appear in the order their key is first seen; items keep their
    input order inside each group. Repeated calls over the same input
    therefore always produce the same sequence of groups.
    """
    groups: dict[K, list[T]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)
    return list(groups.values())


def permutation_equals(first: Iterable[T], second: Iterable[T]) -> bool:
    """True if both sequences hold the same elements, in any order."""
    p1 = list(first)
    p2 = list(second)
    if len(p1) != len(p2):
        return False
    return all(outer in p2 for outer in p1) and all(inner in p1 for inner in p2)


def is_empty(items: Iterable[T]) -> bool:
    for _ in items:
        return False
    return True
