"""
Alphabet: the ordered, duplicate-free set of input symbols of an FSM.

Symbol order is significant: it fixes the column order of the partition
matrices built during minimization.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional


@dataclass(frozen=True)
class Alphabet:
    """Immutable sequence of unique symbols. Build instances with ``Alphabet.create``."""

    symbols: tuple[str, ...] = ()

    def __post_init__(self):
        if len(set(self.symbols)) != len(self.symbols):
            raise ValueError("alphabet symbols must be unique")

    @classmethod
    def create(cls, symbols: Optional[Iterable[str]] = None) -> "Alphabet":
        """
        Create an alphabet from any iterable of symbols.

        Duplicates are dropped keeping the first occurrence. ``None`` or an
        empty iterable yields the shared ``EMPTY_ALPHABET`` instance, so
        callers may test for "no alphabet" with ``is``.
        """
        if symbols is None:
            return EMPTY_ALPHABET
        distinct = tuple(dict.fromkeys(symbols))
        if not distinct:
            return EMPTY_ALPHABET
        return cls(distinct)

    @classmethod
    def empty(cls) -> "Alphabet":
        return EMPTY_ALPHABET

    @property
    def cardinality(self) -> int:
        return len(self.symbols)

    def contains(self, symbol: str) -> bool:
        return symbol in self.symbols

    def index(self, symbol: str) -> int:
        """Column index of ``symbol``; raises ValueError if it is not a member."""
        try:
            return self.symbols.index(symbol)
        except ValueError:
            raise ValueError(f"symbol not in alphabet: {symbol!r}") from None

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.symbols

    def __iter__(self) -> Iterator[str]:
        return iter(self.symbols)

    def __len__(self) -> int:
        return len(self.symbols)


EMPTY_ALPHABET = Alphabet(())
