"""
Pytest configuration and fixtures for fsmsolver tests.

Provides the alphabets and sample machines shared by unit and integration tests.
"""

import pytest


@pytest.fixture
def binary_alphabet():
    """Alphabet {0, 1}."""
    from fsmsolver.core.alphabet import Alphabet
    return Alphabet.create("01")


@pytest.fixture
def ab_alphabet():
    """Alphabet {a, b}."""
    from fsmsolver.core.alphabet import Alphabet
    return Alphabet.create("ab")


@pytest.fixture
def complete_transitions():
    """
    Total, conflict-free transitions for two states over {0, 1}.

    Every input leads to state 1.
    """
    return [(0, 1, "0"), (0, 1, "1"), (1, 1, "0"), (1, 1, "1")]


@pytest.fixture
def div3_fsm():
    """Deterministic, minimal machine for binary multiples of three."""
    from fsmsolver.samples import make_div3_fsm
    return make_div3_fsm()
