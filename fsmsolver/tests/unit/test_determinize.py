"""
Test determinize.py: completion, powerset construction, FSM.make_deterministic.
"""

import itertools

from fsmsolver.algorithms.determinize import (
    complete_transitions,
    determinize,
    has_overdefined_states,
    powerset_construction,
)
from fsmsolver.core.alphabet import Alphabet
from fsmsolver.core.machine import FSM
from fsmsolver.core.types import FsmType, State, Transition
from fsmsolver.samples import make_ends_with_one_nfa, make_partial_fsm


def _accepts(fsm: FSM, word: str) -> bool:
    current = {fsm.starting_state.id}
    for symbol in word:
        current = {
            t.end.id for t in fsm.transitions
            if t.start.id in current and t.symbol == symbol
        }
    return any(fsm.states[i].is_accepting for i in current)


def _words(alphabet: Alphabet, max_len: int):
    for length in range(max_len + 1):
        for combo in itertools.product(alphabet.symbols, repeat=length):
            yield "".join(combo)


def _complete(fsm: FSM):
    return complete_transitions(fsm.states, fsm.alphabet, fsm.transitions)


def _outgoing(fsm: FSM, state_id: int) -> dict[str, list[int]]:
    result: dict[str, list[int]] = {}
    for t in fsm.transitions:
        if t.start.id == state_id:
            result.setdefault(t.symbol, []).append(t.end.id)
    return result


# ============================================================================
# Completion
# ============================================================================


class TestCompleteTransitions:
    """Step A: totalising the transition function."""

    def test_empty_machine_gets_single_looping_state(self, ab_alphabet):
        states, transitions = complete_transitions((), ab_alphabet, ())
        assert states == (State(0, False),)
        assert [t.as_triple() for t in transitions] == [(0, 0, "a"), (0, 0, "b")]

    def test_complete_machine_unchanged(self, binary_alphabet, complete_transitions):
        fsm = FSM.create(binary_alphabet, 2, [1], 0, complete_transitions)
        states, transitions = _complete(fsm)
        assert states == fsm.states
        assert transitions == fsm.transitions

    def test_missing_symbols_go_to_shared_sink(self):
        fsm = make_partial_fsm()
        states, transitions = _complete(fsm)

        assert len(states) == 3
        sink = states[2]
        assert sink.id == 2
        assert not sink.is_accepting

        triples = {t.as_triple() for t in transitions}
        assert (0, 1, "a") in triples
        assert (0, 2, "b") in triples
        assert (1, 2, "a") in triples
        assert (1, 2, "b") in triples
        assert (2, 2, "a") in triples
        assert (2, 2, "b") in triples
        assert len(transitions) == 6

    def test_overdefined_state_not_completed_twice(self, binary_alphabet):
        """A state with all symbols present (some twice) needs no sink edge."""
        fsm = FSM.create(
            binary_alphabet, 1, [0], 0, [(0, 0, "0"), (0, 0, "1"), (0, 0, "1")]
        )
        states, transitions = _complete(fsm)
        assert len(states) == 1
        assert len(transitions) == 3


# ============================================================================
# Powerset construction
# ============================================================================


class TestPowersetConstruction:
    """Step B: subset construction."""

    def test_has_overdefined_states(self):
        a, b = State(0), State(1)
        assert has_overdefined_states([Transition(a, a, "x"), Transition(a, b, "x")])
        assert not has_overdefined_states([Transition(a, a, "x"), Transition(b, a, "x")])
        assert not has_overdefined_states([])

    def test_start_subset_is_state_zero(self):
        nfa = make_ends_with_one_nfa()
        states, transitions = _complete(nfa)
        new_states, start, new_transitions = powerset_construction(
            states, nfa.alphabet, transitions, nfa.starting_state
        )
        assert start.id == 0
        assert start is new_states[0]
        assert [s.id for s in new_states] == list(range(len(new_states)))

    def test_result_is_total_and_conflict_free(self):
        nfa = make_ends_with_one_nfa()
        states, transitions = _complete(nfa)
        new_states, _, new_transitions = powerset_construction(
            states, nfa.alphabet, transitions, nfa.starting_state
        )
        assert len(new_transitions) == len(new_states) * nfa.alphabet.cardinality
        pairs = {(t.start.id, t.symbol) for t in new_transitions}
        assert len(pairs) == len(new_transitions)

    def test_accepting_iff_any_member_accepts(self):
        nfa = make_ends_with_one_nfa()
        states, transitions = _complete(nfa)
        new_states, _, _ = powerset_construction(
            states, nfa.alphabet, transitions, nfa.starting_state
        )
        # {0} rejects; {0, 1} accepts
        assert not new_states[0].is_accepting
        assert any(s.is_accepting for s in new_states)

    def test_determinize_empty_machine(self, binary_alphabet):
        states, start, transitions = determinize((), binary_alphabet, (), None)
        assert len(states) == 1
        assert start is states[0]
        assert len(transitions) == 2


# ============================================================================
# FSM.make_deterministic
# ============================================================================


class TestMakeDeterministic:
    """End-to-end determinization on FSM instances."""

    def test_noop_when_deterministic(self, div3_fsm):
        states_before = div3_fsm.states
        transitions_before = div3_fsm.transitions
        div3_fsm.make_deterministic()
        assert div3_fsm.states is states_before
        assert div3_fsm.transitions is transitions_before

    def test_empty_machine(self, binary_alphabet):
        fsm = FSM.create(binary_alphabet, 0)
        fsm.make_deterministic()

        assert fsm.type is FsmType.DETERMINISTIC
        assert len(fsm.states) == 1
        assert fsm.starting_state is fsm.states[0]
        assert fsm.accepted_states == ()
        assert len(fsm.transitions) == 2
        assert not _accepts(fsm, "")
        assert not _accepts(fsm, "0101")

    def test_underdefined_machine(self):
        fsm = make_partial_fsm()
        fsm.make_deterministic()

        assert fsm.type is FsmType.DETERMINISTIC
        assert len(fsm.states) == 3
        assert len(fsm.transitions) == 6
        assert [s.id for s in fsm.accepted_states] == [1]
        for state in fsm.states:
            outgoing = _outgoing(fsm, state.id)
            assert sorted(outgoing) == ["a", "b"]
            assert all(len(dst) == 1 for dst in outgoing.values())

    def test_state_without_transitions_is_completed(self, ab_alphabet):
        """States that never appear as a transition source still get completed."""
        fsm = FSM.create(ab_alphabet, 3, [2], 0, [(0, 1, "a"), (0, 1, "b"), (1, 2, "a"), (1, 2, "b")])
        fsm.make_deterministic()
        assert fsm.type is FsmType.DETERMINISTIC
        assert len(fsm.states) == 4

    def test_overdefined_machine_preserves_language(self):
        nfa = make_ends_with_one_nfa()
        expected = {w: _accepts(nfa, w) for w in _words(nfa.alphabet, 6)}

        nfa.make_deterministic()

        assert nfa.type is FsmType.DETERMINISTIC
        assert nfa.starting_state.id == 0
        assert len(nfa.states) == 4
        for word, accepted in expected.items():
            assert _accepts(nfa, word) == accepted, word

    def test_mixed_under_and_overdefined(self, ab_alphabet):
        """(0, a) is doubled, (1, b) and all of 2 are missing."""
        fsm = FSM.create(
            ab_alphabet,
            3,
            [2],
            0,
            [(0, 0, "a"), (0, 1, "a"), (0, 0, "b"), (1, 2, "a")],
        )
        expected = {w: _accepts(fsm, w) for w in _words(ab_alphabet, 6)}

        fsm.make_deterministic()

        assert fsm.type is FsmType.DETERMINISTIC
        for word, accepted in expected.items():
            assert _accepts(fsm, word) == accepted, word

    def test_idempotent(self):
        nfa = make_ends_with_one_nfa()
        nfa.make_deterministic()
        snapshot = (nfa.states, nfa.transitions, nfa.starting_state)
        nfa.make_deterministic()
        assert (nfa.states, nfa.transitions, nfa.starting_state) == snapshot

    def test_accepted_states_follow_new_states(self):
        nfa = make_ends_with_one_nfa()
        nfa.make_deterministic()
        assert nfa.accepted_states == tuple(s for s in nfa.states if s.is_accepting)
        assert nfa.starting_state in nfa.states
        for t in nfa.transitions:
            assert t.start in nfa.states
            assert t.end in nfa.states
            assert t.symbol in nfa.alphabet
