from __future__ import annotations

import logging
from typing import Iterable, Optional

import numpy as np

from fsmsolver.algorithms.classify import classify
from fsmsolver.algorithms.determinize import determinize
from fsmsolver.algorithms.minimize import destination_matrix
from fsmsolver.algorithms.minimize import minimize as minimize_machine
from fsmsolver.core.alphabet import Alphabet
from fsmsolver.core.errors import InvalidOperationError
from fsmsolver.core.types import FsmType, MachineSpec, State, Transition, TransitionTriple
from fsmsolver.core.validation import validate_description

logger = logging.getLogger(__name__)


class FSM:
    """
    A finite state machine, deterministic or not.

    Whether a machine is deterministic follows from its states and
    transitions alone, so a single class covers both kinds; ``type`` is
    recomputed whenever the transition structure is replaced.

    Instances are built through ``FSM.create`` (or ``FSM.from_spec``) and
    change only through ``make_deterministic`` and ``minimize``.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        states: tuple[State, ...],
        starting_state: Optional[State],
        transitions: tuple[Transition, ...],
    ):
        self._alphabet = alphabet
        self._minimized = False
        self._commit(states, starting_state, transitions)

    @classmethod
    def create(
        cls,
        alphabet: Optional[Alphabet],
        number_of_states: int,
        accepted_states: Optional[Iterable[int]] = None,
        start_state: int = 0,
        transitions: Optional[Iterable[TransitionTriple]] = None,
    ) -> "FSM":
        """
        Create a validated FSM from raw ids and (from, to, symbol) triples.

        Every check runs before any state is built, so either a fully
        consistent machine is returned or an error is raised.

        Args:
            alphabet: Alphabet of the machine; must not be None.
            number_of_states: Number of states, >= 0. States get ids
                0..number_of_states-1.
            accepted_states: Ids of accepting states; at most
                number_of_states entries, each in [0, number_of_states).
            start_state: Id of the start state, in [0, number_of_states).
                Ignored for a machine without states.
            transitions: (from id, to id, symbol) triples with both ids in
                range and the symbol in the alphabet.

        Returns:
            New FSM instance.

        Raises:
            NullArgumentError: alphabet is None.
            OutOfRangeError: negative state count or start state out of range.
            InvalidArgumentError: invalid accepted states or transitions.
        """
        accepted, triples = validate_description(
            alphabet, number_of_states, accepted_states, start_state, transitions
        )

        accepted_ids = set(accepted)
        states = tuple(State(i, i in accepted_ids) for i in range(number_of_states))
        start = states[start_state] if states else None
        built = tuple(
            Transition(states[from_id], states[to_id], symbol)
            for from_id, to_id, symbol in triples
        )
        return cls(alphabet, states, start, built)

    @classmethod
    def from_spec(cls, spec: MachineSpec) -> "FSM":
        return cls.create(
            spec.alphabet,
            spec.number_of_states,
            spec.accepted_states,
            spec.start_state,
            spec.transitions,
        )

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def states(self) -> tuple[State, ...]:
        return self._states

    @property
    def accepted_states(self) -> tuple[State, ...]:
        return self._accepted_states

    @property
    def starting_state(self) -> Optional[State]:
        return self._starting_state

    @property
    def transitions(self) -> tuple[Transition, ...]:
        return self._transitions

    @property
    def type(self) -> FsmType:
        return self._type

    @property
    def is_deterministic(self) -> bool:
        return self._type is FsmType.DETERMINISTIC

    @property
    def is_minimized(self) -> bool:
        return self._minimized

    def make_deterministic(self) -> None:
        """
        Turn this FSM into an equivalent deterministic one. No-op if it
        already is. The result is not guaranteed to be minimal.
        """
        if self.is_deterministic:
            return

        states, start, transitions = determinize(
            self._states, self._alphabet, self._transitions, self._starting_state
        )
        self._commit(states, start, transitions)
        logger.debug(
            "determinized: %d state(s), %d transition(s), type=%s",
            len(states), len(transitions), self._type.value,
        )

    def minimize(self) -> None:
        """
        Replace this FSM by its minimal equivalent. Only valid on a
        deterministic FSM; calling it again afterwards changes nothing.

        Raises:
            InvalidOperationError: the FSM is not deterministic.
        """
        if not self.is_deterministic:
            raise InvalidOperationError("minimization requires a deterministic machine")
        if self._minimized:
            return

        states, start, transitions = minimize_machine(
            self._states, self._alphabet, self._transitions, self._starting_state
        )
        self._commit(states, start, transitions)
        self._minimized = True

    def transition_table(self) -> np.ndarray:
        """
        Destination id for every (state id, alphabet column) pair.

        Raises:
            InvalidOperationError: the FSM is not deterministic.
        """
        if not self.is_deterministic:
            raise InvalidOperationError("transition table requires a deterministic machine")
        return destination_matrix(self._states, self._alphabet, self._transitions)

    def _commit(
        self,
        states: tuple[State, ...],
        starting_state: Optional[State],
        transitions: tuple[Transition, ...],
    ) -> None:
        # Build every derived field first, then assign them together.
        accepted = tuple(state for state in states if state.is_accepting)
        fsm_type = classify(states, self._alphabet, transitions)

        self._states = tuple(states)
        self._accepted_states = accepted
        self._starting_state = starting_state
        self._transitions = tuple(transitions)
        self._type = fsm_type

    def __repr__(self) -> str:
        start = None if self._starting_state is None else self._starting_state.id
        return (
            f"FSM(states={len(self._states)}, accepted={[s.id for s in self._accepted_states]}, "
            f"start={start}, transitions={len(self._transitions)}, type={self._type.value})"
        )
