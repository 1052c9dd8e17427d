"""A small table-driven finite state machine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class State:
    """A named state of a state machine."""

    name: str


@dataclass(frozen=True)
class Event:
    """A named event that can drive a state machine."""

    name: str


@dataclass(frozen=True)
class Transition:
    """A move from one state to another, triggered by an event."""

    from_state: State
    to_state: State
    event: Event


StateHandler = Callable[["StateMachine", State], None]


class StateMachine:
    """Runs events through a fixed list of transitions.

    The first transition whose source state and event match is taken. The
    exit handler is called for the old state, then the enter handler for the
    new one. Events raised from inside a handler are dropped.
    """

    def __init__(
        self,
        transitions: Iterable[Transition],
        initial_state: State,
        on_state_enter: Optional[StateHandler] = None,
        on_state_exit: Optional[StateHandler] = None,
    ) -> None:
        self.transitions = tuple(transitions)
        self.initial_state = initial_state
        self.on_state_enter = on_state_enter
        self.on_state_exit = on_state_exit
        self._state = initial_state
        self._in_transition = False

    def reset(self) -> None:
        """Return to the initial state without calling any handler."""
        self._state = self.initial_state
        self._in_transition = False

    @property
    def state(self) -> State:
        """The current state."""
        return self._state

    def process_event(self, event: Event) -> bool:
        """Apply an event; return whether a transition was taken."""
        if self._in_transition:
            _log.error("Attempting to process event from handler, dropping event")
            return False
        transition = next(
            (
                t
                for t in self.transitions
                if t.from_state == self._state and t.event == event
            ),
            None,
        )
        if transition is None:
            _log.debug(
                "Ignoring event with no defined transition (state=%s, event=%s)",
                self._state.name,
                event.name,
            )
            return False
        _log.info(
            "Executing transition from %s to %s (event=%s)",
            transition.from_state.name,
            transition.to_state.name,
            event.name,
        )
        self._in_transition = True
        try:
            if self.on_state_exit is not None:
                self.on_state_exit(self, self._state)
            self._state = transition.to_state
            if self.on_state_enter is not None:
                self.on_state_enter(self, self._state)
        finally:
            self._in_transition = False
        return True