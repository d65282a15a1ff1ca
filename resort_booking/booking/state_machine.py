"""
Finite state machine for a single delivery dispatch attempt.

An attempt starts idle, invokes the native deep link, and then either
observes the app taking over the page or falls back to the web URL.
Every transition is explicit so the outcome of the timer/signal race is
always recorded in a predictable trace.

Usage:
    sm = DispatchStateMachine()
    sm.transition(DispatchTrigger.SUBMIT)
    assert sm.current_state == DispatchState.ATTEMPTING
"""

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class DispatchState(str, Enum):
    """All possible states of a dispatch attempt."""
    IDLE = "idle"
    ATTEMPTING = "attempting"
    FALLING_BACK = "falling_back"
    HANDED_OFF = "handed_off"
    ABORTED = "aborted"


class DispatchTrigger(str, Enum):
    """Events that cause state transitions."""
    SUBMIT = "submit"
    SIGNAL_OBSERVED = "signal_observed"
    FOCUS_LOST = "focus_lost"
    TIMER_ELAPSED = "timer_elapsed"
    FALLBACK_NAVIGATED = "fallback_navigated"
    PLATFORM_ERROR = "platform_error"


@dataclass
class Transition:
    """A single valid state transition."""
    from_state: DispatchState
    to_state: DispatchState
    trigger: DispatchTrigger


class InvalidTransitionError(Exception):
    """Raised when a transition is not valid from the current state."""


class DispatchStateMachine:
    """Deterministic state machine for one native-handoff attempt."""

    TRANSITIONS: list[Transition] = [
        Transition(DispatchState.IDLE, DispatchState.ATTEMPTING,
                   DispatchTrigger.SUBMIT),

        # --- Native app took over ---
        Transition(DispatchState.ATTEMPTING, DispatchState.HANDED_OFF,
                   DispatchTrigger.SIGNAL_OBSERVED),
        # Desktop timer found the page unfocused without a signal
        Transition(DispatchState.ATTEMPTING, DispatchState.HANDED_OFF,
                   DispatchTrigger.FOCUS_LOST),

        # --- Fallback ---
        Transition(DispatchState.ATTEMPTING, DispatchState.FALLING_BACK,
                   DispatchTrigger.TIMER_ELAPSED),
        Transition(DispatchState.FALLING_BACK, DispatchState.HANDED_OFF,
                   DispatchTrigger.FALLBACK_NAVIGATED),

        # --- Errors ---
        Transition(DispatchState.ATTEMPTING, DispatchState.ABORTED,
                   DispatchTrigger.PLATFORM_ERROR),
        Transition(DispatchState.FALLING_BACK, DispatchState.ABORTED,
                   DispatchTrigger.PLATFORM_ERROR),
    ]

    TERMINAL_STATES = frozenset({DispatchState.HANDED_OFF, DispatchState.ABORTED})

    def __init__(self) -> None:
        self._current_state = DispatchState.IDLE
        self._visited: list[DispatchState] = [DispatchState.IDLE]

    @property
    def current_state(self) -> DispatchState:
        return self._current_state

    def transition(self, trigger: DispatchTrigger) -> DispatchState:
        """
        Execute a state transition.

        Raises:
            InvalidTransitionError: If no valid transition exists.
        """
        for t in self.TRANSITIONS:
            if t.from_state == self._current_state and t.trigger == trigger:
                old_state = self._current_state
                self._current_state = t.to_state
                self._visited.append(self._current_state)
                logger.debug(
                    "Dispatch transition: %s -> %s (trigger: %s)",
                    old_state.value, self._current_state.value, trigger.value,
                )
                return self._current_state

        valid = [t.value for t in self.get_valid_triggers()]
        raise InvalidTransitionError(
            f"No valid transition from '{self._current_state.value}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def get_valid_triggers(self) -> list[DispatchTrigger]:
        """Return all triggers valid from the current state."""
        return [t.trigger for t in self.TRANSITIONS if t.from_state == self._current_state]

    def get_state_trace(self) -> list[str]:
        """Return ordered list of state names visited."""
        return [state.value for state in self._visited]

    def is_terminal(self) -> bool:
        return self._current_state in self.TERMINAL_STATES
