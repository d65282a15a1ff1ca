"""Tests for the dispatch attempt state machine."""

import pytest

from resort_booking.booking.state_machine import (
    DispatchState,
    DispatchStateMachine,
    DispatchTrigger,
    InvalidTransitionError,
)


@pytest.fixture
def state_machine():
    return DispatchStateMachine()


class TestInitialState:
    def test_starts_idle(self, state_machine):
        assert state_machine.current_state == DispatchState.IDLE

    def test_initial_trace_is_idle(self, state_machine):
        assert state_machine.get_state_trace() == ["idle"]

    def test_not_terminal_at_start(self, state_machine):
        assert not state_machine.is_terminal()

    def test_only_submit_valid_from_idle(self, state_machine):
        assert state_machine.get_valid_triggers() == [DispatchTrigger.SUBMIT]


class TestTransitions:
    def test_submit_starts_attempt(self, state_machine):
        new = state_machine.transition(DispatchTrigger.SUBMIT)
        assert new == DispatchState.ATTEMPTING

    def test_signal_hands_off(self, state_machine):
        state_machine.transition(DispatchTrigger.SUBMIT)
        new = state_machine.transition(DispatchTrigger.SIGNAL_OBSERVED)
        assert new == DispatchState.HANDED_OFF
        assert state_machine.is_terminal()

    def test_focus_lost_hands_off(self, state_machine):
        state_machine.transition(DispatchTrigger.SUBMIT)
        assert state_machine.transition(DispatchTrigger.FOCUS_LOST) == DispatchState.HANDED_OFF

    def test_timer_then_navigation(self, state_machine):
        state_machine.transition(DispatchTrigger.SUBMIT)
        assert state_machine.transition(DispatchTrigger.TIMER_ELAPSED) == DispatchState.FALLING_BACK
        assert not state_machine.is_terminal()
        assert (
            state_machine.transition(DispatchTrigger.FALLBACK_NAVIGATED)
            == DispatchState.HANDED_OFF
        )
        assert state_machine.get_state_trace() == [
            "idle", "attempting", "falling_back", "handed_off",
        ]

    def test_platform_error_aborts(self, state_machine):
        state_machine.transition(DispatchTrigger.SUBMIT)
        assert state_machine.transition(DispatchTrigger.PLATFORM_ERROR) == DispatchState.ABORTED
        assert state_machine.is_terminal()

    def test_rejected_trigger_leaves_trace_unchanged(self, state_machine):
        state_machine.transition(DispatchTrigger.SUBMIT)
        with pytest.raises(InvalidTransitionError):
            state_machine.transition(DispatchTrigger.FALLBACK_NAVIGATED)
        assert state_machine.get_state_trace() == ["idle", "attempting"]


class TestInvalidTransitions:
    def test_signal_before_submit(self, state_machine):
        with pytest.raises(InvalidTransitionError, match="Valid triggers"):
            state_machine.transition(DispatchTrigger.SIGNAL_OBSERVED)

    def test_no_second_outcome_after_handoff(self, state_machine):
        state_machine.transition(DispatchTrigger.SUBMIT)
        state_machine.transition(DispatchTrigger.SIGNAL_OBSERVED)
        with pytest.raises(InvalidTransitionError):
            state_machine.transition(DispatchTrigger.TIMER_ELAPSED)

    def test_navigation_requires_fallback_state(self, state_machine):
        state_machine.transition(DispatchTrigger.SUBMIT)
        with pytest.raises(InvalidTransitionError):
            state_machine.transition(DispatchTrigger.FALLBACK_NAVIGATED)
