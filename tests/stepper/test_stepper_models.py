"""Tests for stepper state models."""

import pytest

from txplan_app.stepper.models import StepDirection, StepperPhase, StepperState


class TestStepDirection:
    def test_delta(self):
        assert StepDirection.UP.delta == 1
        assert StepDirection.DOWN.delta == -1
        assert StepDirection.NONE.delta == 0

    def test_from_string(self):
        assert StepDirection("up") is StepDirection.UP
        with pytest.raises(ValueError):
            StepDirection("sideways")


class TestStepperState:
    """Test bounded value state transitions."""

    def test_value_clamped_on_creation(self):
        assert StepperState(value=0).value == 1
        assert StepperState(value=50).value == 20
        assert StepperState(value=7, min_value=2, max_value=5).value == 5

    def test_invalid_bounds(self):
        with pytest.raises(ValueError):
            StepperState(value=1, min_value=10, max_value=5)

    def test_single_value_range(self):
        state = StepperState(value=3, min_value=3, max_value=3)
        assert state.with_step(StepDirection.UP).value == 3
        assert state.with_step(StepDirection.DOWN).value == 3

    def test_phases(self):
        idle = StepperState(value=5)
        assert idle.phase is StepperPhase.IDLE

        pressed = idle.with_press(StepDirection.DOWN)
        assert pressed.phase is StepperPhase.PRESSED
        assert pressed.direction is StepDirection.DOWN

        repeating = pressed.with_repeating()
        assert repeating.phase is StepperPhase.REPEATING

        released = repeating.released()
        assert released.phase is StepperPhase.IDLE
        assert released.direction is StepDirection.NONE
        assert released.value == 5

    def test_step_stays_in_bounds(self):
        state = StepperState(value=19)
        state = state.with_step(StepDirection.UP).with_step(StepDirection.UP)
        assert state.value == 20

    def test_immutable(self):
        state = StepperState(value=4)
        with pytest.raises(AttributeError):
            state.value = 5
