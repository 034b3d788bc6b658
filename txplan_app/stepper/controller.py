"""
Press-and-hold stepper controller.

Transitions:
    IDLE      --press_in(d)--> PRESSED    one immediate step, arm timer scheduled
    PRESSED   --arm timer----> REPEATING  recurring tick scheduled
    REPEATING --tick---------> REPEATING  one step per tick
    PRESSED/REPEATING --press_out--> IDLE timers cancelled

A press_in while a press is active releases it first. Every timer callback
carries the generation of the press that scheduled it and is ignored once
that press is over, so nothing fires after a release or dispose.
"""

from collections.abc import Callable
from typing import Optional, Union

from ..config.defaults import StepperParams
from ..errors import StateTransitionError
from ..logging.config import get_stepper_logger, log_state_transition
from .models import StepDirection, StepperPhase, StepperState
from .scheduler import Scheduler, TimerHandle

stepper_logger = get_stepper_logger(__name__)


class StepperController:
    """Bounded integer adjuster with single-step and auto-repeat presses."""

    def __init__(
        self,
        scheduler: Scheduler,
        on_change: Optional[Callable[[int], None]] = None,
        value: Optional[int] = None,
        params: Optional[StepperParams] = None,
        stepper_id: Optional[str] = None
    ):
        self.params = params or StepperParams()
        self.scheduler = scheduler
        self.on_change = on_change
        self.stepper_id = stepper_id or f"stepper-{id(self):x}"
        self.logger = stepper_logger

        self._state = StepperState(
            value=self.params.min_value if value is None else value,
            min_value=self.params.min_value,
            max_value=self.params.max_value
        )
        self._timer: Optional[TimerHandle] = None
        self._generation = 0
        self._disposed = False

    @property
    def state(self) -> StepperState:
        return self._state

    @property
    def value(self) -> int:
        return self._state.value

    @property
    def phase(self) -> StepperPhase:
        return self._state.phase

    @property
    def direction(self) -> StepDirection:
        return self._state.direction

    @property
    def is_repeating(self) -> bool:
        return self._state.is_repeating

    @property
    def disposed(self) -> bool:
        return self._disposed

    def press_in(self, direction: Union[StepDirection, str]) -> None:
        """
        Start a press: step once now and arm the auto-repeat timer.

        Raises:
            ValueError: If direction is not up or down
            StateTransitionError: If the stepper has been disposed
        """
        direction = StepDirection(direction)
        if direction is StepDirection.NONE:
            raise ValueError("press_in requires direction 'up' or 'down'")
        self._ensure_active("press_in")

        if self._state.phase is not StepperPhase.IDLE:
            self._release("implicit_release")

        self._generation += 1
        generation = self._generation

        self._state = self._state.with_press(direction)
        self._log_transition(StepperPhase.IDLE, "press_in", direction=direction.value)

        self._apply_step(direction)
        self._timer = self.scheduler.call_later(
            self.params.arm_delay_ms,
            lambda: self._on_arm(generation)
        )

    def press_out(self) -> None:
        """End the active press; a no-op when idle or disposed."""
        if self._disposed or self._state.phase is StepperPhase.IDLE:
            return
        self._release("press_out")

    def step(self, direction: Union[StepDirection, str]) -> int:
        """Apply a single step without any timers (a tap). Returns the value."""
        direction = StepDirection(direction)
        self._ensure_active("step")
        self._apply_step(direction)
        return self._state.value

    def set_value(self, value: int) -> None:
        """Sync the value from outside (clamped); on_change is not called."""
        self._state = self._state.with_value(value)

    def dispose(self) -> None:
        """Cancel any pending timer and refuse further presses."""
        if self._disposed:
            return
        if self._state.phase is not StepperPhase.IDLE:
            self._release("dispose")
        self._cancel_timer()
        self._disposed = True
        self.logger.debug("Stepper disposed", stepper_id=self.stepper_id, value=self._state.value)

    def _on_arm(self, generation: int) -> None:
        if not self._is_current(generation, StepperPhase.PRESSED):
            return

        self._state = self._state.with_repeating()
        self._log_transition(StepperPhase.PRESSED, "arm_timer", direction=self._state.direction.value)

        self._timer = self.scheduler.call_later(
            self.params.repeat_interval_ms,
            lambda: self._on_tick(generation)
        )

    def _on_tick(self, generation: int) -> None:
        if not self._is_current(generation, StepperPhase.REPEATING):
            return

        self._apply_step(self._state.direction)
        self._timer = self.scheduler.call_later(
            self.params.repeat_interval_ms,
            lambda: self._on_tick(generation)
        )

    def _is_current(self, generation: int, phase: StepperPhase) -> bool:
        return (
            not self._disposed
            and generation == self._generation
            and self._state.phase is phase
        )

    def _apply_step(self, direction: StepDirection) -> None:
        previous = self._state.value
        self._state = self._state.with_step(direction)

        if self._state.value == previous:
            self.logger.debug(
                "Step held at bound",
                stepper_id=self.stepper_id,
                value=previous,
                direction=direction.value
            )
            return

        if self.on_change is not None:
            self.on_change(self._state.value)

    def _release(self, trigger: str) -> None:
        from_phase = self._state.phase
        self._cancel_timer()
        self._state = self._state.released()
        self._log_transition(from_phase, trigger)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _log_transition(self, from_phase: StepperPhase, trigger: str, **context) -> None:
        log_state_transition(
            self.logger,
            stepper_id=self.stepper_id,
            from_state=from_phase.value,
            to_state=self._state.phase.value,
            trigger=trigger,
            context={"value": self._state.value, **context}
        )

    def _ensure_active(self, operation: str) -> None:
        if self._disposed:
            raise StateTransitionError(
                f"Cannot {operation} on a disposed stepper",
                current_state="disposed",
                attempted_transition=operation,
                context={"stepper_id": self.stepper_id}
            )
