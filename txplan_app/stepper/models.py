"""
Stepper state models.

StepperState is immutable; the controller swaps in a new instance on every
transition. The phase is derived from direction and is_repeating.
"""

from dataclasses import dataclass
from enum import Enum


class StepDirection(str, Enum):
    """Adjustment direction of a press."""
    UP = "up"
    DOWN = "down"
    NONE = "none"

    @property
    def delta(self) -> int:
        if self is StepDirection.UP:
            return 1
        if self is StepDirection.DOWN:
            return -1
        return 0


class StepperPhase(str, Enum):
    """Stepper lifecycle phases."""
    IDLE = "idle"
    PRESSED = "pressed"             # Direction fixed, repeat not yet armed
    REPEATING = "repeating"         # Direction fixed, auto-incrementing


@dataclass(frozen=True)
class StepperState:
    """Bounded integer value plus the active press, if any."""

    value: int
    min_value: int = 1
    max_value: int = 20
    direction: StepDirection = StepDirection.NONE
    is_repeating: bool = False

    def __post_init__(self):
        if self.min_value > self.max_value:
            raise ValueError(
                f"min_value {self.min_value} is greater than max_value {self.max_value}"
            )
        object.__setattr__(self, "value", self.clamp(self.value))

    @property
    def phase(self) -> StepperPhase:
        if self.direction is StepDirection.NONE:
            return StepperPhase.IDLE
        if self.is_repeating:
            return StepperPhase.REPEATING
        return StepperPhase.PRESSED

    def clamp(self, value: int) -> int:
        return max(self.min_value, min(self.max_value, value))

    def with_value(self, value: int) -> 'StepperState':
        """Create new state with the value replaced (and clamped)."""
        return StepperState(
            value=value,
            min_value=self.min_value,
            max_value=self.max_value,
            direction=self.direction,
            is_repeating=self.is_repeating
        )

    def with_step(self, direction: StepDirection) -> 'StepperState':
        """Create new state one step away in the given direction."""
        return self.with_value(self.value + direction.delta)

    def with_press(self, direction: StepDirection) -> 'StepperState':
        """Enter the pressed phase for a direction."""
        return StepperState(
            value=self.value,
            min_value=self.min_value,
            max_value=self.max_value,
            direction=direction,
            is_repeating=False
        )

    def with_repeating(self) -> 'StepperState':
        """Enter the repeating phase, keeping the direction."""
        return StepperState(
            value=self.value,
            min_value=self.min_value,
            max_value=self.max_value,
            direction=self.direction,
            is_repeating=True
        )

    def released(self) -> 'StepperState':
        """Return to idle, clearing the direction."""
        return StepperState(
            value=self.value,
            min_value=self.min_value,
            max_value=self.max_value
        )
