"""Type definitions for the step navigation engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

# Observer notified with the new step after every committed transition
StepChangeCallback = Callable[[int], None]
OptionalStepChangeCallback = Optional[StepChangeCallback]


class NavigationAction(Enum):
    """Transitions a navigator can perform."""

    ADVANCE = "advance"
    RETREAT = "retreat"
    JUMP = "jump"
    RESET = "reset"

    @property
    def requires_step(self) -> bool:
        """Whether the action needs a target step number."""
        return self is NavigationAction.JUMP


@dataclass(frozen=True)
class NavigatorState:
    """Immutable view of a navigator at one point in time."""

    current_step: int
    total_steps: int
    history: tuple[int, ...]
    is_first_step: bool
    is_last_step: bool
    progress_percentage: float
