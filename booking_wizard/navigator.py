"""Step navigation controller for multi-step booking wizards.

Tracks the current step, the path of steps visited to reach it, and derived
progress. Boundary moves (advancing past the last step, retreating before the
first, jumping out of range) are reported through a boolean result instead of
raising, since they routinely happen when UI state lags behind a click.
"""

from __future__ import annotations

import logging
from typing import Optional

from booking_wizard.types import (
    NavigationAction,
    NavigatorState,
    OptionalStepChangeCallback,
)

logger = logging.getLogger(__name__)


class StepConfigurationError(ValueError):
    """Raised when a navigator is constructed with invalid step bounds."""


def _reconcile(history: list[int], step: int) -> list[int]:
    """Return history updated so that it ends at ``step``.

    A step already on the path truncates the history back to its first
    occurrence; an unseen step extends the path.
    """
    if step in history:
        return history[: history.index(step) + 1]
    return [*history, step]


class StepNavigator:
    """Bounds-respecting tracker of wizard position and the path taken to it.

    Attributes are exposed as read-only properties; the state changes only
    through :meth:`advance`, :meth:`retreat`, :meth:`jump_to` and :meth:`reset`.
    """

    def __init__(
        self,
        total_steps: int,
        initial_step: int = 1,
        on_step_change: OptionalStepChangeCallback = None,
    ) -> None:
        """Initialize the navigator.

        Args:
            total_steps: Number of steps in the wizard, at least 1.
            initial_step: Step to start on (and return to on reset).
            on_step_change: Optional callback invoked with the new step after
                every successful transition.

        Raises:
            StepConfigurationError: If the bounds are not integers, if
                ``total_steps`` is below 1 or ``initial_step`` is outside
                ``[1, total_steps]``.
        """
        for name, value in (("total_steps", total_steps), ("initial_step", initial_step)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise StepConfigurationError(f"{name} must be an integer, got {value!r}")
        if total_steps < 1:
            raise StepConfigurationError(f"total_steps must be at least 1, got {total_steps}")
        if not 1 <= initial_step <= total_steps:
            raise StepConfigurationError(
                f"initial_step must be between 1 and {total_steps}, got {initial_step}"
            )

        self._total_steps = total_steps
        self._initial_step = initial_step
        self._on_step_change = on_step_change
        self._current_step = initial_step
        self._history: list[int] = [initial_step]

    def __repr__(self) -> str:
        return (
            f"StepNavigator(current_step={self._current_step}, "
            f"total_steps={self._total_steps}, history={self._history!r})"
        )

    @property
    def current_step(self) -> int:
        return self._current_step

    @property
    def total_steps(self) -> int:
        return self._total_steps

    @property
    def initial_step(self) -> int:
        return self._initial_step

    @property
    def history(self) -> tuple[int, ...]:
        """Snapshot of the visited path, oldest first."""
        return tuple(self._history)

    @property
    def is_first_step(self) -> bool:
        return self._current_step == 1

    @property
    def is_last_step(self) -> bool:
        return self._current_step == self._total_steps

    @property
    def can_advance(self) -> bool:
        return self._current_step < self._total_steps

    @property
    def can_retreat(self) -> bool:
        return self._current_step > 1

    @property
    def progress_percentage(self) -> float:
        """How far through the wizard the current step is, from 0 to 100.

        A single-step wizard is always complete.
        """
        if self._total_steps == 1:
            return 100.0
        return (self._current_step - 1) / (self._total_steps - 1) * 100

    def snapshot(self) -> NavigatorState:
        """Capture the current state as an immutable value."""
        return NavigatorState(
            current_step=self._current_step,
            total_steps=self._total_steps,
            history=self.history,
            is_first_step=self.is_first_step,
            is_last_step=self.is_last_step,
            progress_percentage=self.progress_percentage,
        )

    def advance(self) -> bool:
        """Move forward one step.

        Returns:
            True if the step changed, False if already on the last step.
        """
        if not self.can_advance:
            logger.debug("advance rejected: already on last step %d", self._current_step)
            return False

        new_step = self._current_step + 1
        self._commit(new_step, [*self._history, new_step])
        return True

    def retreat(self) -> bool:
        """Move back one step, retracing the visited path.

        The last history entry is popped, but never the only remaining one.
        If the remaining path does not end on the new step (it was left by a
        jump, or the wizard started past step 1) the history is reconciled
        the same way a jump would be.

        Returns:
            True if the step changed, False if already on the first step.
        """
        if not self.can_retreat:
            logger.debug("retreat rejected: already on first step")
            return False

        new_step = self._current_step - 1
        history = self._history[:-1] if len(self._history) > 1 else list(self._history)
        if history[-1] != new_step:
            history = _reconcile(history, new_step)
        self._commit(new_step, history)
        return True

    def jump_to(self, step: int) -> bool:
        """Move directly to ``step``.

        Jumping to a step already on the path abandons everything visited
        after it; jumping to an unvisited step extends the path.

        Args:
            step: Target step number.

        Returns:
            True on success, False if ``step`` is not an integer in
            ``[1, total_steps]``.
        """
        if isinstance(step, bool) or not isinstance(step, int):
            logger.debug("jump rejected: step %r is not an integer", step)
            return False
        if not 1 <= step <= self._total_steps:
            logger.debug("jump rejected: step %r outside 1..%d", step, self._total_steps)
            return False

        self._commit(step, _reconcile(self._history, step))
        return True

    def reset(self) -> None:
        """Return to the initial step with a fresh history."""
        self._commit(self._initial_step, [self._initial_step])

    def apply(self, action: NavigationAction, step: Optional[int] = None) -> bool:
        """Dispatch ``action`` to the matching transition.

        Args:
            action: Transition to perform.
            step: Target step, required for ``NavigationAction.JUMP``.

        Returns:
            Whether the transition succeeded. Reset always succeeds.

        Raises:
            ValueError: If a jump is requested without a target step.
        """
        if action is NavigationAction.ADVANCE:
            return self.advance()
        if action is NavigationAction.RETREAT:
            return self.retreat()
        if action is NavigationAction.JUMP:
            if step is None:
                raise ValueError("jump requires a target step")
            return self.jump_to(step)
        self.reset()
        return True

    def _commit(self, new_step: int, history: list[int]) -> None:
        previous = self._current_step
        self._current_step, self._history = new_step, history
        logger.debug("step %d -> %d, history=%s", previous, new_step, history)
        if self._on_step_change is not None:
            self._on_step_change(new_step)


def create_step_navigator(
    initial_step: int = 1,
    total_steps: int = 5,
    on_step_change: OptionalStepChangeCallback = None,
) -> StepNavigator:
    """Create a navigator for a wizard with ``total_steps`` steps.

    The default of five steps matches the main booking flow: vehicle
    configuration, insurance, financing, personal information and
    verification.
    """
    return StepNavigator(
        total_steps=total_steps,
        initial_step=initial_step,
        on_step_change=on_step_change,
    )
