"""Tests for the StepNavigator state machine in navigator.py."""

import itertools
import random

import pytest

from booking_wizard.navigator import (
    StepConfigurationError,
    StepNavigator,
    create_step_navigator,
)
from booking_wizard.types import NavigationAction, NavigatorState


@pytest.fixture
def navigator() -> StepNavigator:
    """Five-step navigator starting at step 1."""
    return create_step_navigator(initial_step=1, total_steps=5)


def _state(nav: StepNavigator) -> tuple[int, tuple[int, ...]]:
    return nav.current_step, nav.history


def _assert_invariants(nav: StepNavigator) -> None:
    assert 1 <= nav.current_step <= nav.total_steps
    assert nav.history
    assert nav.history[-1] == nav.current_step
    assert all(1 <= h <= nav.total_steps for h in nav.history)


class TestConstruction:
    """Tests for navigator construction and bounds checking."""

    def test_defaults(self) -> None:
        """Test factory defaults to a five-step wizard on step 1."""
        nav = create_step_navigator()

        assert nav.current_step == 1
        assert nav.total_steps == 5
        assert nav.initial_step == 1
        assert nav.history == (1,)

    def test_custom_initial_step(self) -> None:
        """Test starting part-way through the wizard."""
        nav = StepNavigator(total_steps=4, initial_step=3)

        assert nav.current_step == 3
        assert nav.history == (3,)

    @pytest.mark.parametrize("total_steps", [0, -1])
    def test_total_steps_below_one(self, total_steps: int) -> None:
        """Test that fewer than one step is rejected."""
        with pytest.raises(StepConfigurationError, match="total_steps"):
            StepNavigator(total_steps=total_steps)

    @pytest.mark.parametrize("initial_step", [0, 6, -2])
    def test_initial_step_out_of_range(self, initial_step: int) -> None:
        """Test that an initial step outside the wizard is rejected."""
        with pytest.raises(StepConfigurationError, match="initial_step"):
            StepNavigator(total_steps=5, initial_step=initial_step)

    @pytest.mark.parametrize("value", [2.0, "3", True, None])
    def test_non_integer_bounds(self, value: object) -> None:
        """Test that non-integer bounds fail fast."""
        with pytest.raises(StepConfigurationError):
            StepNavigator(total_steps=value)  # type: ignore[arg-type]

    def test_configuration_error_is_value_error(self) -> None:
        """Test callers can catch construction errors as ValueError."""
        with pytest.raises(ValueError):
            StepNavigator(total_steps=0)


class TestAdvance:
    """Tests for moving forward."""

    def test_advance_appends_to_history(self, navigator: StepNavigator) -> None:
        """Test advancing increments the step and extends the path."""
        assert navigator.advance() is True
        assert navigator.current_step == 2
        assert navigator.history == (1, 2)

    def test_advance_at_last_step_is_rejected(self, navigator: StepNavigator) -> None:
        """Test advancing past the last step leaves state unchanged."""
        for _ in range(4):
            navigator.advance()
        before = _state(navigator)

        assert navigator.advance() is False
        assert navigator.advance() is False
        assert _state(navigator) == before
        assert navigator.current_step == 5


class TestRetreat:
    """Tests for moving back."""

    def test_retreat_pops_history(self, navigator: StepNavigator) -> None:
        """Test retreating retraces the path instead of recording a new visit."""
        navigator.advance()
        navigator.advance()

        assert navigator.retreat() is True
        assert navigator.current_step == 2
        assert navigator.history == (1, 2)

    def test_retreat_at_first_step_is_rejected(self, navigator: StepNavigator) -> None:
        """Test retreating before step 1 leaves state unchanged."""
        assert navigator.retreat() is False
        assert _state(navigator) == (1, (1,))

    def test_retreat_never_empties_history(self) -> None:
        """Test retreating below the initial step keeps the initial entry."""
        nav = StepNavigator(total_steps=5, initial_step=3)

        assert nav.retreat() is True
        assert nav.retreat() is True
        assert nav.retreat() is False

        assert nav.current_step == 1
        assert nav.history[0] == 3
        _assert_invariants(nav)

    def test_retreat_after_forward_jump(self, navigator: StepNavigator) -> None:
        """Test retreating from a jumped-to step lands on the previous step."""
        navigator.jump_to(4)
        assert navigator.history == (1, 4)

        assert navigator.retreat() is True
        assert navigator.current_step == 3
        assert navigator.history == (1, 3)


class TestJumpTo:
    """Tests for jumping directly to a step."""

    def test_jump_back_truncates_history(self, navigator: StepNavigator) -> None:
        """Test jumping to a visited step abandons the path beyond it."""
        for _ in range(3):
            navigator.advance()
        assert navigator.history == (1, 2, 3, 4)

        assert navigator.jump_to(2) is True
        assert navigator.current_step == 2
        assert navigator.history == (1, 2)

    def test_jump_forward_extends_history(self, navigator: StepNavigator) -> None:
        """Test jumping to an unvisited step extends the path."""
        for _ in range(3):
            navigator.advance()

        assert navigator.jump_to(5) is True
        assert navigator.current_step == 5
        assert navigator.history == (1, 2, 3, 4, 5)

    def test_jump_to_current_step(self, navigator: StepNavigator) -> None:
        """Test jumping to the current step succeeds without changing the path."""
        navigator.advance()

        assert navigator.jump_to(2) is True
        assert navigator.history == (1, 2)

    @pytest.mark.parametrize("step", [0, -1, 6, 100])
    def test_jump_out_of_range_is_rejected(self, navigator: StepNavigator, step: int) -> None:
        """Test jumping outside the wizard leaves state unchanged."""
        navigator.advance()
        before = _state(navigator)

        assert navigator.jump_to(step) is False
        assert _state(navigator) == before

    @pytest.mark.parametrize("step", [2.5, True, "3", None])
    def test_jump_to_non_integer_is_rejected(
        self, navigator: StepNavigator, step: object
    ) -> None:
        """Test non-integer targets are rejected without touching state."""
        navigator.advance()
        before = _state(navigator)

        assert navigator.jump_to(step) is False  # type: ignore[arg-type]
        assert _state(navigator) == before
        assert type(navigator.current_step) is int


class TestReset:
    """Tests for resetting the wizard."""

    def test_reset_restores_initial_state(self, navigator: StepNavigator) -> None:
        """Test reset returns to the initial step with a fresh history."""
        navigator.advance()
        navigator.jump_to(4)

        navigator.reset()

        assert _state(navigator) == (1, (1,))

    def test_reset_uses_custom_initial_step(self) -> None:
        """Test reset goes back to the configured initial step, not step 1."""
        nav = StepNavigator(total_steps=5, initial_step=2)
        nav.advance()

        nav.reset()

        assert _state(nav) == (2, (2,))

    def test_reset_is_idempotent(self, navigator: StepNavigator) -> None:
        """Test resetting twice equals resetting once."""
        navigator.advance()
        navigator.reset()
        once = _state(navigator)
        navigator.reset()

        assert _state(navigator) == once


class TestDerivedState:
    """Tests for first/last flags and progress."""

    def test_progress_law(self, navigator: StepNavigator) -> None:
        """Test progress runs from 0 at the first step to 50 half-way."""
        assert navigator.progress_percentage == 0

        navigator.advance()
        navigator.advance()

        assert navigator.current_step == 3
        assert navigator.progress_percentage == 50

    def test_progress_complete_at_last_step(self, navigator: StepNavigator) -> None:
        """Test the last step reports 100 percent."""
        navigator.jump_to(5)

        assert navigator.progress_percentage == 100
        assert navigator.is_last_step is True
        assert navigator.is_first_step is False

    def test_single_step_wizard(self) -> None:
        """Test a one-step wizard is complete and cannot move."""
        nav = StepNavigator(total_steps=1)

        assert nav.progress_percentage == 100
        assert nav.is_first_step is True
        assert nav.is_last_step is True
        assert nav.advance() is False
        assert nav.retreat() is False

    def test_can_advance_and_retreat(self, navigator: StepNavigator) -> None:
        """Test button-state helpers mirror the boundaries."""
        assert navigator.can_advance is True
        assert navigator.can_retreat is False

        navigator.jump_to(5)

        assert navigator.can_advance is False
        assert navigator.can_retreat is True

    def test_snapshot(self, navigator: StepNavigator) -> None:
        """Test snapshot captures every derived value."""
        navigator.advance()

        assert navigator.snapshot() == NavigatorState(
            current_step=2,
            total_steps=5,
            history=(1, 2),
            is_first_step=False,
            is_last_step=False,
            progress_percentage=25.0,
        )

    def test_history_is_read_only_snapshot(self, navigator: StepNavigator) -> None:
        """Test the exposed history cannot mutate the navigator."""
        history = navigator.history
        navigator.advance()

        assert history == (1,)
        assert isinstance(navigator.history, tuple)


class TestStepChangeCallback:
    """Tests for the on_step_change observer."""

    def test_called_with_each_committed_step(self) -> None:
        """Test every successful transition notifies the observer once."""
        seen: list[int] = []
        nav = StepNavigator(total_steps=5, on_step_change=seen.append)

        nav.advance()
        nav.advance()
        nav.retreat()
        nav.jump_to(4)
        nav.reset()

        assert seen == [2, 3, 2, 4, 1]

    def test_not_called_on_rejection(self) -> None:
        """Test rejected boundary moves do not notify the observer."""
        seen: list[int] = []
        nav = StepNavigator(total_steps=2, on_step_change=seen.append)

        nav.retreat()
        nav.jump_to(3)
        nav.advance()
        nav.advance()

        assert seen == [2]

    def test_state_committed_before_callback(self) -> None:
        """Test the observer sees the navigator already on the new step."""
        observed: list[tuple[int, tuple[int, ...]]] = []
        nav = StepNavigator(
            total_steps=3, on_step_change=lambda step: observed.append(_state(nav))
        )

        nav.advance()

        assert observed == [(2, (1, 2))]

    def test_callback_errors_propagate(self) -> None:
        """Test exceptions from the observer reach the caller."""

        def boom(step: int) -> None:
            raise RuntimeError("render failed")

        nav = StepNavigator(total_steps=3, on_step_change=boom)

        with pytest.raises(RuntimeError, match="render failed"):
            nav.advance()
        assert nav.current_step == 2


class TestApply:
    """Tests for dispatching NavigationAction values."""

    def test_dispatches_each_action(self, navigator: StepNavigator) -> None:
        """Test apply routes to the matching transition."""
        assert navigator.apply(NavigationAction.ADVANCE) is True
        assert navigator.apply(NavigationAction.JUMP, 4) is True
        assert navigator.apply(NavigationAction.RETREAT) is True
        assert navigator.current_step == 3
        assert navigator.apply(NavigationAction.RESET) is True
        assert navigator.current_step == 1

    def test_jump_requires_step(self, navigator: StepNavigator) -> None:
        """Test a jump without a target is a caller error."""
        with pytest.raises(ValueError, match="target step"):
            navigator.apply(NavigationAction.JUMP)


class TestInvariants:
    """Tests that invariants hold across arbitrary operation sequences."""

    @pytest.mark.parametrize("total_steps", [1, 2, 5])
    def test_advance_retreat_sequences_stay_in_bounds(self, total_steps: int) -> None:
        """Test every advance/retreat sequence up to length 6 keeps the invariants."""
        for ops in itertools.product("ar", repeat=6):
            nav = StepNavigator(total_steps=total_steps)
            for op in ops:
                if op == "a":
                    nav.advance()
                else:
                    nav.retreat()
                _assert_invariants(nav)

    def test_random_operation_sequences(self) -> None:
        """Test random mixes of all operations keep the invariants."""
        rng = random.Random(1234)
        for _ in range(200):
            total = rng.randint(1, 7)
            nav = StepNavigator(total_steps=total, initial_step=rng.randint(1, total))
            for _ in range(30):
                choice = rng.choice(["advance", "retreat", "jump", "reset"])
                if choice == "jump":
                    nav.jump_to(rng.randint(-1, total + 1))
                else:
                    getattr(nav, choice)()
                _assert_invariants(nav)
