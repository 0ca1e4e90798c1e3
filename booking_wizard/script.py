"""Textual navigation scripts.

A script is a sequence of actions, one per line:

    next
    next
    jump 2
    back
    reset

Blank lines and ``#`` comments are ignored. ``advance``/``retreat``/``goto``
are accepted as synonyms of ``next``/``back``/``jump``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from booking_wizard.navigator import StepNavigator
from booking_wizard.types import NavigationAction, NavigatorState

_VERBS: dict[str, NavigationAction] = {
    "next": NavigationAction.ADVANCE,
    "advance": NavigationAction.ADVANCE,
    "back": NavigationAction.RETREAT,
    "retreat": NavigationAction.RETREAT,
    "jump": NavigationAction.JUMP,
    "goto": NavigationAction.JUMP,
    "reset": NavigationAction.RESET,
}


class ScriptError(ValueError):
    """Raised when a navigation script cannot be parsed."""


@dataclass(frozen=True)
class ScriptStep:
    """One parsed action and its target step, if any."""

    action: NavigationAction
    step: Optional[int] = None

    def __str__(self) -> str:
        if self.step is None:
            return self.action.value
        return f"{self.action.value} {self.step}"


@dataclass(frozen=True)
class ReplayRecord:
    """Outcome of applying one script step."""

    step: ScriptStep
    succeeded: bool
    state: NavigatorState


def parse_action(text: str) -> ScriptStep:
    """Parse a single action such as ``next`` or ``jump 3``.

    Raises:
        ScriptError: If the verb is unknown or the step number is malformed.
    """
    parts = text.split()
    if not parts:
        raise ScriptError("Empty action")

    verb = parts[0].lower()
    action = _VERBS.get(verb)
    if action is None:
        valid = ", ".join(sorted(_VERBS))
        raise ScriptError(f"Unknown action '{parts[0]}'. Valid: {valid}")

    args = parts[1:]
    if not action.requires_step:
        if args:
            raise ScriptError(f"'{verb}' takes no arguments")
        return ScriptStep(action)

    if len(args) != 1:
        raise ScriptError(f"'{verb}' requires exactly one step number")
    try:
        step = int(args[0])
    except ValueError:
        raise ScriptError(f"Invalid step number '{args[0]}'") from None
    return ScriptStep(action, step)


def parse_script(lines: Iterable[str]) -> list[ScriptStep]:
    """Parse script lines, skipping blanks and comments."""
    steps = []
    for lineno, raw in enumerate(lines, start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        try:
            steps.append(parse_action(line))
        except ScriptError as e:
            raise ScriptError(f"Line {lineno}: {e}") from None
    return steps


def parse_tokens(tokens: Iterable[str]) -> list[ScriptStep]:
    """Parse actions given as separate words, e.g. ``next jump 3 back``.

    A jump consumes the word that follows it as its step number.
    """
    steps = []
    pending: Optional[str] = None
    for token in tokens:
        if pending is not None:
            steps.append(parse_action(f"{pending} {token}"))
            pending = None
        elif _VERBS.get(token.lower()) is NavigationAction.JUMP:
            pending = token
        else:
            steps.append(parse_action(token))
    if pending is not None:
        raise ScriptError(f"'{pending}' requires exactly one step number")
    return steps


def replay(navigator: StepNavigator, steps: Iterable[ScriptStep]) -> list[ReplayRecord]:
    """Apply ``steps`` to ``navigator`` in order, recording each outcome."""
    records = []
    for script_step in steps:
        succeeded = navigator.apply(script_step.action, script_step.step)
        records.append(ReplayRecord(script_step, succeeded, navigator.snapshot()))
    return records
