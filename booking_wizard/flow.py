"""Configuration schema for booking wizard flows.

Defines the booking-wizard.yml file format using Pydantic models. A flow
names each step of the wizard and the step it starts on:

    heading: Book your Ride
    initial_step: 1
    steps:
      - title: Configure your Vehicle
        description: Personalise your Bike...
        next_label: Select Insurance
      - title: Vehicle Insurance
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator
from typing_extensions import Self

from booking_wizard.navigator import StepNavigator
from booking_wizard.types import OptionalStepChangeCallback


class StepConfig(BaseModel):
    """Presentation details for a single wizard step."""

    title: str
    description: str = ""
    next_label: str | None = None  # Caption of the forward button, if any

    model_config = {"frozen": True}

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Reject blank titles."""
        v = v.strip()
        if not v:
            raise ValueError("Step title must not be empty")
        return v


def default_steps() -> list[StepConfig]:
    """The main booking flow, ending with contact verification."""
    return [
        StepConfig(
            title="Configure your Vehicle",
            description="Personalise your Bike...",
            next_label="Select Insurance",
        ),
        StepConfig(
            title="Vehicle Insurance",
            description="Choose the right coverage...",
            next_label="Continue to Financing",
        ),
        StepConfig(
            title="Financing and Payment",
            description="Select your preferred method...",
            next_label="Continue to Personal Info",
        ),
        StepConfig(
            title="Your Information",
            description="Provide your details...",
            next_label="Continue to Verification",
        ),
        StepConfig(
            title="Verification",
            description="Verify your contact info...",
        ),
    ]


class FlowConfig(BaseModel):
    """Root configuration for a booking wizard flow."""

    heading: str = "Book your Ride"
    initial_step: int = 1
    steps: list[StepConfig] = Field(default_factory=default_steps)

    model_config = {"frozen": True}

    @field_validator("steps")
    @classmethod
    def validate_steps_not_empty(cls, v: list[StepConfig]) -> list[StepConfig]:
        """A flow needs at least one step."""
        if not v:
            raise ValueError("Flow must define at least one step")
        return v

    @model_validator(mode="after")
    def validate_initial_step(self) -> Self:
        """Ensure the initial step exists in the flow."""
        if not 1 <= self.initial_step <= len(self.steps):
            raise ValueError(
                f"initial_step must be between 1 and {len(self.steps)}, "
                f"got {self.initial_step}"
            )
        return self

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    def step_info(self, step: int) -> StepConfig:
        """Get presentation details for ``step``.

        Unknown step numbers fall back to the flow heading.
        """
        if 1 <= step <= self.total_steps:
            return self.steps[step - 1]
        return StepConfig(title=self.heading)

    def build_navigator(
        self, on_step_change: OptionalStepChangeCallback = None
    ) -> StepNavigator:
        """Create a navigator sized for this flow."""
        return StepNavigator(
            total_steps=self.total_steps,
            initial_step=self.initial_step,
            on_step_change=on_step_change,
        )

    @classmethod
    def from_yaml(cls, content: str) -> FlowConfig:
        """Parse config from YAML string.

        An empty document yields the default booking flow.
        """
        data: Any = yaml.safe_load(content)
        if data is None:
            data = {}
        return cls.model_validate(data)

    @classmethod
    def from_file(cls, path: Path | str) -> FlowConfig:
        """Load config from a YAML file."""
        path = Path(path)
        content = path.read_text(encoding="utf-8")
        return cls.from_yaml(content)


CONFIG_FILENAMES = (
    "booking-wizard.yml",
    "booking-wizard.yaml",
    ".booking-wizard.yml",
    ".booking-wizard.yaml",
)


def find_flow_config(start_dir: Path | str | None = None) -> Path | None:
    """Return the nearest flow config at or above ``start_dir`` (default: cwd)."""
    start = Path(start_dir) if start_dir is not None else Path.cwd()
    start = start.resolve()

    for directory in (start, *start.parents):
        candidates = (directory / name for name in CONFIG_FILENAMES)
        found = next((path for path in candidates if path.is_file()), None)
        if found is not None:
            return found
    return None


def load_flow_config(path: Path | str | None = None) -> FlowConfig:
    """Load the flow at ``path``, or the nearest discovered one.

    Raises:
        FileNotFoundError: If no path is given and none is discovered
    """
    path = path if path is not None else find_flow_config()
    if path is None:
        raise FileNotFoundError(
            "No booking-wizard.yml found. Create one or specify path with --config"
        )
    return FlowConfig.from_file(path)
