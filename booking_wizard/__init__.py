"""
booking-wizard: step navigation for multi-step booking wizards.

Architecture:
    booking-wizard.yml → FlowConfig → StepNavigator ← UI events (next/back/jump/reset)

Layers:
    - navigator: the StepNavigator state machine (current step, history, progress)
    - flow: step titles and the initial step, loaded from YAML
    - script: textual navigation scripts replayed against a navigator
    - cli/: Rich rendering for the command-line front end

Rendering, styling and booking submission live with the caller; the
navigator only reports the new step through its change callback.
"""

from booking_wizard.flow import FlowConfig, StepConfig, load_flow_config
from booking_wizard.navigator import (
    StepConfigurationError,
    StepNavigator,
    create_step_navigator,
)
from booking_wizard.types import NavigationAction, NavigatorState, StepChangeCallback

__version__ = "0.1.0"

__all__ = [
    "FlowConfig",
    "NavigationAction",
    "NavigatorState",
    "StepChangeCallback",
    "StepConfig",
    "StepConfigurationError",
    "StepNavigator",
    "create_step_navigator",
    "load_flow_config",
]
