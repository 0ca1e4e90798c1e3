"""CLI utilities for booking-wizard.

Rich-based formatting helpers for consistent terminal output.
"""

from __future__ import annotations

from booking_wizard.cli.formatting import (
    build_steps_table,
    format_error,
    format_history,
    format_success,
    format_warning,
    progress_bar,
)

__all__ = [
    "build_steps_table",
    "format_error",
    "format_history",
    "format_success",
    "format_warning",
    "progress_bar",
]
