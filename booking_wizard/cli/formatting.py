"""Rich formatting utilities for CLI output.

Reusable Rich components for rendering navigator state and flow
configuration, plus formatted error/warning/success panels.
"""

from __future__ import annotations

from rich.markup import escape
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table

from booking_wizard.flow import FlowConfig
from booking_wizard.types import NavigatorState


def format_error(message: str, context: str | None = None) -> Panel:
    """Create formatted error panel.

    Args:
        message: Error message
        context: Optional context hint for resolution

    Returns:
        Panel with error formatting
    """
    return _panel(message, context, title="Error", color="red")


def format_warning(message: str, context: str | None = None) -> Panel:
    """Create formatted warning panel."""
    return _panel(message, context, title="Warning", color="yellow")


def format_success(message: str, details: str | None = None) -> Panel:
    """Create formatted success panel."""
    return _panel(f"✓ {message}", details, title="Success", color="green")


def _panel(message: str, extra: str | None, title: str, color: str) -> Panel:
    content = f"[bold {color}]{message}[/bold {color}]"
    if extra:
        content += f"\n\n[dim]{extra}[/dim]"

    return Panel(
        content,
        title=f"[bold {color}]{title}[/bold {color}]",
        border_style=color,
        width=78,
        expand=False,
    )


def format_history(history: tuple[int, ...]) -> str:
    """Render the visited path as ``1 → 2 → [3]``, highlighting where it ends."""
    *visited, current = history
    parts = [str(step) for step in visited]
    parts.append(f"[bold cyan]\\[{current}][/bold cyan]")
    return " → ".join(parts)


def progress_bar(state: NavigatorState, width: int = 40) -> ProgressBar:
    """Create a progress bar for the navigator's position."""
    return ProgressBar(total=100, completed=state.progress_percentage, width=width)


def build_steps_table(flow: FlowConfig, current_step: int | None = None) -> Table:
    """Build a table listing each step of ``flow``.

    Args:
        flow: Flow configuration to display
        current_step: Step to mark as current, if any

    Returns:
        Rich Table with one row per step
    """
    table = Table(title=escape(flow.heading), title_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Description")
    table.add_column("Next button", style="green")

    for number, step in enumerate(flow.steps, start=1):
        marker = "▶ " if number == current_step else ""
        table.add_row(
            f"{marker}{number}",
            escape(step.title),
            escape(step.description),
            escape(step.next_label) if step.next_label else "[dim]-[/dim]",
        )
    return table
