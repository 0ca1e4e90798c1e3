"""Command-line interface for booking-wizard."""

from __future__ import annotations

import logging
import traceback
from pathlib import Path
from typing import TextIO

import click
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from booking_wizard.cli import (
    build_steps_table,
    format_error,
    format_history,
    format_success,
    format_warning,
    progress_bar,
)
from booking_wizard.flow import FlowConfig, find_flow_config, load_flow_config
from booking_wizard.script import ScriptError, ScriptStep, parse_script, parse_tokens, replay

console = Console()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _load_flow(config: Path | None, debug: bool) -> FlowConfig:
    """Load the explicit or discovered flow config, or the default flow.

    Raises:
        click.ClickException: If the config cannot be parsed or validated
    """
    path = config or find_flow_config()
    if path is None:
        return FlowConfig()

    try:
        return load_flow_config(path)
    except yaml.YAMLError as e:
        if debug:
            console.print(traceback.format_exc())
        console.print(f"[red]YAML parsing error:[/red] {escape(str(e))}")
        raise click.ClickException(str(e))
    except ValidationError as e:
        if debug:
            console.print(traceback.format_exc())
        console.print(f"[red]Config validation error:[/red] {escape(str(e))}")
        raise click.ClickException(str(e))


config_option = click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to booking-wizard.yml config file",
)
debug_option = click.option(
    "--debug",
    is_flag=True,
    help="Show full exception stacktraces for troubleshooting",
)


@click.group()
@click.version_option(package_name="booking-wizard")
@click.option("--verbose", "-v", is_flag=True, help="Log every step transition")
def cli(verbose: bool) -> None:
    """Step navigation for multi-step booking wizards.

    Show the configured flow:

        $ booking-wizard steps

    Replay a navigation sequence:

        $ booking-wizard walk next next jump 2 back
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


@cli.command()
@config_option
@debug_option
def steps(config: Path | None, debug: bool) -> None:
    """Show the steps of the booking flow."""
    flow = _load_flow(config, debug)
    console.print(build_steps_table(flow, current_step=flow.initial_step))


@cli.command()
@click.argument("actions", nargs=-1)
@click.option(
    "--script",
    "-s",
    type=click.File("r"),
    help="File with one action per line (read before ACTIONS)",
)
@config_option
@debug_option
def walk(
    actions: tuple[str, ...], script: TextIO | None, config: Path | None, debug: bool
) -> None:
    """Replay navigation ACTIONS against a fresh wizard.

    Actions are next, back, jump N and reset.

    ## Examples

        $ booking-wizard walk next next next jump 2

        $ booking-wizard walk --script checkout.txt
    """
    flow = _load_flow(config, debug)

    try:
        script_steps: list[ScriptStep] = []
        if script is not None:
            script_steps.extend(parse_script(script))
        script_steps.extend(parse_tokens(actions))
    except ScriptError as e:
        if debug:
            console.print(traceback.format_exc())
        console.print(format_error(escape(str(e)), "Valid actions: next, back, jump N, reset"))
        raise click.ClickException(str(e))

    if not script_steps:
        raise click.UsageError("No actions given")

    def announce(step: int) -> None:
        console.print(f"  [cyan]→ step {step}:[/cyan] {escape(flow.step_info(step).title)}")

    navigator = flow.build_navigator(on_step_change=announce)
    console.print(f"[bold]Start:[/bold] step {navigator.current_step}")

    records = replay(navigator, script_steps)
    for record in records:
        if not record.succeeded:
            console.print(
                f"  [yellow]✗ {record.step} rejected at step {record.state.current_step}[/yellow]"
            )

    final = navigator.snapshot()
    rejected = sum(1 for record in records if not record.succeeded)
    console.print()
    console.print(f"[bold]Current step:[/bold] {final.current_step} of {final.total_steps}")
    console.print(f"[bold]History:[/bold] {format_history(final.history)}")
    console.print(progress_bar(final))
    console.print(f"[dim]{final.progress_percentage:.0f}% complete[/dim]")
    if rejected:
        console.print(format_warning(f"{rejected} of {len(records)} actions were rejected"))


@cli.command()
@config_option
@debug_option
def validate(config: Path | None, debug: bool) -> None:
    """Validate the booking flow configuration.

    Checks that booking-wizard.yml parses, defines at least one step and
    starts on a step that exists.
    """
    config_path = config or find_flow_config()
    if config_path is None:
        console.print(format_error("No booking-wizard.yml found", "Specify one with --config"))
        raise click.ClickException("No booking-wizard.yml found")

    flow = _load_flow(config_path, debug)
    console.print(
        format_success(
            f"Config valid: {config_path}",
            f"{flow.total_steps} steps, starting at step {flow.initial_step}",
        )
    )


if __name__ == "__main__":
    cli()
