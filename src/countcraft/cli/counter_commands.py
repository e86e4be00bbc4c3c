"""
CLI commands for managing counter configurations.

Every change goes through validate_counter_config() before it is saved,
so the settings file never holds two counters writing the same property.
"""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from countcraft.core.config.validation import validate_counter_config
from countcraft.core.counters.models import CounterConfig, CounterType
from countcraft.core.counters.registry import default_property_name, get_definition
from countcraft.core.utils.config import CountCraftConfig, get_config
from countcraft.core.utils.logger import log_configuration_change

from .display_utils import counter_types_table, counters_table
from .exit_codes import CliExit

console = Console()
app = typer.Typer(name="counters", help="Manage counters", no_args_is_help=True)


def _parse_type(value: str) -> CounterType:
    definition = get_definition(value)
    if definition is None:
        known = ", ".join(counter_type.value for counter_type in CounterType)
        raise CliExit.config_error(f"Unknown counter type '{value}'. Known types: {known}")
    return definition.type


def _default_parameter(counter_type: CounterType, level: Optional[int]):
    definition = get_definition(counter_type)
    if definition is None or not definition.has_parameter:
        return None
    return level if level is not None else definition.parameter_min


def _require(config: CountCraftConfig, counter_id: str) -> CounterConfig:
    found = config.counters.find(counter_id)
    if found is None:
        raise CliExit.error(f"No counter with id '{counter_id}'")
    return found


def _save(config: CountCraftConfig, candidate: CounterConfig, action: str) -> None:
    problem = validate_counter_config(candidate, config.counters.calculations)
    if problem is not None:
        raise CliExit.config_error(problem.message)

    if action == "added":
        config.counters.calculations = [*config.counters.calculations, candidate]
    else:
        config.counters.replace(candidate)
    config.save_to_file()
    log_configuration_change(f"counter {candidate.id}", action, candidate.property)


@app.command("list")
def list_counters() -> None:
    """Show configured counters."""
    calculations = get_config().counters.calculations
    if not calculations:
        console.print("[yellow]No counters configured.[/yellow]")
        return
    console.print(counters_table(calculations))


@app.command("types")
def list_types() -> None:
    """Show the available counter types."""
    console.print(counter_types_table())


@app.command("add")
def add_counter(
    counter_type: str = typer.Argument(..., help="Counter type, e.g. wordCount"),
    property_name: Optional[str] = typer.Option(
        None, "--property", "-p", help="Property to write (defaults per type)"
    ),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Display name"),
    level: Optional[int] = typer.Option(
        None, "--level", "-l", help="Heading level 1-6 for headingLevelCount"
    ),
    disabled: bool = typer.Option(False, "--disabled", help="Add the counter disabled"),
) -> None:
    """Add a counter."""
    config = get_config()
    resolved = _parse_type(counter_type)
    definition = get_definition(resolved)
    candidate = CounterConfig(
        name=name if name is not None else definition.name,
        type=resolved,
        property=(
            property_name if property_name is not None else default_property_name(resolved)
        ),
        enabled=not disabled,
        parameter=_default_parameter(resolved, level),
    )
    _save(config, candidate, "added")
    console.print(
        f"[green]Added counter[/green] {candidate.id} -> {candidate.property}"
    )


@app.command("edit")
def edit_counter(
    counter_id: str = typer.Argument(..., help="Counter id"),
    counter_type: Optional[str] = typer.Option(None, "--type", "-t", help="New type"),
    property_name: Optional[str] = typer.Option(None, "--property", "-p"),
    name: Optional[str] = typer.Option(None, "--name", "-n"),
    level: Optional[int] = typer.Option(None, "--level", "-l"),
) -> None:
    """Edit a counter; the id is kept."""
    config = get_config()
    existing = _require(config, counter_id)

    changes: dict = {}
    new_type = _parse_type(counter_type) if counter_type is not None else existing.type
    if counter_type is not None:
        changes["type"] = new_type
    if property_name is not None:
        changes["property"] = property_name
    if name is not None:
        changes["name"] = name
    if counter_type is not None or level is not None:
        current = existing.parameter if new_type == existing.type else None
        changes["parameter"] = _default_parameter(
            new_type, level if level is not None else current
        )

    updated = existing.with_changes(**changes)
    _save(config, updated, "edited")
    console.print(f"[green]Updated counter[/green] {updated.id}")


@app.command("remove")
def remove_counter(counter_id: str = typer.Argument(..., help="Counter id")) -> None:
    """Remove a counter."""
    config = get_config()
    if not config.counters.remove(counter_id):
        raise CliExit.error(f"No counter with id '{counter_id}'")
    config.save_to_file()
    log_configuration_change(f"counter {counter_id}", "present", "removed")
    console.print(f"[green]Removed counter[/green] {counter_id}")


def _set_enabled(counter_id: str, enabled: bool) -> None:
    config = get_config()
    existing = _require(config, counter_id)
    config.counters.replace(existing.with_changes(enabled=enabled))
    config.save_to_file()
    log_configuration_change(f"counter {counter_id}.enabled", existing.enabled, enabled)
    state = "enabled" if enabled else "disabled"
    console.print(f"Counter {counter_id} {state}")


@app.command("enable")
def enable_counter(counter_id: str = typer.Argument(..., help="Counter id")) -> None:
    """Enable a counter."""
    _set_enabled(counter_id, True)


@app.command("disable")
def disable_counter(counter_id: str = typer.Argument(..., help="Counter id")) -> None:
    """Disable a counter."""
    _set_enabled(counter_id, False)
