"""Rich tables for counters, failures and settings."""

from __future__ import annotations

from typing import Iterable, Mapping

from rich.console import Console
from rich.table import Table

from countcraft.core.counters.models import CounterConfig
from countcraft.core.counters.registry import default_property_name, list_definitions
from countcraft.utils.error_handling import CalculationFailure


def counters_table(configs: Iterable[CounterConfig]) -> Table:
    table = Table(title="Counters")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Type", style="cyan")
    table.add_column("Property", style="green")
    table.add_column("Level", justify="right")
    table.add_column("Enabled")
    for config in configs:
        table.add_row(
            config.id,
            config.name or "-",
            config.type.value if config.type else "-",
            config.property,
            "" if config.parameter is None else str(config.parameter),
            "yes" if config.enabled else "no",
        )
    return table


def counter_types_table() -> Table:
    table = Table(title="Counter types")
    table.add_column("Type", style="cyan")
    table.add_column("Name")
    table.add_column("Default property", style="green")
    table.add_column("Description")
    for definition in list_definitions():
        name = definition.name
        if definition.has_parameter:
            name += (
                f" ({definition.parameter_name} "
                f"{definition.parameter_min}-{definition.parameter_max})"
            )
        table.add_row(
            definition.type.value,
            name,
            default_property_name(definition.type) or "",
            definition.description,
        )
    return table


def failures_table(failures: Iterable[CalculationFailure]) -> Table:
    table = Table(title="Failures", title_style="bold red")
    table.add_column("Document")
    table.add_column("Property")
    table.add_column("Category", style="yellow")
    table.add_column("Message")
    for failure in failures:
        table.add_row(
            failure.document_id,
            failure.property_name or "-",
            failure.category.value,
            failure.message,
        )
    return table


def show_status(console: Console, status: Mapping[str, object]) -> None:
    console.print("[bold cyan]CountCraft status[/bold cyan]")
    console.print(f"  • Counters configured: {status['calculations_count']}")
    console.print(f"  • Counters enabled: {status['enabled_count']}")
    console.print(f"  • Auto-calculate: {status['auto_calculate_enabled']}")
    console.print(f"  • Ribbon enabled: {status['ribbon_enabled']}")
