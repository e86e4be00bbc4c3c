"""
CLI commands for settings backup and inspection.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from countcraft.core.config.persistence import export_settings, parse_imported_settings
from countcraft.core.utils.config import CountCraftConfig, get_config, set_config
from countcraft.core.utils.logger import log_error, log_info
from countcraft.utils.error_handling import SettingsImportError

from .display_utils import counters_table, show_status
from .exit_codes import CliExit

console = Console()
app = typer.Typer(name="settings", help="Settings backup and status", no_args_is_help=True)


@app.command("export")
def export_command(
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write to a file instead of stdout"
    ),
) -> None:
    """Export settings as JSON."""
    text = export_settings(get_config().to_dict())
    if output is None:
        typer.echo(text)
        return
    output.write_text(text + "\n", encoding="utf-8")
    console.print(f"[green]Settings exported to[/green] {output}")


@app.command("import")
def import_command(
    source: Path = typer.Argument(..., help="JSON file produced by `settings export`"),
) -> None:
    """Replace the current settings with an exported backup."""
    current = get_config()
    try:
        data = parse_imported_settings(source.read_text(encoding="utf-8"))
    except (OSError, SettingsImportError) as exc:
        log_error("SETTINGS", "Settings import failed", str(exc))
        raise CliExit.config_error(f"Failed to import settings: {exc}")

    # Imported values replace everything, starting from defaults
    imported = CountCraftConfig()
    imported.apply_dict(data)
    imported.config_file = current.config_file
    target = imported.save_to_file()
    set_config(imported)
    log_info("SETTINGS", "Settings imported", str(target))
    console.print("[green]Settings imported successfully[/green]")


@app.command("show")
def show_command() -> None:
    """Show the effective settings."""
    config = get_config()
    console.print(f"[bold]Settings file:[/bold] {config.config_file or '-'}")
    console.print(f"  • Count mode: {config.counters.count_mode}")
    console.print(f"  • Auto-calculate: {config.counters.auto_calculate}")
    console.print(f"  • Debounce: {config.counters.debounce_seconds}s")
    console.print(f"  • Log level: {config.logging.effective_level()}")
    if config.counters.calculations:
        console.print(counters_table(config.counters.calculations))
    else:
        console.print("[yellow]No counters configured.[/yellow]")


@app.command("status")
def status_command() -> None:
    """Show counter and auto-calculation status."""
    show_status(console, get_config().status())
