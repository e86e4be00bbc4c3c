"""
Typer-based CLI for CountCraft.

Commands:
- calculate: write statistics into one document's front matter
- batch: calculate every markdown document under a directory
- preview: print statistics without writing anything
- watch: recalculate documents shortly after they change
- counters / settings: manage configuration

Global options pick the settings file and logging verbosity; everything
else comes from CountCraftConfig (settings file, .env, COUNTCRAFT_* vars).
"""

import json
import threading
import time
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import questionary
import typer
from rich.console import Console

from countcraft import __version__
from countcraft.core.adapters.document_store import MarkdownVault
from countcraft.core.counters.models import CounterConfig
from countcraft.core.pipeline.auto_calculate import AutoRecalculator
from countcraft.core.pipeline.statistics_engine import (
    CalculationResult,
    StatisticsEngine,
    format_preview,
)
from countcraft.core.utils.config import CountCraftConfig, get_config, load_config
from countcraft.core.utils.config.base import MESSAGES, PLUGIN_NAME
from countcraft.core.utils.logger import get_logger, setup_logging
from countcraft.core.utils.notifications import RichNotifier
from countcraft.utils.error_handling import ContentUnavailableError, error_message

from .counter_commands import app as counters_app
from .display_utils import failures_table
from .exit_codes import CliExit
from .settings_commands import app as settings_app

console = Console()

app = typer.Typer(
    name="countcraft",
    help="CountCraft - document statistics written into front matter",
    add_completion=False,
    no_args_is_help=True,
)
app.add_typer(counters_app, name="counters", help="Manage counters")
app.add_typer(settings_app, name="settings", help="Settings backup and status")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{PLUGIN_NAME} {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    settings: Optional[Path] = typer.Option(
        None, "--settings", "-s", help="Path to the settings file"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True
    ),
) -> None:
    """CountCraft - document statistics written into front matter."""
    config = load_config(str(settings)) if settings else get_config()
    if log_level:
        config.logging.level = log_level.upper()
    if debug:
        config.logging.debug_mode = True
    setup_logging(config.logging.effective_level(), config.logging.log_file)


def _engine(vault: MarkdownVault, config: CountCraftConfig, quiet: bool = False):
    return StatisticsEngine.for_vault(
        vault, config, notifier=RichNotifier(quiet=quiet), logger=get_logger()
    )


@app.command("calculate")
def calculate(
    path: Path = typer.Argument(..., help="Markdown document to update"),
    vault_root: Path = typer.Option(
        Path("."), "--vault", help="Directory that document ids are relative to"
    ),
) -> None:
    """Calculate statistics for one document and write its properties."""
    config = get_config()
    vault = MarkdownVault(vault_root)
    document_id = vault.document_id(path)
    engine = _engine(vault, config)

    if not engine.is_processable(document_id):
        raise CliExit.error(MESSAGES["NOT_PROCESSABLE"])

    try:
        result = engine.calculate_document(
            document_id, config.counters.calculations, report=True
        )
    except ContentUnavailableError:
        raise CliExit.error()

    if result.failures:
        raise CliExit.error()


@app.command("batch")
def batch(
    directory: Path = typer.Argument(Path("."), help="Vault directory"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Hide progress messages"),
) -> None:
    """Calculate statistics for every markdown document under a directory."""
    if not directory.is_dir():
        raise CliExit.error(f"Not a directory: {directory}")

    config = get_config()
    if not config.counters.enabled_calculations():
        raise CliExit.config_error(MESSAGES["NO_ENABLED_COUNTERS"])

    vault = MarkdownVault(directory)
    documents = vault.list_documents()
    if not documents:
        console.print("[yellow]No markdown files found.[/yellow]")
        return

    if not yes:
        confirmed = questionary.confirm(
            f"Calculate statistics for {len(documents)} files?", default=True
        ).ask()
        if not confirmed:
            raise CliExit.user_cancel()

    result = _engine(vault, config, quiet=quiet).calculate_batch(
        documents, config.counters.calculations
    )
    if result.failures:
        console.print(failures_table(result.failures))
        raise CliExit.error()


@app.command("preview")
def preview(
    path: Path = typer.Argument(..., help="Markdown document to inspect"),
    vault_root: Path = typer.Option(Path("."), "--vault"),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON"),
) -> None:
    """Show statistics for a document without updating its properties."""
    config = get_config()
    vault = MarkdownVault(vault_root)
    document_id = vault.document_id(path)
    engine = _engine(vault, config, quiet=True)

    if not engine.is_processable(document_id):
        raise CliExit.error(MESSAGES["NOT_PROCESSABLE"])
    try:
        stats = engine.preview(document_id)
    except ContentUnavailableError as exc:
        raise CliExit.error(f"Preview failed: {error_message(exc)}")

    if json_output:
        typer.echo(json.dumps(asdict(stats), indent=2))
    else:
        typer.echo(format_preview(stats, path.name))


def poll_changes(
    vault: MarkdownVault, seen: Dict[str, Optional[float]]
) -> Tuple[List[str], Dict[str, Optional[float]]]:
    """Return documents whose modification time differs from ``seen``, plus the new snapshot."""
    current = {
        document_id: vault.modification_time(document_id)
        for document_id in vault.list_documents()
    }
    changed = [
        document_id
        for document_id, mtime in current.items()
        if document_id not in seen or seen[document_id] != mtime
    ]
    return changed, current


class SettingsReloader:
    """
    Counter configs that follow the settings file during ``watch``.

    Called from timer threads when a recalculation fires. The file is
    re-read only when its stat signature changes, so counters added,
    edited or disabled from another shell apply to the next recalculation.
    """

    def __init__(self, config: CountCraftConfig):
        self.config = config
        self.path = Path(config.config_file) if config.config_file else None
        self._lock = threading.Lock()
        self._signature = self._stat()

    def _stat(self) -> Optional[Tuple[int, int, int]]:
        if self.path is None:
            return None
        try:
            stat = self.path.stat()
        except OSError:
            return None
        return (stat.st_mtime_ns, stat.st_size, stat.st_ino)

    def __call__(self) -> List[CounterConfig]:
        with self._lock:
            signature = self._stat()
            if signature is not None and signature != self._signature:
                self._signature = signature
                reloaded = CountCraftConfig(str(self.path))
                self.config.counters.calculations = reloaded.counters.calculations
                get_logger().info(
                    f"Reloaded {len(reloaded.counters.calculations)} counters from {self.path}"
                )
            return self.config.counters.calculations


@app.command("watch")
def watch(
    directory: Path = typer.Argument(Path("."), help="Vault directory"),
    interval: float = typer.Option(1.0, "--interval", help="Seconds between polls"),
    max_polls: int = typer.Option(
        0, "--max-polls", help="Stop after this many polls (0 runs until interrupted)"
    ),
) -> None:
    """Recalculate documents shortly after they are modified."""
    if not directory.is_dir():
        raise CliExit.error(f"Not a directory: {directory}")

    config = get_config()
    if not config.counters.auto_calculate:
        raise CliExit.config_error(
            "Auto-calculation is disabled. Enable auto_calculate in the settings "
            "file or set COUNTCRAFT_AUTO_CALCULATE=1."
        )

    vault = MarkdownVault(directory)
    engine = _engine(vault, config)

    def report(result: CalculationResult) -> None:
        if result.values:
            listing = ", ".join(f"{k}: {v}" for k, v in result.values.items())
            console.print(f"Updated {result.document_id}: {listing}", markup=False)

    recalculator = AutoRecalculator(
        engine,
        SettingsReloader(config),
        delay=config.counters.debounce_seconds,
        on_result=report,
    )

    _, seen = poll_changes(vault, {})
    console.print(f"Watching {directory} ({len(seen)} documents). Press Ctrl+C to stop.")
    polls = 0
    try:
        while not max_polls or polls < max_polls:
            time.sleep(interval)
            polls += 1
            changed, seen = poll_changes(vault, seen)
            for document_id in changed:
                engine.metadata_index.invalidate(document_id)
                recalculator.notify_changed(document_id)
    except KeyboardInterrupt:
        recalculator.cancel_all()
        console.print("Stopped watching")
        return
    recalculator.wait()


if __name__ == "__main__":
    app()
