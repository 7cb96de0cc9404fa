"""CLI commands for dreamjournal."""

from __future__ import annotations

import curses
import json
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from dreamjournal import __logo__, __version__
from dreamjournal.config.loader import get_config_path, load_config, save_config
from dreamjournal.config.schema import Config
from dreamjournal.journal.record import EMPTY_EXPERIENCE
from dreamjournal.journal.store import CollectionStore
from dreamjournal.utils.helpers import setup_logging

app = typer.Typer(
    name="dreamjournal",
    help=f"{__logo__} dreamjournal - A terminal dream journal",
    no_args_is_help=False,
)

console = Console()

PREVIEW_CHARS = 40


def version_callback(value: bool) -> None:
    if value:
        console.print(f"{__logo__} dreamjournal v{__version__}")
        raise typer.Exit()


def _load(config_path: Optional[Path], data_file: Optional[Path]) -> tuple[Config, CollectionStore]:
    config = load_config(config_path)
    if data_file is not None:
        config.journal.data_file = str(data_file)
    return config, CollectionStore.load(config.data_path)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """Open the journal when no command is given."""
    if ctx.invoked_subcommand is None:
        run(config_path=None, data_file=None, window_size=None)


@app.command()
def run(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.json"),
    data_file: Optional[Path] = typer.Option(None, "--file", "-f", help="Journal file to open"),
    window_size: Optional[int] = typer.Option(None, "--window", "-w", min=1, max=20, help="Records shown side by side"),
) -> None:
    """Open the interactive journal."""
    from dreamjournal.tui.app import run_terminal

    config, store = _load(config_path, data_file)
    if window_size is not None:
        config.journal.window_size = window_size

    # The terminal belongs to curses while the journal is open
    setup_logging(config.logging.level, config.log_path, config.logging.rotation)

    try:
        run_terminal(config, store)
    except curses.error as e:
        logger.error("Terminal setup failed: {}", e)
        console.print(f"[red]Could not start the terminal interface: {e}[/red]")
        raise typer.Exit(1)


@app.command("list")
def list_records(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.json"),
    data_file: Optional[Path] = typer.Option(None, "--file", "-f", help="Journal file to read"),
) -> None:
    """List recorded dreams."""
    _, store = _load(config_path, data_file)

    if not len(store):
        console.print("No dreams recorded yet.")
        return

    table = Table(title=f"Dreams ({store.path})")
    table.add_column("#", justify="right")
    table.add_column("Dreamed at")
    table.add_column("Intensity")
    table.add_column("Freq", justify="right")
    table.add_column("Style")
    table.add_column("Experience")

    for number, record in enumerate(store, start=1):
        preview = record.experience.replace("\n", " ")
        if len(preview) > PREVIEW_CHARS:
            preview = preview[: PREVIEW_CHARS - 1] + "…"
        table.add_row(
            str(number),
            record.date,
            record.intensity.value,
            str(record.frequency),
            record.style.value,
            escape(preview),
        )

    console.print(table)


@app.command()
def show(
    number: int = typer.Argument(..., min=1, help="Record number as shown by `list`"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.json"),
    data_file: Optional[Path] = typer.Option(None, "--file", "-f", help="Journal file to read"),
) -> None:
    """Show one dream in full."""
    _, store = _load(config_path, data_file)

    if number > len(store):
        console.print(f"[red]No record {number} (journal has {len(store)})[/red]")
        raise typer.Exit(1)

    record = store[number - 1]
    header = (
        f"[bold]Dreamed at:[/bold] {record.date}\n"
        f"[bold]Intensity:[/bold] {record.intensity.value}\n"
        f"[bold]Frequency:[/bold] {record.frequency}\n"
        f"[bold]Style:[/bold] {record.style.value}"
    )
    body = escape(record.experience or EMPTY_EXPERIENCE)
    console.print(Panel(f"{header}\n\n{body}", title=f"Record {number}"))


@app.command("config")
def show_config(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.json"),
    init: bool = typer.Option(False, "--init", help="Write the effective configuration to disk"),
) -> None:
    """Show the effective configuration."""
    path = config_path or get_config_path()
    config = load_config(path)

    if init:
        save_config(config, path)
        console.print(f"[green]✓[/green] Wrote config to {path}")

    console.print(f"Config file: {path}{'' if path.exists() else ' (not created, using defaults)'}")
    console.print(f"Journal file: {config.data_path}")
    console.print(f"Log file: {config.log_path}")
    console.print_json(json.dumps(config.model_dump(by_alias=True)))


if __name__ == "__main__":
    app()
