"""CLI entry point for inspecting stored snapshots."""

from __future__ import annotations

import sys
from collections import Counter
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from config.logging_setup import configure_logging
from config.settings import get_settings
from snapshot_engine.exceptions import MalformedSnapshotError
from snapshot_engine.serialization import parse_reference, pretty
from store.base import StoreError
from store.syrupy_store import SNAPSHOT_SUFFIX, discover_snapshot_files, load_snapshot_file


console = Console()


def _load_or_exit(path: Path) -> str:
    try:
        return load_snapshot_file(path)
    except StoreError as e:
        console.print(f"[red]{e}[/red]", soft_wrap=True)
        sys.exit(2)


def _expand(paths: tuple[Path, ...]) -> list[Path]:
    """Snapshot files named directly, plus every ``.json`` file in named directories."""
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(path.glob(f"*{SNAPSHOT_SUFFIX}")))
        else:
            files.append(path)
    return files


@click.group()
@click.version_option(version="1.0.0")
@click.option("--log-level", default=None, help="Override LOG_LEVEL for this command.")
def cli(log_level: str | None) -> None:
    """Snapshot Predicate - inspect and validate stored snapshots."""
    configure_logging(log_level, rich_output=True)


@cli.command(name="list")
@click.argument(
    "root",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
def list_snapshots(root: Path) -> None:
    """List test modules below ROOT with their snapshot counts."""
    files = discover_snapshot_files(root, get_settings().snapshot_dir_name)
    if not files:
        console.print(f"[yellow]No snapshot files found under {root}[/yellow]")
        return

    modules = Counter(path.parent for path in files)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Snapshot directory", style="dim")
    table.add_column("Snapshots", justify="right")
    for directory, count in sorted(modules.items()):
        table.add_row(str(directory.relative_to(root)), str(count))

    console.print(table)
    console.print(f"[bold]{len(files)}[/bold] snapshots in {len(modules)} test modules")


@cli.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
def show(paths: tuple[Path, ...]) -> None:
    """Print the stored value of each snapshot file or directory in PATHS."""
    for path in _expand(paths):
        text = _load_or_exit(path)
        try:
            body = Syntax(pretty(parse_reference(text)), "json", theme="ansi_dark")
        except MalformedSnapshotError as e:
            body = Text.assemble((str(e), "red"), "\n", text)
        console.print(Panel(body, title=path.stem, title_align="left"))


@cli.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
def check(paths: tuple[Path, ...]) -> None:
    """Verify that every snapshot file in PATHS holds parseable JSON."""
    files = _expand(paths)
    invalid = 0
    for path in files:
        try:
            parse_reference(_load_or_exit(path))
        except MalformedSnapshotError as e:
            invalid += 1
            console.print(f"[red]INVALID[/red] {path}: {e}", soft_wrap=True)

    if invalid:
        console.print(f"\n[red]{invalid} of {len(files)} snapshots are malformed[/red]")
        sys.exit(1)
    console.print(f"[green]✓[/green] {len(files)} snapshots OK")


if __name__ == "__main__":
    cli()
