"""Click CLI for chunk-dist."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from chunk_dist.config import get_settings
from chunk_dist.pipeline import ChunkReport, analyze
from chunk_dist.walker import HomeDirResolutionError

__version__ = "0.1.0"

console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-7s %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )


@click.command()
@click.argument(
    "root",
    required=False,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON.")
@click.option(
    "--strict-remainder",
    is_flag=True,
    help="Count exact multiples of 1 MB as full chunks only (no 0-byte tail).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(root: Path | None, as_json: bool, strict_remainder: bool, verbose: bool) -> None:
    """chunk-dist — Estimate chunk counts and sizes for a directory tree.

    ROOT defaults to CHUNK_DIST_ROOT_DIR, or the current user's home directory.
    """
    _setup_logging(verbose)
    settings = get_settings()
    if strict_remainder:
        settings.zero_remainder_chunk = False

    if not as_json:
        console.print(f"chunk_distribution v{__version__}")

    if root is None:
        try:
            root = settings.resolve_root()
        except HomeDirResolutionError as exc:
            console.print(f"[red]{exc}[/red]")
            sys.exit(1)
        if not root.is_dir():
            console.print(f"[red]Not a directory:[/red] {root}")
            sys.exit(1)

    if not as_json:
        console.print(f"Gathering stats for {root}")

    report = analyze(settings, root)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        _print_report(report)


def _print_report(report: ChunkReport) -> None:
    """Print totals followed by the histogram table."""
    t = report.totals
    console.print(f"Total files: {t.total_files}")
    console.print(f"Total size: {_human_size(t.large_file_bytes + t.small_file_bytes)}")
    console.print(f"Files larger than 1 MB: {t.large_files} ({t.large_gigabytes:f} GB)")
    console.print(f"Files smaller than 1 MB: {t.small_files} ({t.small_gigabytes:f} GB)")
    console.print(f"Total chunks: {t.total_chunks}")
    console.print(f"Large chunks: {t.large_chunks}")
    console.print(f"Small chunks: {t.small_chunks}")
    if report.skipped_dirs:
        console.print(f"[yellow]Skipped directories: {len(report.skipped_dirs)}[/yellow]")

    table = Table(title="Chunk Size Distribution")
    table.add_column("Chunk Size", justify="right")
    table.add_column("Count", justify="right")
    for bucket, count in report.histogram:
        table.add_row(bucket.label, str(count))

    console.print()
    console.print(table)


def _human_size(nbytes: int) -> str:
    """Convert bytes to a human-readable string."""
    for unit in ("B", "KB", "MB", "GB"):
        if nbytes < 1024:
            return f"{nbytes:.1f} {unit}"
        nbytes /= 1024  # type: ignore[assignment]
    return f"{nbytes:.1f} TB"
