#!/usr/bin/env python3
"""Command-line interface for ytmatch.

Imports a CSV playlist export into a JSON collection of YouTube Music
tracks. For integration into other applications, import ytmatch as a
library.
"""

import logging
import signal
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from ytmatch import create_importer
from ytmatch.config import ImportConfig
from ytmatch.exceptions import YTMatchError
from ytmatch.models.cancel import CancelToken
from ytmatch.models.progress import (
    ImportComplete,
    ImportFailure,
    ImportInProgress,
    ImportStatus,
)
from ytmatch.models.results import FailedTrack, ImportResult
from ytmatch.services.collection import JSONCollectionWriter
from ytmatch.services.csv_parser import Column, CSVPlaylistParser

logger = logging.getLogger("ytmatch")

# Using the same console for Progress and RichHandler ensures logs appear
# above the progress bar rather than interfering with it.
PROGRESS_COLUMNS = (
    SpinnerColumn(),
    TextColumn("[progress.description]{task.description}"),
    BarColumn(),
    TaskProgressColumn(),
    TimeElapsedColumn(),
)

CSV_PATH = click.Path(exists=True, dir_okay=False, path_type=Path)


def setup_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Configure logging with Rich handler.

    Clears existing handlers first, so it can be called again to switch to
    the console shared with a progress bar.

    Args:
        verbose: If True, set log level to DEBUG. Otherwise WARNING.
        console: Optional Console instance to use for RichHandler.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = RichHandler(
        rich_tracebacks=True,
        show_path=False,
        console=console,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    root_logger.setLevel(level)
    root_logger.addHandler(handler)


def parse_column(value: str | None) -> Column | None:
    """Interpret a column option as a zero-based index or a header name."""
    if value is None:
        return None
    value = value.strip()
    return int(value) if value.isdigit() else value


def print_failed_tracks(console: Console, failed: list[FailedTrack]) -> None:
    """Print records that could not be resolved."""
    table = Table(title="Not imported", title_style="bold yellow")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Artist")
    table.add_column("Title")
    table.add_column("Album", style="dim")
    table.add_column("Reason", style="yellow")

    for failure in failed:
        record = failure.record
        table.add_row(
            str(failure.index + 1),
            record.artist,
            record.title,
            record.album or "",
            failure.reason.label,
        )
    console.print(table)


def print_summary(console: Console, result: ImportResult, output: Path) -> None:
    """Print the final import summary."""
    if result.failed:
        print_failed_tracks(console, result.failed)

    msg = (
        f"\nImported [green]{len(result.resolved)}[/green] "
        f"of [cyan]{result.total}[/cyan] track(s)"
    )
    if result.failed:
        msg += f", [yellow]{len(result.failed)} failed[/yellow]"
    if result.cancelled:
        msg += " [red](cancelled)[/red]"
    console.print(msg)

    if result.resolved and not result.cancelled:
        console.print(f"Saved to [cyan]{output}[/cyan]")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Match exported playlists to YouTube Music tracks."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose=verbose)


@main.command(name="columns")
@click.argument("csv_file", type=CSV_PATH)
def columns_cmd(csv_file: Path) -> None:
    """List the header columns of a CSV export."""
    console = Console()
    try:
        header = CSVPlaylistParser().get_header(csv_file)
    except YTMatchError as e:
        logger.error(str(e))
        raise click.ClickException(str(e)) from e

    if not header:
        console.print("[yellow]File is empty[/yellow]")
        return
    for idx, name in enumerate(header):
        console.print(f"[dim]{idx:>3}[/dim]  {name}")


@main.command(name="import")
@click.argument("csv_file", type=CSV_PATH)
@click.option(
    "--title", "title_col", required=True, help="Title column (name or index)."
)
@click.option(
    "--artist", "artist_col", required=True, help="Artist column (name or index)."
)
@click.option(
    "--album", "album_col", default=None, help="Album column (name or index)."
)
@click.option(
    "--duration",
    "duration_col",
    default=None,
    help="Duration column, in milliseconds or m:ss (name or index).",
)
@click.option(
    "--id", "id_col", default=None, help="Video id or URL column (name or index)."
)
@click.option("--name", default=None, help="Collection name (default: file name).")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output JSON file (default: <csv name>.json).",
)
@click.option(
    "--batch-size",
    type=click.IntRange(1, 50),
    default=ImportConfig.batch_size,
    show_default=True,
    help="Tracks resolved concurrently.",
)
@click.option(
    "--min-score",
    type=click.IntRange(0),
    default=ImportConfig.min_score,
    show_default=True,
    help="Minimum fuzzy match score.",
)
@click.pass_context
def import_cmd(
    ctx: click.Context,
    csv_file: Path,
    title_col: str,
    artist_col: str,
    album_col: str | None,
    duration_col: str | None,
    id_col: str | None,
    name: str | None,
    output: Path | None,
    batch_size: int,
    min_score: int,
) -> None:
    """Resolve every track of a CSV export and save the matches as JSON.

    \b
    Examples:
      ytmatch import export.csv --title "Track Name" --artist "Artist Name(s)"
      ytmatch import export.csv --title 0 --artist 1 --album 2 -o road-trip.json
    """
    console = Console()
    verbose = ctx.obj.get("verbose", False)

    # Reconfigure logging to use this console so logs appear above progress bar
    setup_logging(verbose=verbose, console=console)

    output = output or csv_file.with_suffix(".json")
    name = name or csv_file.stem
    cancel_token = CancelToken()

    try:
        records = CSVPlaylistParser().parse(
            csv_file,
            title_column=parse_column(title_col),
            artist_column=parse_column(artist_col),
            album_column=parse_column(album_col),
            duration_column=parse_column(duration_col),
            id_column=parse_column(id_col),
        )
        if not records:
            console.print("[yellow]No tracks found in file[/yellow]")
            return

        importer = create_importer(
            ImportConfig(batch_size=batch_size, min_score=min_score),
            sink=JSONCollectionWriter(output),
        )

        failure: ImportFailure | None = None
        with Progress(*PROGRESS_COLUMNS, console=console) as progress:
            task = progress.add_task("Matching tracks", total=len(records))

            def on_progress(status: ImportStatus) -> None:
                nonlocal failure
                if isinstance(status, ImportInProgress):
                    progress.update(task, completed=status.processed)
                elif isinstance(status, ImportComplete):
                    progress.update(task, completed=status.imported + status.failed)
                else:
                    failure = status

            # Ctrl+C stops after the running batch instead of killing workers
            previous_handler = signal.signal(
                signal.SIGINT, lambda *_: cancel_token.cancel()
            )
            try:
                result = importer.import_tracks(
                    records, on_progress, name=name, cancel_token=cancel_token
                )
            finally:
                signal.signal(signal.SIGINT, previous_handler)

        if result is None:
            message = failure.message if failure else "Import failed"
            raise click.ClickException(message)

        print_summary(console, result, output)

    except YTMatchError as e:
        logger.error(str(e))
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    main()
