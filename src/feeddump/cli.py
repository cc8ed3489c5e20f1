"""CLI entry point."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from feeddump.core.checkpoint import FileCheckpointStore
from feeddump.core.config import get_settings, load_config
from feeddump.core.exceptions import FeedDumpError, FeedError
from feeddump.core.paths import get_checkpoint_file, get_config_file, get_output_dir
from feeddump.core.runner import FeedRunner, RunResult
from feeddump.logs import configure_logging

app = typer.Typer(
    name="feeddump",
    help="Save new entries of RSS and Atom feeds as offline HTML files",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Load the configuration file at this path"),
]


def _fail(error: Exception) -> typer.Exit:
    if isinstance(error, FeedError) and error.source:
        err_console.print(f"[bold red]error[/bold red] ({error.source}): {escape(str(error))}")
    else:
        err_console.print(f"[bold red]error[/bold red]: {escape(str(error))}")
    return typer.Exit(code=1)


def _print_summary(result: RunResult) -> None:
    caption = None
    if result.duration is not None:
        caption = f"finished in {result.duration.total_seconds():.1f}s"
    table = Table(title="feeddump run", caption=caption)
    table.add_column("feed")
    table.add_column("fetched", justify="right")
    table.add_column("new", justify="right")
    table.add_column("written", justify="right")
    for alias, stats in result.feed_stats.items():
        new = f"{stats.new} (all, watermark lost)" if stats.watermark_lost else str(stats.new)
        table.add_row(alias, str(stats.fetched), new, str(stats.written))
    console.print(table)


@app.command()
def run(
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-d", help="Print where each feed would be written, fetch nothing"),
    ] = False,
    stdout: Annotated[
        bool,
        typer.Option("--stdout", "-s", help="Print new entries instead of writing files"),
    ] = False,
    config: ConfigOption = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Fetch every configured feed and dump the entries not seen before."""
    try:
        settings = get_settings()
        configure_logging("DEBUG" if verbose else settings.log_level)
        feed_config = load_config(get_config_file(config))
        runner = FeedRunner(
            feed_config,
            FileCheckpointStore(get_checkpoint_file(feed_config.setting.metadata_dir)),
            get_output_dir(feed_config.setting.output_dir, settings.folder),
            dry_run=dry_run,
            stdout=stdout,
            echo=typer.echo,
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
            user_agent=settings.user_agent,
        )
        result = asyncio.run(runner.run())
    except (FeedDumpError, OSError, ValidationError) as e:
        raise _fail(e) from e

    if not dry_run and not stdout:
        _print_summary(result)


@app.command()
def sources(config: ConfigOption = None) -> None:
    """List the configured feeds."""
    try:
        feed_config = load_config(get_config_file(config))
    except FeedDumpError as e:
        raise _fail(e) from e

    table = Table()
    table.add_column("alias")
    table.add_column("url")
    for alias, url in feed_config.feeds():
        table.add_row(alias, url)
    console.print(table)


@app.command()
def version() -> None:
    """Show version."""
    from feeddump import __version__

    console.print(f"feeddump {__version__}")


if __name__ == "__main__":
    app()
