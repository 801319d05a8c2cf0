"""Command line interface."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from nextver import __version__
from nextver.cli.commands.next_version import run_next
from nextver.log import setup_logging

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="nextver",
    help="Compute the next semantic version from conventional commits since the last release.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"nextver {__version__}", highlight=False)
        raise typer.Exit()


@app.command()
def next_version(
    target_dir: Annotated[
        Path,
        typer.Option(
            "--target-dir",
            "-t",
            help=(
                "The target repository directory. If it is not a git repository, "
                "its parents are searched."
            ),
        ),
    ] = Path("."),
    release: Annotated[
        bool,
        typer.Option(
            "--release",
            "-r",
            help=(
                "Create an empty 'release: <NEW_VERSION>' commit. "
                "Requires a clean working tree unless --force is given."
            ),
        ),
    ] = False,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Ignore uncommitted changes when releasing."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging on stderr."),
    ] = False,
    show_version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the nextver version and exit.",
        ),
    ] = False,
) -> None:
    """Print the next version of the repository."""
    setup_logging(err_console, verbose=verbose)
    run_next(target_dir, release, force, console, err_console)


def main() -> None:
    """Entry point for the nextver command."""
    app()
