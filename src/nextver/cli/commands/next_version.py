"""Implementation of the next-version command.

Prints the next version to stdout and, on request, records it with an
empty release commit.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.markup import escape

from nextver.config import load_config
from nextver.core.calculator import calculate_next_version
from nextver.core.release import format_release_title
from nextver.exceptions import DirtyWorkingTreeError, NextverError
from nextver.vcs import GitRepository

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from nextver.config.models import NextverConfig
    from nextver.core.calculator import VersionCalculation

logger = logging.getLogger(__name__)


def run_next(
    target_dir: Path,
    release: bool,
    force: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the next-version command.

    Args:
        target_dir: Directory inside the repository to inspect
        release: Create an empty ``release: <version>`` commit
        force: Release even if the working tree is dirty
        console: Console for standard output
        err_console: Console for error output
    """
    try:
        repo = GitRepository(target_dir)
        config = load_config(repo.path, root=repo.path)
        calculation = calculate_next_version(repo, config)
    except NextverError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}", highlight=False, soft_wrap=True)
        raise SystemExit(1) from e

    # stdout carries the version and nothing else
    console.print(str(calculation.version), highlight=False, markup=False)

    if release:
        _release(repo, calculation, config, force, err_console)


def _release(
    repo: GitRepository,
    calculation: VersionCalculation,
    config: NextverConfig,
    force: bool,
    err_console: Console,
) -> None:
    """Create the release commit for ``calculation``."""
    if not calculation.is_changed:
        err_console.print(
            f"[yellow]No releasable changes since {calculation.previous}. "
            "Not creating a release commit.[/]",
            highlight=False,
        )
        return

    title = format_release_title(calculation.version, prefix=config.release_prefix)

    try:
        if not (force or config.allow_dirty) and repo.is_dirty():
            raise DirtyWorkingTreeError(
                "Repository has uncommitted changes. "
                "Commit or stash them, or pass --force to release anyway."
            )
        sha = repo.commit_empty(title)
    except NextverError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}", highlight=False, soft_wrap=True)
        raise SystemExit(1) from e

    logger.debug("Created release commit %s", sha)
    err_console.print(f"[green]✓[/] Created release commit [cyan]{escape(title)}[/]", highlight=False)
