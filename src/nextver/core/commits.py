"""Classifying commits into version bumps.

Each line of a commit message (title and body) is checked for a
conventional-commit prefix. The strongest signal across all unreleased
commits decides the bump:

- ``feat!`` -> major
- ``feat``  -> minor
- ``fix``   -> patch

Prefixes are literal and case-sensitive; no further validation of the
message format is done.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from nextver.config.models import CommitsConfig
from nextver.core.version import BumpType

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from nextver.vcs.base import Commit, CommitLog

logger = logging.getLogger(__name__)


def classify_message(message: str, config: CommitsConfig | None = None) -> BumpType:
    """Classify a single commit message.

    Args:
        message: Full commit message
        config: Prefix configuration (defaults to feat!/feat/fix)

    Returns:
        The strongest bump signalled by any line of the message
    """
    config = config or CommitsConfig()
    major = tuple(config.major_prefixes)
    minor = tuple(config.minor_prefixes)
    patch = tuple(config.patch_prefixes)

    level = BumpType.NONE
    for line in message.split("\n"):
        if line.startswith(major):
            # Nothing is stronger; skip the remaining lines
            return BumpType.MAJOR
        if line.startswith(minor):
            level = max(level, BumpType.MINOR)
        elif line.startswith(patch):
            level = max(level, BumpType.PATCH)
    return level


def iter_unreleased_commits(
    log: CommitLog,
    head: str,
    release: Commit,
    *,
    include_boundary: bool = False,
) -> Iterator[Commit]:
    """Yield the commits made after ``release``, newest-first.

    The walk is cut off at the release commit's timestamp. The release
    commit and its ancestors are skipped; other commits from the same
    second (e.g., on a merged side branch) are still yielded.

    Args:
        log: Commit history
        head: Commit to start from
        release: The release boundary commit
        include_boundary: Also yield the release commit itself
    """
    # Parents never precede their children, so ancestry propagates forward
    released = {release.sha}
    commits = log.iter_commits(head, since=release.timestamp)
    try:
        for commit in commits:
            if commit.sha in released:
                released.update(commit.parents)
                if include_boundary and commit.sha == release.sha:
                    yield commit
                continue
            yield commit
    finally:
        close = getattr(commits, "close", None)
        if close is not None:
            close()


def calculate_bump(commits: Iterable[Commit], config: CommitsConfig | None = None) -> BumpType:
    """Calculate the bump implied by a set of commits.

    The result is the maximum level over all commits, so it does not
    depend on the order they are given in.

    Args:
        commits: Commits to classify
        config: Classification configuration

    Returns:
        The strongest bump found, or ``BumpType.NONE``
    """
    config = config or CommitsConfig()
    bump = BumpType.NONE

    for commit in commits:
        if config.skip_merge_commits and commit.is_merge:
            logger.debug("Skipping merge commit %s", commit.short_sha)
            continue
        level = classify_message(commit.message, config)
        logger.debug("%s %s -> %s", commit.short_sha, commit.title, level)
        bump = max(bump, level)

    return bump
