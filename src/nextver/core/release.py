"""Locating the last release commit.

A release commit is one whose title starts with the release prefix,
followed by the released version::

    release: 1.2.3
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from nextver.config.models import DEFAULT_RELEASE_PREFIX
from nextver.core.version import Version, parse_version
from nextver.exceptions import (
    MalformedReleaseVersionError,
    NoReleaseFoundError,
    VersionParseError,
)

if TYPE_CHECKING:
    from nextver.vcs.base import Commit, CommitLog

logger = logging.getLogger(__name__)


def is_release_commit(commit: Commit, prefix: str = DEFAULT_RELEASE_PREFIX) -> bool:
    """Check whether a commit's title marks a release."""
    return commit.title.startswith(prefix)


def find_latest_release(
    log: CommitLog,
    head: str,
    *,
    prefix: str = DEFAULT_RELEASE_PREFIX,
) -> Commit:
    """Find the most recent release commit reachable from ``head``.

    History is walked newest-first and the walk stops at the first
    match, which may be ``head`` itself.

    Args:
        log: Commit history to search
        head: Commit to start from
        prefix: Release title prefix

    Returns:
        The nearest release commit

    Raises:
        NoReleaseFoundError: If no commit in history is a release
    """
    commits = log.iter_commits(head)
    try:
        for commit in commits:
            if is_release_commit(commit, prefix):
                logger.debug("Found release commit %s: %s", commit.short_sha, commit.title)
                return commit
    finally:
        # Stop a streaming walk as soon as we have an answer
        close = getattr(commits, "close", None)
        if close is not None:
            close()

    raise NoReleaseFoundError(
        f"No release commit found: no commit title starts with {prefix!r}. "
        f"Create one with e.g. git commit --allow-empty -m '{prefix} 0.1.0'"
    )


def parse_release_version(commit: Commit, *, prefix: str = DEFAULT_RELEASE_PREFIX) -> Version:
    """Parse the version carried by a release commit's title.

    Raises:
        MalformedReleaseVersionError: If the title is not a release title
            or its version is not a valid semantic version
    """
    if not is_release_commit(commit, prefix):
        raise MalformedReleaseVersionError(
            f"Commit {commit.short_sha} is not a release commit: {commit.title!r}"
        )

    version_text = commit.title[len(prefix) :]
    try:
        return parse_version(version_text)
    except VersionParseError as e:
        raise MalformedReleaseVersionError(
            f"Release commit {commit.short_sha} has an invalid version: {version_text.strip()!r}"
        ) from e


def format_release_title(version: Version, *, prefix: str = DEFAULT_RELEASE_PREFIX) -> str:
    """Build the title of a release commit for ``version``."""
    return f"{prefix} {version}"
