"""Next version calculation.

Ties together the release locator and the bump classifier:

1. Find the most recent release commit reachable from HEAD.
2. Parse the version from its title.
3. Classify every commit made since that release.
4. Apply the strongest bump (at most one) to the release version.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from nextver.config.models import NextverConfig
from nextver.core.commits import calculate_bump, iter_unreleased_commits
from nextver.core.release import find_latest_release, parse_release_version
from nextver.core.version import BumpType, Version

if TYPE_CHECKING:
    from nextver.vcs.base import Commit, CommitLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VersionCalculation:
    """Outcome of a next-version calculation.

    Attributes:
        head: Commit the calculation started from
        release: The release commit used as the baseline
        previous: Version of that release
        bump: Bump applied to ``previous``
        version: The next version
        commit_count: Number of commits classified
    """

    head: str
    release: Commit
    previous: Version
    bump: BumpType
    version: Version
    commit_count: int

    @property
    def is_changed(self) -> bool:
        return self.bump != BumpType.NONE


def calculate_next_version(
    log: CommitLog,
    config: NextverConfig | None = None,
) -> VersionCalculation:
    """Calculate the next version for a commit history.

    Reads from ``log`` only, so calling it again on unchanged history
    gives the same result.

    Args:
        log: Commit history to inspect
        config: Configuration (defaults apply when omitted)

    Returns:
        The calculation result; ``result.version`` is the next version

    Raises:
        NoHeadCommitError: If there is no current commit
        NoReleaseFoundError: If history contains no release commit
        MalformedReleaseVersionError: If the release version cannot be parsed
        CommitDecodeError: If a commit message cannot be decoded
    """
    config = config or NextverConfig()

    head = log.head()
    release = find_latest_release(log, head, prefix=config.release_prefix)
    previous = parse_release_version(release, prefix=config.release_prefix)

    commits = list(
        iter_unreleased_commits(
            log,
            head,
            release,
            include_boundary=config.commits.include_release_commit,
        )
    )
    bump = calculate_bump(commits, config.commits)
    version = previous.bump(bump)

    logger.debug(
        "Release %s at %s, %d commit(s) since, bump %s -> %s",
        previous,
        release.short_sha,
        len(commits),
        bump,
        version,
    )

    return VersionCalculation(
        head=head,
        release=release,
        previous=previous,
        bump=bump,
        version=version,
        commit_count=len(commits),
    )
