"""Commit model and the commit log contract.

The release locator and bump classifier only ever read history through
:class:`CommitLog`, so they can run against a real repository or an
in-memory history alike.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass(frozen=True)
class Commit:
    """A single commit as read from history.

    Attributes:
        sha: Commit identifier
        timestamp: Committer time in seconds since the epoch
        message: Full commit message (title and body)
        parents: Identifiers of the parent commits
    """

    sha: str
    timestamp: int
    message: str
    parents: tuple[str, ...] = field(default=())

    @property
    def title(self) -> str:
        """First line of the message."""
        return self.message.split("\n", 1)[0]

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


class CommitLog(Protocol):
    """Read access to a commit history.

    Implementations must yield commits newest-first by commit time, and
    never yield a parent before any of its children. The release locator
    relies on this ordering to find the *most recent* release.
    """

    def head(self) -> str:
        """Return the identifier of the current commit.

        Raises:
            NoHeadCommitError: If there is no current commit
        """
        ...

    def iter_commits(self, start: str, *, since: int | None = None) -> Iterator[Commit]:
        """Iterate over ``start`` and its ancestors, newest-first.

        Args:
            start: Commit to start the walk from (included)
            since: Optional cutoff; the walk stops at the first commit
                older than this timestamp. Commits at exactly ``since``
                are still yielded.

        Returns:
            A lazy iterator; call again to restart the walk.
        """
        ...
