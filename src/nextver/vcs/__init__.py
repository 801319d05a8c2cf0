"""Version control access."""

from __future__ import annotations

from nextver.vcs.base import Commit, CommitLog
from nextver.vcs.git import GitRepository, find_repository_root

__all__ = [
    "Commit",
    "CommitLog",
    "GitRepository",
    "find_repository_root",
]
