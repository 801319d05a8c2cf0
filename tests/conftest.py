"""Shared test fixtures."""

from __future__ import annotations

import os
import shutil
import subprocess
from typing import TYPE_CHECKING

import pytest

from nextver.exceptions import NoHeadCommitError
from nextver.vcs.base import Commit

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence
    from pathlib import Path

BASE_TIMESTAMP = 1_700_000_000


# =============================================================================
# In-memory history
# =============================================================================


class InMemoryHistory:
    """A commit log held in memory.

    ``commits`` must be ordered newest-first, as a real log would be.
    """

    def __init__(self, commits: Sequence[Commit]) -> None:
        self.commits = list(commits)
        self.walks = 0
        self.yielded = 0

    @classmethod
    def linear(
        cls,
        messages: Sequence[str],
        *,
        start: int = BASE_TIMESTAMP,
        step: int = 60,
    ) -> InMemoryHistory:
        """Build a linear history from messages given oldest-first."""
        commits: list[Commit] = []
        parent: str | None = None
        for i, message in enumerate(messages):
            sha = f"{i:040x}"
            commits.append(
                Commit(
                    sha=sha,
                    timestamp=start + i * step,
                    message=message,
                    parents=(parent,) if parent else (),
                )
            )
            parent = sha
        return cls(list(reversed(commits)))

    def head(self) -> str:
        if not self.commits:
            raise NoHeadCommitError("empty history")
        return self.commits[0].sha

    def iter_commits(self, start: str, *, since: int | None = None) -> Iterator[Commit]:
        self.walks += 1
        by_sha = {c.sha: c for c in self.commits}

        reachable: set[str] = set()
        stack = [start]
        while stack:
            sha = stack.pop()
            if sha in reachable:
                continue
            reachable.add(sha)
            stack.extend(by_sha[sha].parents)

        for commit in self.commits:
            if commit.sha not in reachable:
                continue
            if since is not None and commit.timestamp < since:
                return
            self.yielded += 1
            yield commit


@pytest.fixture
def linear_history() -> Callable[..., InMemoryHistory]:
    """Factory for linear in-memory histories (messages oldest-first)."""
    return InMemoryHistory.linear


@pytest.fixture
def history_from_commits() -> Callable[[Sequence[Commit]], InMemoryHistory]:
    """Factory for in-memory histories from explicit commits (newest-first)."""
    return InMemoryHistory


# =============================================================================
# Sample commits
# =============================================================================


@pytest.fixture
def feat_commit() -> Commit:
    return Commit("feat123", BASE_TIMESTAMP, "feat: add user authentication")


@pytest.fixture
def fix_commit() -> Commit:
    return Commit("fix456", BASE_TIMESTAMP, "fix(core): handle empty input")


@pytest.fixture
def breaking_commit() -> Commit:
    return Commit("break789", BASE_TIMESTAMP, "feat!: remove legacy API")


@pytest.fixture
def sample_commits() -> list[Commit]:
    """A mix of commit kinds, newest-first."""
    return [
        Commit("a1", BASE_TIMESTAMP + 50, "docs: update readme"),
        Commit("a2", BASE_TIMESTAMP + 40, "fix: off-by-one in pager"),
        Commit("a3", BASE_TIMESTAMP + 30, "chore: bump dependencies"),
        Commit("a4", BASE_TIMESTAMP + 20, "feat: add export"),
        Commit("a5", BASE_TIMESTAMP + 10, "Merge branch 'topic'", parents=("x", "y")),
    ]


# =============================================================================
# Real git repositories
# =============================================================================


class GitRepoBuilder:
    """Creates commits with controlled timestamps in a real repository."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._next_timestamp = BASE_TIMESTAMP

    def git(self, *args: str, input: bytes | None = None) -> str:
        env = {
            **os.environ,
            "GIT_AUTHOR_DATE": f"{self._next_timestamp} +0000",
            "GIT_COMMITTER_DATE": f"{self._next_timestamp} +0000",
        }
        result = subprocess.run(
            ["git", *args],
            cwd=self.path,
            input=input,
            capture_output=True,
            check=True,
            env=env,
        )
        return result.stdout.decode("utf-8", errors="replace").strip()

    def commit(self, message: str | bytes) -> str:
        """Create an empty commit with ``message`` verbatim; return its sha."""
        data = message.encode("utf-8") if isinstance(message, str) else message
        self.git("commit", "--allow-empty", "--cleanup=verbatim", "-q", "-F", "-", input=data)
        self._next_timestamp += 60
        return self.git("rev-parse", "HEAD")

    def commit_raw(self, message: bytes) -> str:
        """Write a commit object with ``message`` stored byte-for-byte.

        ``git commit`` re-encodes messages that are not UTF-8, so the
        object is written directly and HEAD moved onto it.
        """
        tree = self.git("hash-object", "-t", "tree", "-w", "--stdin", input=b"")
        parent = self.git("rev-parse", "--verify", "--quiet", "HEAD") if self._has_head() else ""
        ident = f"Test User <test@example.com> {self._next_timestamp} +0000"
        header = f"tree {tree}\n"
        if parent:
            header += f"parent {parent}\n"
        header += f"author {ident}\ncommitter {ident}\n\n"

        sha = self.git(
            "hash-object", "-t", "commit", "-w", "--stdin", input=header.encode("ascii") + message
        )
        self.git("update-ref", "HEAD", sha)
        self._next_timestamp += 60
        return sha

    def _has_head(self) -> bool:
        result = subprocess.run(
            ["git", "rev-parse", "--verify", "--quiet", "HEAD"],
            cwd=self.path,
            capture_output=True,
        )
        return result.returncode == 0


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> GitRepoBuilder:
    """An empty git repository with a committer identity configured."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    builder = GitRepoBuilder(repo_path)
    builder.git("init", "-q")
    builder.git("config", "user.name", "Test User")
    builder.git("config", "user.email", "test@example.com")
    builder.git("config", "commit.gpgsign", "false")
    return builder


@pytest.fixture
def temp_git_repo_with_release(temp_git_repo: GitRepoBuilder) -> GitRepoBuilder:
    """A repository whose history is: init, release: 1.2.3."""
    temp_git_repo.commit("chore: initial commit")
    temp_git_repo.commit("release: 1.2.3")
    return temp_git_repo
