"""Git repository access via the git command line.

Commits are streamed from ``git log`` so that a walk which stops early
(e.g., at the first release commit) never reads the rest of history.
"""

from __future__ import annotations

import logging
import subprocess
import tempfile
from pathlib import Path
from typing import IO, TYPE_CHECKING

from nextver.exceptions import (
    CommitDecodeError,
    GitError,
    NoHeadCommitError,
    RepositoryNotFoundError,
)
from nextver.vcs.base import Commit

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

# Fields are separated by US (0x1f); commits by NUL via -z
_FIELD_SEP = b"\x1f"
_RECORD_SEP = b"\x00"
_LOG_FORMAT = "%H%x1f%ct%x1f%P%x1f%B"
_CHUNK_SIZE = 64 * 1024


def find_repository_root(path: Path | None = None) -> Path:
    """Find the nearest git repository at or above ``path``.

    Args:
        path: Directory to start searching from (defaults to cwd)

    Returns:
        Root directory of the repository (the one containing ``.git``)

    Raises:
        RepositoryNotFoundError: If no repository is found
    """
    start = path if path is not None else Path.cwd()
    if not start.exists():
        raise RepositoryNotFoundError(f"Path does not exist: {start}")

    current = start.resolve()
    if current.is_file():
        current = current.parent

    # .git is a directory in a normal clone and a file in worktrees/submodules
    for directory in (current, *current.parents):
        if (directory / ".git").exists():
            return directory

    raise RepositoryNotFoundError(f"Did not find a git repository in {start} or its parents")


class GitRepository:
    """A git repository on disk.

    Implements the :class:`~nextver.vcs.base.CommitLog` protocol.

    Args:
        path: Any directory inside the repository
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = find_repository_root(path)

    def __repr__(self) -> str:
        return f"GitRepository({str(self.path)!r})"

    def _run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
        cmd = ["git", *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            return subprocess.run(
                cmd,
                cwd=self.path,
                capture_output=True,
                text=True,
                check=check,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"git {args[0]} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e

    def head(self) -> str:
        """Return the sha of HEAD.

        Raises:
            NoHeadCommitError: If the repository has no commits yet
        """
        result = self._run("rev-parse", "--verify", "--quiet", "HEAD^{commit}", check=False)
        if result.returncode != 0:
            raise NoHeadCommitError(f"Repository {self.path} has no HEAD commit")
        return result.stdout.strip()

    def iter_commits(self, start: str = "HEAD", *, since: int | None = None) -> Iterator[Commit]:
        """Stream ``start`` and its ancestors, newest-first by commit time.

        ``--date-order`` keeps commit-time ordering while never showing a
        parent before its children.

        Raises:
            CommitDecodeError: If a commit message is not valid UTF-8
            GitError: If git log fails
        """
        cmd = ["git", "log", "--date-order", "-z", f"--format={_LOG_FORMAT}", start, "--"]
        logger.debug("Running %s", " ".join(cmd))

        # stderr goes to a file so a chatty git can never block on a full pipe
        with tempfile.TemporaryFile() as stderr_file:
            try:
                proc = subprocess.Popen(
                    cmd,
                    cwd=self.path,
                    stdout=subprocess.PIPE,
                    stderr=stderr_file,
                )
            except FileNotFoundError as e:
                raise GitError("git executable not found") from e

            finished = False
            try:
                assert proc.stdout is not None
                for record in _read_records(proc.stdout):
                    commit = _parse_record(record)
                    if since is not None and commit.timestamp < since:
                        break
                    yield commit
                else:
                    finished = True
            finally:
                if not finished:
                    proc.kill()
                proc.communicate()

            if finished and proc.returncode != 0:
                stderr_file.seek(0)
                raise GitError(
                    f"git log failed with exit code {proc.returncode}",
                    stderr=stderr_file.read().decode("utf-8", errors="replace"),
                )

    def is_dirty(self) -> bool:
        """Return True if the working tree or index has uncommitted changes."""
        result = self._run("status", "--porcelain", "--untracked-files=no")
        return bool(result.stdout.strip())

    def commit_empty(self, message: str) -> str:
        """Create an empty commit and return its sha.

        Args:
            message: Commit message

        Raises:
            GitError: If the commit fails
        """
        self._run("commit", "--allow-empty", "-m", message)
        return self.head()


def _read_records(stream: IO[bytes]) -> Iterator[bytes]:
    buffer = b""
    while chunk := stream.read(_CHUNK_SIZE):
        buffer += chunk
        *records, buffer = buffer.split(_RECORD_SEP)
        yield from records
    if buffer:
        yield buffer


def _parse_record(record: bytes) -> Commit:
    sha, timestamp, parents, raw_message = record.lstrip(b"\n").split(_FIELD_SEP, 3)
    sha_text = sha.decode("ascii")
    try:
        message = raw_message.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CommitDecodeError(
            f"Commit {sha_text[:7]} has a message that is not valid UTF-8",
            sha=sha_text,
        ) from e

    return Commit(
        sha=sha_text,
        timestamp=int(timestamp),
        message=message.rstrip("\n"),
        parents=tuple(parents.decode("ascii").split()),
    )
