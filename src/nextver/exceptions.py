"""Exception hierarchy for nextver.

Every failure the tool can report derives from :class:`NextverError`,
so callers can catch a single type and turn it into an exit status.

    NextverError
    ├── ConfigError
    │   ├── ConfigNotFoundError
    │   └── ConfigValidationError
    ├── VersionParseError
    ├── GitError
    │   ├── RepositoryNotFoundError
    │   ├── NoHeadCommitError
    │   ├── CommitDecodeError
    │   └── DirtyWorkingTreeError
    └── ReleaseError
        ├── NoReleaseFoundError
        └── MalformedReleaseVersionError
"""

from __future__ import annotations


class NextverError(Exception):
    """Base exception for all nextver errors."""


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------


class ConfigError(NextverError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """No pyproject.toml was found."""


class ConfigValidationError(ConfigError):
    """The [tool.nextver] table is invalid."""


# -----------------------------------------------------------------------------
# Versions
# -----------------------------------------------------------------------------


class VersionParseError(NextverError):
    """A string is not a valid semantic version."""


# -----------------------------------------------------------------------------
# Git
# -----------------------------------------------------------------------------


class GitError(NextverError):
    """A git operation failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr

    def __str__(self) -> str:
        msg = super().__str__()
        if self.stderr:
            return f"{msg}\n{self.stderr.strip()}"
        return msg


class RepositoryNotFoundError(GitError):
    """No git repository at or above the given directory."""


class NoHeadCommitError(GitError):
    """The repository has no resolvable HEAD commit."""


class CommitDecodeError(GitError):
    """A commit message is not valid UTF-8."""

    def __init__(self, message: str, sha: str | None = None) -> None:
        super().__init__(message)
        self.sha = sha


class DirtyWorkingTreeError(GitError):
    """The working tree has uncommitted changes."""


# -----------------------------------------------------------------------------
# Releases
# -----------------------------------------------------------------------------


class ReleaseError(NextverError):
    """The release baseline could not be established."""


class NoReleaseFoundError(ReleaseError):
    """History contains no release commit."""


class MalformedReleaseVersionError(ReleaseError):
    """A release commit does not carry a valid semantic version."""
