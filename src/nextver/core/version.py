"""Semantic version parsing and bumping.

Versions follow SemVer 2.0.0: ``MAJOR.MINOR.PATCH`` with optional
``-prerelease`` and ``+build`` suffixes. Parsing, precedence and bumping
are delegated to :mod:`semver`. Bumping always yields a plain release
version; pre-release and build parts are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from functools import total_ordering

import semver

from nextver.exceptions import VersionParseError


class BumpType(IntEnum):
    """Magnitude of a version change, ordered by strength."""

    NONE = 0
    PATCH = 1
    MINOR = 2
    MAJOR = 3

    def __str__(self) -> str:
        return self.name.lower()


@total_ordering
@dataclass(frozen=True)
class Version:
    """A semantic version.

    Attributes:
        major: Major version number
        minor: Minor version number
        patch: Patch version number
        prerelease: Dot-separated pre-release identifiers (e.g., "rc.1")
        build: Build metadata; ignored for ordering and equality
    """

    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = None

    def __post_init__(self) -> None:
        # Validates components (non-negative integers)
        self._semver()

    @classmethod
    def parse(cls, version_str: str) -> Version:
        """Parse a semantic version string.

        Args:
            version_str: Version string (e.g., "1.2.3" or "2.0.0-rc.1+build.5")

        Returns:
            Parsed Version

        Raises:
            VersionParseError: If the string is not a valid semantic version
        """
        # semver's pattern uses \d, which also matches non-ASCII digits
        if not version_str.isascii():
            raise VersionParseError(f"Invalid semantic version: {version_str!r}")

        try:
            parsed = semver.Version.parse(version_str)
        except (ValueError, TypeError) as e:
            raise VersionParseError(f"Invalid semantic version: {version_str!r}") from e

        return cls._from_semver(parsed)

    @classmethod
    def _from_semver(cls, version: semver.Version) -> Version:
        return cls(
            major=version.major,
            minor=version.minor,
            patch=version.patch,
            prerelease=version.prerelease,
            build=version.build,
        )

    def _semver(self) -> semver.Version:
        try:
            return semver.Version(self.major, self.minor, self.patch, self.prerelease, self.build)
        except (ValueError, TypeError) as e:
            raise VersionParseError(
                f"Invalid version components: {self.major}.{self.minor}.{self.patch}"
            ) from e

    def bump_patch(self) -> Version:
        """Increment the patch number."""
        return self._from_semver(self._release_semver().bump_patch())

    def bump_minor(self) -> Version:
        """Increment the minor number and reset patch to 0."""
        return self._from_semver(self._release_semver().bump_minor())

    def bump_major(self) -> Version:
        """Increment the major number and reset minor and patch to 0."""
        return self._from_semver(self._release_semver().bump_major())

    def _release_semver(self) -> semver.Version:
        # Pre-release and build parts never survive a bump
        return semver.Version(self.major, self.minor, self.patch)

    def bump(self, bump_type: BumpType) -> Version:
        """Apply a single bump of the given type.

        ``BumpType.NONE`` returns this version unchanged.
        """
        if bump_type == BumpType.MAJOR:
            return self.bump_major()
        if bump_type == BumpType.MINOR:
            return self.bump_minor()
        if bump_type == BumpType.PATCH:
            return self.bump_patch()
        return self

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._semver().compare(other._semver()) == 0

    def __hash__(self) -> int:
        return hash((self.major, self.minor, self.patch, self.prerelease))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._semver().compare(other._semver()) < 0

    def __str__(self) -> str:
        return str(self._semver())


def parse_version(version_str: str) -> Version:
    """Parse a version string, ignoring surrounding whitespace."""
    return Version.parse(version_str.strip())
