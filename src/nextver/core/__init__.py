"""Core business logic for nextver.

This module contains the fundamental building blocks:
- Version parsing and bumping (SemVer 2.0.0)
- Release commit location
- Commit classification into version bumps
- Next version calculation
"""

from __future__ import annotations

from nextver.core.calculator import VersionCalculation, calculate_next_version
from nextver.core.commits import calculate_bump, classify_message, iter_unreleased_commits
from nextver.core.release import (
    find_latest_release,
    format_release_title,
    is_release_commit,
    parse_release_version,
)
from nextver.core.version import BumpType, Version, parse_version

__all__ = [
    # Version
    "BumpType",
    "Version",
    # Calculator
    "VersionCalculation",
    # Commits
    "calculate_bump",
    "calculate_next_version",
    "classify_message",
    # Release
    "find_latest_release",
    "format_release_title",
    "is_release_commit",
    "iter_unreleased_commits",
    "parse_release_version",
    "parse_version",
]
