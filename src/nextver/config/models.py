"""Pydantic models for the [tool.nextver] configuration table."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_RELEASE_PREFIX = "release:"


class CommitsConfig(BaseModel):
    """How commit messages map to version bumps.

    Prefixes are matched literally against the start of every message
    line (title and body). Major prefixes are tested first, so
    ``feat!`` wins over ``feat`` on the same line.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    major_prefixes: list[str] = Field(default_factory=lambda: ["feat!"])
    minor_prefixes: list[str] = Field(default_factory=lambda: ["feat"])
    patch_prefixes: list[str] = Field(default_factory=lambda: ["fix"])
    skip_merge_commits: bool = False
    include_release_commit: bool = False

    @field_validator("major_prefixes", "minor_prefixes", "patch_prefixes")
    @classmethod
    def _no_empty_prefixes(cls, value: list[str]) -> list[str]:
        # An empty prefix would match every line
        if any(not prefix for prefix in value):
            raise ValueError("prefixes must be non-empty strings")
        return value


class NextverConfig(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    release_prefix: str = DEFAULT_RELEASE_PREFIX
    allow_dirty: bool = False
    commits: CommitsConfig = Field(default_factory=CommitsConfig)

    @field_validator("release_prefix")
    @classmethod
    def _non_empty_release_prefix(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("release_prefix must not be empty")
        return value
