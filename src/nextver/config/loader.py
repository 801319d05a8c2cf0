"""Loading configuration from pyproject.toml."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from nextver.config.models import NextverConfig
from nextver.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

TOOL_NAME = "nextver"


def find_pyproject_toml(start: Path | None = None, *, stop: Path | None = None) -> Path:
    """Find pyproject.toml in ``start`` or one of its parents.

    Args:
        start: Directory to start searching from (defaults to cwd)
        stop: Last directory to search; parents of ``stop`` are never read

    Returns:
        Path to the nearest pyproject.toml

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
    """
    current = (start or Path.cwd()).resolve()
    boundary = stop.resolve() if stop is not None else None

    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
        if directory == boundary:
            break

    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Read and parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Config file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_nextver_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the [tool.nextver] table, or an empty dict if absent."""
    return pyproject.get("tool", {}).get(TOOL_NAME, {})


def load_config(path: Path | None = None, *, root: Path | None = None) -> NextverConfig:
    """Load configuration for the project at ``path``.

    pyproject.toml is searched from ``path`` up to ``root``; nothing
    above ``root`` is read. Defaults are used when there is no
    pyproject.toml or it has no [tool.nextver] table.

    Args:
        path: Project directory (defaults to cwd)
        root: Outermost directory to search (defaults to ``path``)

    Returns:
        Validated configuration

    Raises:
        ConfigValidationError: If the configuration is invalid
    """
    start = path or Path.cwd()
    try:
        pyproject_path = find_pyproject_toml(start, stop=root or start)
    except ConfigNotFoundError:
        logger.debug("No pyproject.toml found, using default configuration")
        return NextverConfig()

    raw = extract_nextver_config(load_pyproject_toml(pyproject_path))
    logger.debug("Loaded [tool.%s] from %s: %s", TOOL_NAME, pyproject_path, raw)

    try:
        return NextverConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid [tool.{TOOL_NAME}] in {pyproject_path}:\n{e}") from e
