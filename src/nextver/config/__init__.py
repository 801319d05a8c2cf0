"""Configuration management for nextver."""

from __future__ import annotations

from nextver.config.loader import load_config
from nextver.config.models import CommitsConfig, NextverConfig

__all__ = [
    "CommitsConfig",
    "NextverConfig",
    "load_config",
]
