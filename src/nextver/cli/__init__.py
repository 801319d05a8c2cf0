"""Command line interface for nextver."""

from __future__ import annotations

from nextver.cli.app import app, main

__all__ = ["app", "main"]
