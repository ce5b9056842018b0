"""Command-line interface for release-engine."""

from __future__ import annotations

from release_engine.cli.app import app, main

__all__ = ["app", "main"]
