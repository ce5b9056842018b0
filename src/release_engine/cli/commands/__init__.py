"""CLI command implementations."""

from __future__ import annotations

from release_engine.cli.commands.changelog import run_changelog
from release_engine.cli.commands.next import run_next
from release_engine.cli.commands.release import run_release

__all__ = ["run_changelog", "run_next", "run_release"]
