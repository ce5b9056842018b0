"""Implementation of the 'changelog' command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from release_engine.cli.commands._common import analyze
from release_engine.core.changelog import render_changelog

if TYPE_CHECKING:
    from rich.console import Console


def run_changelog(path: str | None, console: Console, err_console: Console) -> None:
    """Print the changelog section the next release would add."""
    analysis = analyze(path, err_console)
    if not analysis.decision.is_release:
        err_console.print("[yellow]No releasable changes; no changelog to render.[/]")
        return
    console.out(render_changelog(analysis.decision), highlight=False)
