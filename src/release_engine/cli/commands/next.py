"""Implementation of the 'next' command.

Prints the next version, or reports that there is nothing to release.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from release_engine.cli.commands._common import analyze

if TYPE_CHECKING:
    from rich.console import Console


def run_next(path: str | None, as_json: bool, console: Console, err_console: Console) -> None:
    """Run the next command.

    Args:
        path: Optional path to the project directory
        as_json: Emit a JSON object instead of human-readable text
        console: Console for standard output
        err_console: Console for error output
    """
    analysis = analyze(path, err_console)
    decision = analysis.decision
    prefix = analysis.config.tag_prefix

    if as_json:
        payload = {
            "release": decision.is_release,
            "bump": str(decision.bump),
            "current_version": str(analysis.current_version) if analysis.current_version else None,
            "next_version": str(decision.next_version) if decision.next_version else None,
            "tag": decision.tag(prefix),
        }
        # Plain print: rich would wrap or highlight the JSON.
        console.out(json.dumps(payload), highlight=False)
        return

    current = str(analysis.current_version) if analysis.current_version else "none"
    if not decision.is_release:
        console.print(f"[yellow]No release.[/] Current version: [cyan]{current}[/]")
        return

    console.print(
        f"[cyan]{current}[/] -> [green]{decision.next_version}[/] "
        f"([bold]{decision.bump}[/] bump, tag [green]{decision.tag(prefix)}[/])"
    )
