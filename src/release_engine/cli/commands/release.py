"""Implementation of the 'release' command.

The release command prepends the changelog, commits it and creates the
release tag. It runs as a dry run unless ``--execute`` is given.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.panel import Panel

from release_engine.cli.commands._common import analyze
from release_engine.core.changelog import prepend_changelog, render_changelog
from release_engine.exceptions import ReleaseEngineError

if TYPE_CHECKING:
    from rich.console import Console


def run_release(
    path: str | None,
    execute: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the release command.

    Args:
        path: Optional path to the project directory
        execute: Whether to actually write the changelog and create the tag
        console: Console for standard output
        err_console: Console for error output
    """
    analysis = analyze(path, err_console)
    config = analysis.config
    repo = analysis.repo
    decision = analysis.decision

    if not decision.is_release:
        console.print(
            "[yellow]No releasable changes found (only non-release commit types).[/]\n"
            "[dim]Nothing to tag.[/]"
        )
        return

    if execute and not config.allow_dirty and repo.is_dirty():
        err_console.print(
            "[red]Error:[/] Repository has uncommitted changes.\n"
            "Commit or stash them, or use [cyan]allow_dirty = true[/] in config."
        )
        raise SystemExit(1)

    tag = decision.tag(config.tag_prefix)
    if repo.tag_exists(tag):
        err_console.print(
            f"[red]Error:[/] Tag [cyan]{tag}[/] already exists but is not reachable from HEAD.\n"
            "Merge the branch that carries it, or delete the stale tag."
        )
        raise SystemExit(1)

    mode_str = "[green]EXECUTING[/]" if execute else "[yellow]DRY-RUN[/]"
    if decision.is_first_release:
        console.print(f"\n{mode_str} - First release! Tagging [green]{tag}[/]\n")
    else:
        console.print(
            f"\n{mode_str} - Releasing [cyan]{analysis.current_version}[/] -> "
            f"[green]{decision.next_version}[/]\n"
        )

    changelog_path = repo.path / config.changelog_path

    if not execute:
        changes = []
        if config.changelog.enabled:
            changes.append(f"  • Prepend release notes to [cyan]{config.changelog_path}[/]")
        changes.append(f"  • Create tag [cyan]{tag}[/]")
        console.print(
            Panel(
                "[bold]Would make the following changes:[/]\n\n" + "\n".join(changes),
                title="[yellow]Dry Run Preview[/]",
                border_style="yellow",
            )
        )
        console.print("\n[dim]Run with [cyan]--execute[/] to apply these changes.[/]")
        return

    try:
        if config.changelog.enabled:
            section = render_changelog(decision)
            prepend_changelog(changelog_path, section, title=config.changelog.title)
            repo.commit_files([changelog_path], f"chore(release): {tag}")
            console.print(f"  [green]✓[/] Updated {config.changelog_path}")
        repo.create_tag(tag, f"Release {tag}")
        console.print(f"  [green]✓[/] Created tag {tag}")
    except ReleaseEngineError as e:
        err_console.print(f"[red]Error releasing {tag}:[/] {e}")
        raise SystemExit(1) from e

    console.print(
        Panel(
            f"[green]Released {decision.next_version}![/]\n\n"
            "Next steps:\n"
            "  1. Push: [cyan]git push --follow-tags[/]",
            title="[green]Release Complete[/]",
            border_style="green",
        )
    )
