"""Typer application wiring for the ``release-engine`` command."""

from __future__ import annotations

import typer
from rich.console import Console

from release_engine import __version__
from release_engine.cli.commands import run_changelog, run_next, run_release
from release_engine.logging import configure_logging

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Decide the next release from conventional commits.",
)

console = Console()
err_console = Console(stderr=True)

_PATH_HELP = "Project directory (defaults to cwd)."


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors."),
    json_log: bool = typer.Option(False, "--json-log", help="Emit logs as JSON lines."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)
    configure_logging(verbose=verbose, quiet=quiet, json_log=json_log)


@app.command("next")
def next_cmd(
    path: str | None = typer.Option(None, "--path", "-p", help=_PATH_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print the decision as JSON."),
) -> None:
    """Show the next version, or that there is nothing to release."""
    run_next(path, as_json, console, err_console)


@app.command("changelog")
def changelog_cmd(
    path: str | None = typer.Option(None, "--path", "-p", help=_PATH_HELP),
) -> None:
    """Print the changelog section for the next release."""
    run_changelog(path, console, err_console)


@app.command("release")
def release_cmd(
    path: str | None = typer.Option(None, "--path", "-p", help=_PATH_HELP),
    execute: bool = typer.Option(False, "--execute", help="Apply changes (default is a dry run)."),
) -> None:
    """Prepend the changelog, commit it and create the release tag."""
    run_release(path, execute, console, err_console)


def main() -> None:
    app()
