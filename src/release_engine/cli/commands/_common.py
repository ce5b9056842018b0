"""Shared setup for CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from release_engine.config import load_config
from release_engine.core.engine import decide_release
from release_engine.exceptions import ReleaseEngineError
from release_engine.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

    from release_engine.config.models import ReleaseEngineConfig
    from release_engine.core.engine import ReleaseDecision
    from release_engine.core.version import Version


@dataclass(frozen=True)
class Analysis:
    """Everything a command needs after reading the repository."""

    config: ReleaseEngineConfig
    repo: GitRepository
    latest_tag: str | None
    current_version: Version | None
    decision: ReleaseDecision


def analyze(path: str | None, err_console: Console) -> Analysis:
    """Load config, read tags and commits, and decide the release.

    Errors are printed to ``err_console`` and end the process with status 1.
    """
    project_path = Path(path) if path else Path.cwd()

    try:
        config = load_config(project_path)
    except ReleaseEngineError as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e

    try:
        repo = GitRepository(project_path)
        latest = repo.get_latest_tag(config.tag_prefix)
        latest_tag = latest[0] if latest else None
        messages = repo.get_commit_messages(latest_tag)
    except ReleaseEngineError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1) from e

    current_version = latest[1] if latest else None
    decision = decide_release(messages, current_version, config.commits)
    return Analysis(
        config=config,
        repo=repo,
        latest_tag=latest_tag,
        current_version=current_version,
        decision=decision,
    )
