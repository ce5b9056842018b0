"""Shared pytest fixtures."""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture(autouse=True)
def _reset_logging_handlers():
    """Drop handlers bound to streams captured during a test."""
    yield
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", "-C", str(repo), *args],
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Path:
    """Create an empty git repository with a local identity."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "config", "user.name", "Test")
    _git(repo, "config", "user.email", "test@test.com")
    _git(repo, "config", "commit.gpgsign", "false")
    _git(repo, "config", "tag.gpgsign", "false")
    return repo


@pytest.fixture
def commit(temp_git_repo: Path) -> Callable[[str], None]:
    """Return a helper that creates an empty commit with a message."""

    def _commit(message: str) -> None:
        _git(temp_git_repo, "commit", "-q", "--allow-empty", "-m", message)

    return _commit


@pytest.fixture
def tag(temp_git_repo: Path) -> Callable[[str], None]:
    """Return a helper that creates a lightweight tag at HEAD."""

    def _tag(name: str) -> None:
        _git(temp_git_repo, "tag", name)

    return _tag


@pytest.fixture
def temp_git_repo_with_pyproject(temp_git_repo: Path) -> Path:
    """Git repository with a committed pyproject.toml carrying tool config."""
    (temp_git_repo / "pyproject.toml").write_text(
        """\
[project]
name = "test-project"
version = "1.0.0"

[tool.release-engine]
allow_dirty = false

[tool.release-engine.version]
tag_prefix = "v"

[tool.release-engine.changelog]
path = "CHANGELOG.md"
"""
    )
    _git(temp_git_repo, "add", "pyproject.toml")
    _git(temp_git_repo, "commit", "-q", "-m", "chore: initial commit")
    return temp_git_repo


@pytest.fixture
def git_output() -> Callable[..., str]:
    """Expose the git runner to tests for assertions."""
    return _git


@pytest.fixture
def sample_messages() -> list[str]:
    """A mixed batch of commit messages, newest first."""
    return [
        "feat(auth): add user authentication",
        "fix(core): resolve memory leak",
        "docs: update README",
        "chore: update dependencies",
        "feat(api)!: change response format\n\nBREAKING CHANGE: v1 responses are gone",
        "Merge branch 'main' into feature",
    ]
