"""Git repository access via the git CLI.

Only the handful of operations release-engine needs: reading release tags,
reading commit messages since a tag, committing the changelog and creating
the release tag. Failures are reported as :class:`GitError` and are never
retried here.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

from release_engine.core.version import latest_version_tag
from release_engine.exceptions import GitError, NotAGitRepositoryError
from release_engine.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from release_engine.core.version import Version

log = get_logger(__name__)

# NUL separates messages in `git log` output; it cannot occur inside a message.
_RECORD_SEPARATOR = "\x00"
_LOG_FORMAT = "--format=%B%x00"


class GitRepository:
    """A git work tree on disk."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path else Path.cwd()
        try:
            top = self._run("rev-parse", "--show-toplevel")
        except GitError as e:
            raise NotAGitRepositoryError(f"Not a git repository: {self.path}") from e
        self.path = Path(top)

    def _run(self, *args: str) -> str:
        """Run a git command in the repository and return its stdout."""
        cmd = ["git", "-C", str(self.path), *args]
        log.debug("running git", args=list(args))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"git {args[0]} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e
        return result.stdout.strip()

    def has_commits(self) -> bool:
        try:
            self._run("rev-parse", "--verify", "--quiet", "HEAD")
        except GitError:
            return False
        return True

    def is_dirty(self) -> bool:
        """Return True if the work tree has uncommitted changes."""
        return bool(self._run("status", "--porcelain"))

    def get_tags(self, prefix: str = "v") -> list[str]:
        """List tags starting with ``prefix`` that are reachable from HEAD."""
        if not self.has_commits():
            return []
        output = self._run("tag", "--merged", "HEAD", "--list", f"{prefix}*")
        return [line.strip() for line in output.splitlines() if line.strip()]

    def get_latest_tag(self, prefix: str = "v") -> tuple[str, Version] | None:
        """Return the highest ``<prefix>X.Y.Z`` tag reachable from HEAD.

        Args:
            prefix: Release tag prefix

        Returns:
            ``(tag, version)``, or None if the repository has no release tag
        """
        return latest_version_tag(self.get_tags(prefix), prefix)

    def get_commit_messages(self, since_tag: str | None = None) -> list[str]:
        """Return full commit messages after ``since_tag``, newest first.

        Args:
            since_tag: Tag of the last release; None reads the whole history

        Returns:
            Commit messages (subject and body)
        """
        if not self.has_commits():
            return []
        revision = f"{since_tag}..HEAD" if since_tag else "HEAD"
        output = self._run("log", _LOG_FORMAT, revision)
        messages = [m.strip() for m in output.split(_RECORD_SEPARATOR)]
        return [m for m in messages if m]

    def commit_files(self, paths: Sequence[Path], message: str) -> None:
        """Stage ``paths`` and commit them with ``message``."""
        self._run("add", "--", *(str(p) for p in paths))
        self._run("commit", "-m", message)

    def tag_exists(self, name: str) -> bool:
        """Return True if a tag called ``name`` exists anywhere in the repository."""
        try:
            self._run("rev-parse", "--quiet", "--verify", f"refs/tags/{name}")
        except GitError:
            return False
        return True

    def create_tag(self, name: str, message: str | None = None) -> None:
        """Create an annotated tag at HEAD.

        Raises:
            GitError: If the tag already exists or git fails
        """
        self._run("tag", "-a", name, "-m", message or name)
        log.info("created tag", tag=name)
