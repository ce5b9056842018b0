"""Exception hierarchy for release-engine.

Every error raised by release-engine derives from :class:`ReleaseEngineError`
so callers can catch the whole family at once.
"""

from __future__ import annotations


class ReleaseEngineError(Exception):
    """Base class for all release-engine errors."""


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(ReleaseEngineError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """No pyproject.toml was found."""


class ConfigValidationError(ConfigError):
    """Configuration values failed validation."""


# =============================================================================
# Versions
# =============================================================================


class VersionError(ReleaseEngineError):
    """Base class for version handling errors."""


class InvalidVersionError(VersionError):
    """A version string or component is not a valid semantic version."""


class InvalidBumpError(VersionError):
    """A bump was requested that cannot be applied.

    Raised when ``BumpType.NONE`` reaches :meth:`Version.bump`. Callers
    must check for "no release" before bumping.
    """


# =============================================================================
# Git
# =============================================================================


class GitError(ReleaseEngineError):
    """A git command failed."""

    def __init__(self, message: str, *, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr

    def __str__(self) -> str:
        base = super().__str__()
        if self.stderr:
            return f"{base}: {self.stderr.strip()}"
        return base


class NotAGitRepositoryError(GitError):
    """The given path is not inside a git work tree."""


# =============================================================================
# Changelog
# =============================================================================


class ChangelogError(ReleaseEngineError):
    """The changelog file could not be read or written."""
