"""Version control access."""

from __future__ import annotations

from release_engine.vcs.git import GitRepository

__all__ = ["GitRepository"]
