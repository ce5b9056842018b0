"""Configuration management for release-engine."""

from __future__ import annotations

from release_engine.config.loader import load_config
from release_engine.config.models import (
    ChangelogConfig,
    CommitsConfig,
    ReleaseEngineConfig,
    VersionConfig,
)

__all__ = [
    "ChangelogConfig",
    "CommitsConfig",
    "ReleaseEngineConfig",
    "VersionConfig",
    "load_config",
]
