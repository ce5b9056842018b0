"""Configuration models for release-engine.

All settings live under ``[tool.release-engine]`` in pyproject.toml and
every field has a default, so an empty section (or none at all) is valid.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CommitsConfig(BaseModel):
    """Commit analysis settings."""

    model_config = ConfigDict(extra="forbid")

    skip_release_patterns: list[str] = Field(
        default_factory=lambda: ["[skip release]", "[release skip]", "[no release]"],
        description="Commits containing any of these markers are ignored",
    )


class ChangelogConfig(BaseModel):
    """Changelog file settings."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    path: Path = Path("CHANGELOG.md")
    title: str = "# Changelog"


class VersionConfig(BaseModel):
    """Version and tag settings."""

    model_config = ConfigDict(extra="forbid")

    tag_prefix: str = "v"

    @field_validator("tag_prefix")
    @classmethod
    def _no_whitespace(cls, value: str) -> str:
        if any(ch.isspace() for ch in value):
            raise ValueError("tag_prefix must not contain whitespace")
        return value


class ReleaseEngineConfig(BaseModel):
    """Root configuration model."""

    model_config = ConfigDict(extra="forbid")

    allow_dirty: bool = False
    commits: CommitsConfig = Field(default_factory=CommitsConfig)
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
    version: VersionConfig = Field(default_factory=VersionConfig)

    @property
    def tag_prefix(self) -> str:
        return self.version.tag_prefix

    @property
    def changelog_path(self) -> Path:
        return self.changelog.path
