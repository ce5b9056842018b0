"""Core business logic for release-engine.

This package contains the fundamental building blocks:
- Version parsing and bumping
- Conventional commit parsing and bump calculation
- Changelog rendering
- The release decision entry point
"""

from __future__ import annotations

from release_engine.core.changelog import (
    ChangelogEntry,
    ChangelogSection,
    build_changelog_entries,
    prepend_changelog,
    render_changelog,
)
from release_engine.core.commits import (
    Commit,
    CommitType,
    calculate_bump,
    filter_skip_release_commits,
    format_commit_for_changelog,
    parse_commit,
    parse_commits,
)
from release_engine.core.engine import ReleaseDecision, decide_release
from release_engine.core.version import BumpType, Version, latest_version_tag, max_bump

__all__ = [
    # Version
    "BumpType",
    "Version",
    "latest_version_tag",
    "max_bump",
    # Commits
    "Commit",
    "CommitType",
    "calculate_bump",
    "filter_skip_release_commits",
    "format_commit_for_changelog",
    "parse_commit",
    "parse_commits",
    # Changelog
    "ChangelogEntry",
    "ChangelogSection",
    "build_changelog_entries",
    "prepend_changelog",
    "render_changelog",
    # Engine
    "ReleaseDecision",
    "decide_release",
]
