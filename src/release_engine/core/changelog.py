"""Changelog generation from parsed commits.

Only release-relevant commits make it into the changelog: breaking changes
of any type, plus ``feat``, ``fix`` and ``perf`` commits. Sections appear in
a fixed order::

    ## [2.4.0] - 2026-10-18

    ### Breaking Changes

    - **api:** drop v1 endpoints

    ### Features

    - **auth:** add login
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime
from enum import Enum
from typing import TYPE_CHECKING

from release_engine.core.commits import Commit, CommitType, format_commit_for_changelog
from release_engine.exceptions import ChangelogError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from release_engine.core.engine import ReleaseDecision


class ChangelogSection(str, Enum):
    """Changelog sections, declared in display order."""

    BREAKING = "Breaking Changes"
    FEATURES = "Features"
    BUG_FIXES = "Bug Fixes"
    PERFORMANCE = "Performance Improvements"

    def __str__(self) -> str:
        return self.value


_SECTION_BY_TYPE: dict[CommitType, ChangelogSection] = {
    CommitType.FEAT: ChangelogSection.FEATURES,
    CommitType.FIX: ChangelogSection.BUG_FIXES,
    CommitType.PERF: ChangelogSection.PERFORMANCE,
}

_SECTION_ORDER: dict[ChangelogSection, int] = {s: i for i, s in enumerate(ChangelogSection)}


@dataclass(frozen=True)
class ChangelogEntry:
    """A commit together with its rendered changelog line."""

    section: ChangelogSection
    commit: Commit
    line: str


def section_for(commit: Commit) -> ChangelogSection | None:
    """Return the section a commit belongs to, or None if it is omitted."""
    if commit.breaking:
        return ChangelogSection.BREAKING
    return _SECTION_BY_TYPE.get(commit.type)


def build_changelog_entries(commits: Iterable[Commit]) -> tuple[ChangelogEntry, ...]:
    """Select changelog-worthy commits and order them by section.

    Within a section, commits keep their input order. Breaking commits are
    listed once, under Breaking Changes.

    Args:
        commits: Parsed commits

    Returns:
        Entries sorted by section display order
    """
    entries: list[ChangelogEntry] = []
    for commit in commits:
        section = section_for(commit)
        if section is None:
            continue
        line = format_commit_for_changelog(
            commit,
            use_breaking_description=section is ChangelogSection.BREAKING,
        )
        entries.append(ChangelogEntry(section=section, commit=commit, line=line))
    # sorted() is stable, so input order survives within a section
    return tuple(sorted(entries, key=lambda e: _SECTION_ORDER[e.section]))


def render_entries(entries: Sequence[ChangelogEntry]) -> str:
    """Render entries as markdown sections, without a version heading."""
    lines: list[str] = []
    current: ChangelogSection | None = None
    for entry in entries:
        if entry.section is not current:
            if current is not None:
                lines.append("")
            lines.append(f"### {entry.section}")
            lines.append("")
            current = entry.section
        lines.append(entry.line)
    return "\n".join(lines)


def render_changelog(decision: ReleaseDecision, release_date: date | None = None) -> str:
    """Render the changelog section for a release decision.

    Args:
        decision: Decision produced by :func:`decide_release`
        release_date: Date shown in the heading (defaults to today, UTC)

    Returns:
        Markdown text, or an empty string when there is no release
    """
    if decision.next_version is None:
        return ""

    release_date = release_date or datetime.now(UTC).date()
    lines = [f"## [{decision.next_version}] - {release_date.isoformat()}", ""]
    body = render_entries(decision.changelog_entries)
    if body:
        lines.append(body)
        lines.append("")
    return "\n".join(lines)


def prepend_changelog(path: Path, section: str, *, title: str = "# Changelog") -> Path:
    """Insert a rendered section at the top of a changelog file.

    The new section goes right below ``title`` when the file starts with it;
    otherwise the title is added. Missing files are created.

    Args:
        path: Changelog file
        section: Rendered section from :func:`render_changelog`
        title: First line of the changelog file

    Returns:
        The path written

    Raises:
        ChangelogError: If the file cannot be read or written
    """
    section = section.strip("\n")
    try:
        existing = path.read_text(encoding="utf-8") if path.exists() else ""
    except OSError as e:
        raise ChangelogError(f"Cannot read {path}: {e}") from e

    rest = existing.lstrip("\n")
    if rest.startswith(title):
        rest = rest[len(title) :].lstrip("\n")

    parts = [title, section]
    if rest:
        parts.append(rest.rstrip("\n"))
    content = "\n\n".join(parts) + "\n"

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ChangelogError(f"Cannot write {path}: {e}") from e
    return path
