"""Conventional commit parsing and bump calculation.

Commit subjects follow ``type(scope): subject`` or ``type: subject``,
optionally followed by a blank line and a body. A line starting with
``BREAKING CHANGE:`` (or ``BREAKING-CHANGE:``) anywhere in the message, or a
``!`` right before the colon, marks a breaking change.

Commit history is uncontrolled input, so parsing never fails: messages that
do not follow the convention are classified as ``UNRECOGNIZED``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from release_engine.core.version import BumpType, max_bump

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from release_engine.config.models import CommitsConfig


class CommitType(str, Enum):
    """Recognized commit types, plus a fallback for everything else."""

    FEAT = "feat"
    FIX = "fix"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    PERF = "perf"
    TEST = "test"
    CHORE = "chore"
    REVERT = "revert"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def from_token(cls, token: str) -> CommitType:
        """Map a subject-line token to a type (case-sensitive)."""
        try:
            return cls(token)
        except ValueError:
            return cls.UNRECOGNIZED

    def __str__(self) -> str:
        return self.value


# Types that trigger a release on their own (breaking changes aside).
MINOR_TYPES: frozenset[CommitType] = frozenset({CommitType.FEAT})
PATCH_TYPES: frozenset[CommitType] = frozenset({CommitType.FIX, CommitType.PERF})

BREAKING_MARKER = "BREAKING CHANGE:"

SUBJECT_PATTERN = re.compile(
    r"^(?P<type>[^\s():!]+)"
    r"(?:\((?P<scope>[^()]*)\))?"
    r"(?P<bang>!)?"
    r":[ \t]*(?P<subject>\S.*)$"
)

BREAKING_PATTERN = re.compile(r"^BREAKING[ -]CHANGE:[ \t]*(?P<description>.*)$", re.MULTILINE)


@dataclass(frozen=True)
class Commit:
    """A parsed commit message.

    Attributes:
        type: Commit type, ``UNRECOGNIZED`` when the subject is not conventional
        scope: Optional scope from ``type(scope): ...``
        subject: Subject text; the whole message for unrecognized commits
        breaking: Whether the commit carries a breaking-change marker
        raw: The original message
        body: Text after the subject line
        breaking_description: Text following the breaking-change marker
    """

    type: CommitType
    scope: str | None
    subject: str
    breaking: bool
    raw: str
    body: str = ""
    breaking_description: str = ""

    @property
    def is_recognized(self) -> bool:
        return self.type is not CommitType.UNRECOGNIZED

    @property
    def bump(self) -> BumpType:
        """The bump this commit alone would trigger."""
        if self.breaking:
            return BumpType.MAJOR
        if self.type in MINOR_TYPES:
            return BumpType.MINOR
        if self.type in PATCH_TYPES:
            return BumpType.PATCH
        return BumpType.NONE


def parse_commit(message: str) -> Commit:
    """Parse a raw commit message.

    Args:
        message: Full commit message (subject, optional blank line and body)

    Returns:
        Parsed commit; never raises for malformed input
    """
    text = message.strip()
    first_line, _, rest = text.partition("\n")
    body = rest.strip()

    breaking_match = BREAKING_PATTERN.search(text)
    breaking = breaking_match is not None
    breaking_description = breaking_match.group("description").strip() if breaking_match else ""

    match = SUBJECT_PATTERN.match(first_line.strip())
    commit_type = CommitType.from_token(match.group("type")) if match else CommitType.UNRECOGNIZED

    if match is None or commit_type is CommitType.UNRECOGNIZED:
        return Commit(
            type=CommitType.UNRECOGNIZED,
            scope=None,
            subject=text,
            breaking=breaking,
            raw=message,
            body=body,
            breaking_description=breaking_description,
        )

    subject = match.group("subject").strip()
    scope = (match.group("scope") or "").strip()
    if match.group("bang"):
        breaking = True
        breaking_description = breaking_description or subject

    return Commit(
        type=commit_type,
        scope=scope or None,
        subject=subject,
        breaking=breaking,
        raw=message,
        body=body,
        breaking_description=breaking_description,
    )


def filter_skip_release_commits(messages: Iterable[str], patterns: Sequence[str]) -> list[str]:
    """Drop messages that contain a skip-release marker.

    Markers are matched case-insensitively anywhere in the message.

    Args:
        messages: Raw commit messages
        patterns: Markers such as ``"[skip release]"``

    Returns:
        Messages without any marker, in their original order
    """
    lowered = [p.lower() for p in patterns if p]
    if not lowered:
        return list(messages)
    return [m for m in messages if not any(p in m.lower() for p in lowered)]


def parse_commits(messages: Iterable[str], config: CommitsConfig | None = None) -> list[Commit]:
    """Parse a batch of messages, dropping those marked to skip release.

    Args:
        messages: Raw commit messages
        config: Commit settings; skip markers are not applied when omitted

    Returns:
        Parsed commits in input order
    """
    if config is not None:
        messages = filter_skip_release_commits(messages, config.skip_release_patterns)
    return [parse_commit(m) for m in messages]


def calculate_bump(commits: Iterable[Commit]) -> BumpType:
    """Reduce commits to the most severe bump they trigger.

    The result does not depend on commit order.

    Args:
        commits: Parsed commits

    Returns:
        MAJOR if any commit is breaking, else MINOR for any ``feat``, else
        PATCH for any ``fix``/``perf``, else NONE
    """
    return max_bump(_bumps_until_major(commits))


def _bumps_until_major(commits: Iterable[Commit]) -> Iterator[BumpType]:
    for commit in commits:
        yield commit.bump
        if commit.bump is BumpType.MAJOR:
            return


def format_commit_for_changelog(commit: Commit, *, use_breaking_description: bool = False) -> str:
    """Format a commit as a markdown bullet.

    Args:
        commit: Parsed commit
        use_breaking_description: Prefer the breaking-change text over the subject

    Returns:
        ``- **scope:** subject`` (the scope prefix is omitted when absent)
    """
    text = commit.subject
    if use_breaking_description and commit.breaking_description:
        text = commit.breaking_description
    # Unrecognized commits carry the full message as subject.
    text = text.splitlines()[0] if text else text
    scope = f"**{commit.scope}:** " if commit.scope else ""
    return f"- {scope}{text}"
