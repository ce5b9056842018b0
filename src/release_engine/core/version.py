"""Semantic versions and bump types.

Versions are plain ``major.minor.patch`` triples. Release tags carry a
prefix (``v`` by default), e.g. ``v1.4.2``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from release_engine.exceptions import InvalidBumpError, InvalidVersionError

if TYPE_CHECKING:
    from collections.abc import Iterable

_VERSION_RE = re.compile(r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)$")


class BumpType(str, Enum):
    """Version increment categories, ordered by severity.

    ``NONE < PATCH < MINOR < MAJOR``. Comparisons use the severity order,
    not the string values.
    """

    NONE = "none"
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, BumpType):
            return NotImplemented
        return self.severity < other.severity

    def __le__(self, other: object) -> bool:
        if not isinstance(other, BumpType):
            return NotImplemented
        return self.severity <= other.severity

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, BumpType):
            return NotImplemented
        return self.severity > other.severity

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, BumpType):
            return NotImplemented
        return self.severity >= other.severity

    def __str__(self) -> str:
        return self.value


_SEVERITY: dict[BumpType, int] = {
    BumpType.NONE: 0,
    BumpType.PATCH: 1,
    BumpType.MINOR: 2,
    BumpType.MAJOR: 3,
}


def max_bump(bumps: Iterable[BumpType]) -> BumpType:
    """Return the most severe bump in ``bumps`` (``NONE`` when empty).

    >>> max_bump([BumpType.PATCH, BumpType.MINOR])
    <BumpType.MINOR: 'minor'>
    """
    return max(bumps, key=lambda b: b.severity, default=BumpType.NONE)


@dataclass(frozen=True, order=True)
class Version:
    """A semantic version triple.

    Ordering is lexicographic on ``(major, minor, patch)``.
    """

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise InvalidVersionError(
                    f"Version {name} must be a non-negative integer, got {value!r}"
                )

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a ``major.minor.patch`` string.

        Args:
            text: Version string such as ``"1.2.3"``

        Returns:
            Parsed version

        Raises:
            InvalidVersionError: If the string is not a plain semantic version
        """
        match = _VERSION_RE.match(text.strip())
        if match is None:
            raise InvalidVersionError(f"Invalid version: {text!r}")
        return cls(int(match.group(1)), int(match.group(2)), int(match.group(3)))

    @classmethod
    def from_tag(cls, tag: str, prefix: str = "v") -> Version | None:
        """Parse a release tag, returning ``None`` if it does not match.

        Args:
            tag: Tag name such as ``"v1.2.3"``
            prefix: Tag prefix that must precede the version

        Returns:
            Parsed version, or None for tags that are not release tags
        """
        if not tag.startswith(prefix):
            return None
        try:
            return cls.parse(tag[len(prefix) :])
        except InvalidVersionError:
            return None

    def bump(self, bump_type: BumpType) -> Version:
        """Return the next version for ``bump_type``.

        Args:
            bump_type: MAJOR, MINOR or PATCH

        Returns:
            The bumped version

        Raises:
            InvalidBumpError: If ``bump_type`` is NONE
        """
        if bump_type is BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if bump_type is BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        if bump_type is BumpType.PATCH:
            return Version(self.major, self.minor, self.patch + 1)
        raise InvalidBumpError(f"Cannot apply bump {bump_type!s} to version {self}")

    def to_tag(self, prefix: str = "v") -> str:
        return f"{prefix}{self}"

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


# Implicit current version when no release tag exists yet.
INITIAL_VERSION = Version(0, 0, 0)


def latest_version_tag(tags: Iterable[str], prefix: str = "v") -> tuple[str, Version] | None:
    """Pick the highest release tag out of ``tags``.

    Tags that do not match ``<prefix><major>.<minor>.<patch>`` are ignored.

    Args:
        tags: Tag names
        prefix: Release tag prefix

    Returns:
        ``(tag, version)`` for the highest version, or None if no tag matches
    """
    best: tuple[str, Version] | None = None
    for tag in tags:
        version = Version.from_tag(tag, prefix)
        if version is None:
            continue
        if best is None or version > best[1]:
            best = (tag, version)
    return best
