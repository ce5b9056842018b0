"""Release decisions.

:func:`decide_release` is the single entry point: given the raw commit
messages since the last release and the last released version, it returns
a :class:`ReleaseDecision`. It performs no I/O; reading the git log and
publishing tags belong to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from release_engine.core.changelog import ChangelogEntry, build_changelog_entries
from release_engine.core.commits import calculate_bump, parse_commits
from release_engine.core.version import INITIAL_VERSION, BumpType, Version
from release_engine.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from release_engine.config.models import CommitsConfig
    from release_engine.core.commits import Commit

log = get_logger(__name__)


@dataclass(frozen=True)
class ReleaseDecision:
    """Outcome of analysing the commits since the last release.

    Attributes:
        bump: Severity of the release, NONE for "no release"
        next_version: Version to release; None exactly when ``bump`` is NONE
        changelog_entries: Changelog lines ordered by section
        previous_version: Last released version, None before the first release
        commits: All parsed commits that were analysed
    """

    bump: BumpType
    next_version: Version | None
    changelog_entries: tuple[ChangelogEntry, ...] = ()
    previous_version: Version | None = None
    commits: tuple[Commit, ...] = field(default=(), repr=False)

    def __post_init__(self) -> None:
        if (self.bump is BumpType.NONE) != (self.next_version is None):
            raise ValueError("next_version must be set exactly when bump is not NONE")

    @property
    def is_release(self) -> bool:
        return self.bump is not BumpType.NONE

    @property
    def is_first_release(self) -> bool:
        return self.is_release and self.previous_version is None

    def tag(self, prefix: str = "v") -> str | None:
        """Tag name for the next version, or None when there is no release."""
        if self.next_version is None:
            return None
        return self.next_version.to_tag(prefix)


def decide_release(
    messages: Iterable[str],
    last_version: Version | None,
    config: CommitsConfig | None = None,
) -> ReleaseDecision:
    """Decide the next release from commit messages.

    Before the first release the current version is taken to be ``0.0.0``,
    so routine ``feat``/``fix`` commits lead to ``0.1.0``/``0.0.1`` and only
    a breaking change produces ``1.0.0``.

    Args:
        messages: Raw commit messages since the last release, in any order
        last_version: Last released version, or None if nothing was released
        config: Commit settings (skip-release markers)

    Returns:
        The release decision
    """
    commits = tuple(parse_commits(messages, config))
    bump = calculate_bump(commits)

    if bump is BumpType.NONE:
        log.debug("no releasable changes", commits=len(commits))
        return ReleaseDecision(
            bump=bump,
            next_version=None,
            previous_version=last_version,
            commits=commits,
        )

    next_version = (last_version or INITIAL_VERSION).bump(bump)
    entries = build_changelog_entries(commits)
    log.debug(
        "release decided",
        bump=str(bump),
        previous=str(last_version) if last_version else None,
        next=str(next_version),
        commits=len(commits),
        entries=len(entries),
    )
    return ReleaseDecision(
        bump=bump,
        next_version=next_version,
        changelog_entries=entries,
        previous_version=last_version,
        commits=commits,
    )
