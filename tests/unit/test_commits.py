"""Tests for conventional commit parsing and bump calculation."""

from __future__ import annotations

import itertools

import pytest

from release_engine.config.models import CommitsConfig
from release_engine.core.commits import (
    Commit,
    CommitType,
    calculate_bump,
    filter_skip_release_commits,
    format_commit_for_changelog,
    parse_commit,
    parse_commits,
)
from release_engine.core.version import BumpType


class TestParseCommit:
    """Tests for parse_commit()."""

    def test_parse_simple_feat(self):
        """Parse a simple feat commit."""
        commit = parse_commit("feat: add new feature")

        assert commit.type is CommitType.FEAT
        assert commit.scope is None
        assert commit.subject == "add new feature"
        assert not commit.breaking
        assert commit.raw == "feat: add new feature"

    def test_parse_with_scope(self):
        """Parse commit with scope."""
        commit = parse_commit("fix(api): handle null response")

        assert commit.type is CommitType.FIX
        assert commit.scope == "api"
        assert commit.subject == "handle null response"

    def test_parse_all_known_types(self):
        """Every known type token is recognized."""
        for token in ("feat", "fix", "docs", "style", "refactor", "perf", "test", "chore", "revert"):
            commit = parse_commit(f"{token}: something")
            assert commit.type.value == token
            assert commit.is_recognized

    def test_parse_breaking_in_body(self):
        """A BREAKING CHANGE line in the body marks the commit breaking."""
        commit = parse_commit("feat: new feature\n\nBREAKING CHANGE: old API removed")

        assert commit.breaking
        assert commit.breaking_description == "old API removed"
        assert commit.body == "BREAKING CHANGE: old API removed"

    def test_parse_breaking_hyphen_synonym(self):
        """BREAKING-CHANGE is accepted as a marker too."""
        commit = parse_commit("fix: tweak\n\nBREAKING-CHANGE: config renamed")

        assert commit.breaking

    def test_breaking_marker_is_case_sensitive(self):
        """A lowercase marker does not count."""
        commit = parse_commit("fix: tweak\n\nbreaking change: nope")

        assert not commit.breaking

    def test_breaking_marker_must_start_the_line(self):
        """The marker only counts at the start of a line."""
        commit = parse_commit("fix: tweak\n\nsee BREAKING CHANGE: notes")

        assert not commit.breaking

    def test_parse_breaking_with_exclamation(self):
        """Parse breaking change with ! indicator."""
        commit = parse_commit("feat(core)!: change config format")

        assert commit.breaking
        assert commit.type is CommitType.FEAT
        assert commit.scope == "core"
        assert commit.breaking_description == "change config format"

    def test_breaking_marker_on_non_release_type(self):
        """The marker dominates regardless of the declared type."""
        commit = parse_commit("docs: rewrite guide\n\nBREAKING CHANGE: removed old pages")

        assert commit.type is CommitType.DOCS
        assert commit.breaking
        assert commit.bump is BumpType.MAJOR

    def test_parse_non_conventional(self):
        """Parse non-conventional commit."""
        commit = parse_commit("Updated the readme file")

        assert not commit.is_recognized
        assert commit.type is CommitType.UNRECOGNIZED
        assert commit.subject == "Updated the readme file"
        assert commit.bump is BumpType.NONE

    def test_unknown_type_is_unrecognized(self):
        """Types outside the fixed set keep the whole message as subject."""
        commit = parse_commit("build(deps): bump x\n\nmore details")

        assert commit.type is CommitType.UNRECOGNIZED
        assert commit.scope is None
        assert commit.subject == "build(deps): bump x\n\nmore details"

    def test_type_match_is_case_sensitive(self):
        """Uppercase types are not recognized."""
        commit = parse_commit("FEAT: uppercase type")

        assert commit.type is CommitType.UNRECOGNIZED
        assert commit.bump is BumpType.NONE

    def test_marker_as_whole_message(self):
        """A message that is only a marker line is breaking but unrecognized."""
        commit = parse_commit("BREAKING CHANGE: drop v1 API")

        assert commit.type is CommitType.UNRECOGNIZED
        assert commit.breaking
        assert commit.breaking_description == "drop v1 API"

    @pytest.mark.parametrize(
        "message",
        ["", "   ", "feat:", "feat:   ", "(scope): x", ":", "feat(: broken", "\n\n\n"],
    )
    def test_malformed_input_never_raises(self, message: str):
        """Malformed messages degrade to unrecognized."""
        commit = parse_commit(message)

        assert commit.type is CommitType.UNRECOGNIZED
        assert commit.raw == message

    def test_empty_scope_is_none(self):
        """An empty scope is treated as absent."""
        commit = parse_commit("fix(): handle it")

        assert commit.type is CommitType.FIX
        assert commit.scope is None

    def test_commit_is_immutable(self):
        """Parsed commits cannot be modified."""
        commit = parse_commit("feat: x")

        with pytest.raises(AttributeError):
            commit.subject = "y"  # type: ignore[misc]


class TestParseCommits:
    """Tests for parse_commits()."""

    def test_parse_multiple_commits(self, sample_messages: list[str]):
        """Parse multiple commits."""
        parsed = parse_commits(sample_messages)

        assert len(parsed) == len(sample_messages)
        assert all(isinstance(c, Commit) for c in parsed)

    def test_config_applies_skip_markers(self):
        """Skip markers from config drop commits before parsing."""
        messages = ["feat: add feature [skip release]", "fix: bug fix"]
        parsed = parse_commits(messages, CommitsConfig())

        assert [c.type for c in parsed] == [CommitType.FIX]


class TestCalculateBump:
    """Tests for calculate_bump()."""

    def test_empty_commits_returns_none(self):
        """Empty commit list returns NONE bump."""
        assert calculate_bump([]) is BumpType.NONE

    def test_feat_returns_minor(self):
        """feat commit triggers MINOR bump."""
        assert calculate_bump([parse_commit("feat: add x")]) is BumpType.MINOR

    @pytest.mark.parametrize("message", ["fix: repair x", "perf: speed up x"])
    def test_fix_and_perf_return_patch(self, message: str):
        """fix and perf commits trigger PATCH bump."""
        assert calculate_bump([parse_commit(message)]) is BumpType.PATCH

    def test_breaking_takes_precedence(self):
        """Breaking change takes precedence over other types."""
        commits = parse_commits(
            ["feat: a", "fix: b", "chore: c\n\nBREAKING CHANGE: d", "perf: e"]
        )
        assert calculate_bump(commits) is BumpType.MAJOR

    def test_feat_takes_precedence_over_fix(self):
        """feat takes precedence over fix."""
        commits = parse_commits(["fix: a", "feat: b", "perf: c"])
        assert calculate_bump(commits) is BumpType.MINOR

    @pytest.mark.parametrize(
        "message",
        [
            "docs: a",
            "style: a",
            "refactor: a",
            "test: a",
            "chore: a",
            "revert: feat: a",
            "random message",
        ],
    )
    def test_non_release_types_return_none(self, message: str):
        """Only non-release types never trigger a bump."""
        assert calculate_bump([parse_commit(message)]) is BumpType.NONE

    def test_order_does_not_matter(self):
        """Every permutation of a commit list gives the same bump."""
        messages = ["docs: a", "fix: b", "feat: c", "nonsense", "perf: d"]
        results = {
            calculate_bump(parse_commits(list(p))) for p in itertools.permutations(messages)
        }
        assert results == {BumpType.MINOR}

    def test_order_does_not_matter_with_breaking(self):
        """A breaking commit wins wherever it appears."""
        messages = ["fix: a", "feat!: b", "chore: c"]
        results = {
            calculate_bump(parse_commits(list(p))) for p in itertools.permutations(messages)
        }
        assert results == {BumpType.MAJOR}

    def test_stops_at_first_breaking_commit(self):
        """Commits after a breaking one are never consumed."""
        consumed: list[Commit] = []

        def stream():
            for message in ["fix: a", "feat!: b", "feat: c", "fix: d"]:
                commit = parse_commit(message)
                consumed.append(commit)
                yield commit

        assert calculate_bump(stream()) is BumpType.MAJOR
        assert [c.subject for c in consumed] == ["a", "b"]


class TestFormatCommitForChangelog:
    """Tests for format_commit_for_changelog()."""

    def test_format_simple(self):
        """Format simple commit."""
        assert format_commit_for_changelog(parse_commit("feat: add login")) == "- add login"

    def test_format_with_scope(self):
        """Scope is rendered as a bold prefix."""
        formatted = format_commit_for_changelog(parse_commit("fix(core): null check"))

        assert formatted == "- **core:** null check"

    def test_format_breaking_description(self):
        """Breaking description replaces the subject on request."""
        commit = parse_commit("feat(api): new API\n\nBREAKING CHANGE: v1 removed")

        assert format_commit_for_changelog(commit) == "- **api:** new API"
        assert (
            format_commit_for_changelog(commit, use_breaking_description=True)
            == "- **api:** v1 removed"
        )


# =============================================================================
# Skip Release Marker Tests
# =============================================================================


class TestFilterSkipReleaseCommits:
    """Tests for filter_skip_release_commits()."""

    def test_filter_with_skip_release_marker(self):
        """Commits with [skip release] are filtered out."""
        messages = ["feat: add feature", "fix: bug fix [skip release]", "docs: update readme"]
        filtered = filter_skip_release_commits(messages, ["[skip release]"])

        assert filtered == ["feat: add feature", "docs: update readme"]

    def test_filter_case_insensitive(self):
        """Skip markers are matched case-insensitively."""
        messages = [
            "feat: add feature [SKIP RELEASE]",
            "fix: bug fix [Skip Release]",
            "docs: update readme",
        ]
        filtered = filter_skip_release_commits(messages, ["[skip release]"])

        assert filtered == ["docs: update readme"]

    def test_filter_multiple_patterns(self):
        """Multiple skip patterns are all respected."""
        messages = [
            "feat: add feature [skip release]",
            "fix: bug fix [no release]",
            "docs: update readme [release skip]",
            "chore: cleanup",
        ]
        patterns = ["[skip release]", "[no release]", "[release skip]"]

        assert filter_skip_release_commits(messages, patterns) == ["chore: cleanup"]

    def test_filter_empty_patterns_returns_all(self):
        """Empty patterns list returns all commits."""
        messages = ["feat: add feature [skip release]", "fix: bug fix"]

        assert filter_skip_release_commits(messages, []) == messages

    def test_filter_marker_in_body(self):
        """Skip markers in commit body are also detected."""
        messages = ["feat: add feature\n\nSome details [skip release]", "fix: bug fix"]

        assert filter_skip_release_commits(messages, ["[skip release]"]) == ["fix: bug fix"]
