"""Tests for conventional commit parsing."""

from __future__ import annotations

import pytest

from bumper.core.commits import (
    Commit,
    classify_first_word,
    filter_skip_release_commits,
    is_conventional_commit,
    parse_commit,
    parse_commit_message,
    parse_log,
    parse_log_line,
    split_conventional,
)
from bumper.core.types import CONVENTIONAL_TYPES, CommitType


class TestParseCommitMessage:
    """Tests for parse_commit_message()."""

    def test_parse_simple_feat(self):
        """Parse a simple feat commit."""
        parsed = parse_commit_message("feat: add new feature")

        assert parsed.is_conventional
        assert parsed.type == "feat"
        assert parsed.scope is None
        assert parsed.subject == "add new feature"
        assert not parsed.breaking

    def test_parse_with_scope(self):
        """Parse commit with scope."""
        parsed = parse_commit_message("fix(api): handle null response")

        assert parsed.type == "fix"
        assert parsed.scope == "api"
        assert parsed.subject == "handle null response"

    def test_parse_hyphenated_scope(self):
        """Scopes may contain hyphens."""
        parsed = parse_commit_message("build(ci-cache): warm up runners")

        assert parsed.scope == "ci-cache"

    def test_parse_breaking_with_exclamation(self):
        """Parse breaking change with ! indicator."""
        parsed = parse_commit_message("feat!: redesign API")

        assert parsed.breaking
        assert parsed.type == "feat"

    def test_parse_breaking_with_scope_and_exclamation(self):
        """Parse breaking change with scope and ! indicator."""
        parsed = parse_commit_message("feat(core)!: change config format")

        assert parsed.breaking
        assert parsed.type == "feat"
        assert parsed.scope == "core"

    def test_parse_breaking_in_body(self):
        """A BREAKING CHANGE footer marks the commit as breaking."""
        parsed = parse_commit_message("feat: new feature\n\nBREAKING CHANGE: old API removed")

        assert parsed.breaking
        assert parsed.subject == "new feature"

    def test_subject_is_trimmed(self):
        """Trailing whitespace in the description is dropped."""
        assert parse_commit_message("fix: typo   ").subject == "typo"

    def test_unknown_type_is_kept_literally(self):
        """Unrecognized types are still parsed; validation is separate."""
        parsed = parse_commit_message("wip: half done")

        assert parsed.is_conventional
        assert parsed.type == "wip"
        assert parsed.subject == "half done"

    def test_missing_space_after_colon_is_not_conventional(self):
        """The grammar requires whitespace after the colon."""
        parsed = parse_commit_message("fix:typo")

        assert not parsed.is_conventional
        assert parsed.type == "chore"
        assert parsed.subject == "fix:typo"

    def test_fallback_add_is_feat(self):
        """Non-conventional 'add ...' falls back to feat."""
        parsed = parse_commit_message("add new feature")

        assert not parsed.is_conventional
        assert parsed.type == "feat"
        assert parsed.subject == "add new feature"
        assert parsed.scope is None
        assert not parsed.breaking

    def test_fallback_keeps_full_message(self):
        """The whole message becomes the subject in fallback mode."""
        parsed = parse_commit_message("Fixed the thing (finally)!")

        assert parsed.subject == "Fixed the thing (finally)!"
        assert not parsed.breaking

    def test_fallback_multiline_keeps_body(self):
        """A multi-line legacy message keeps its body in the subject."""
        parsed = parse_commit_message("fix bug\n\nbody")

        assert parsed.type == "fix"
        assert parsed.subject == "fix bug\n\nbody"

    def test_non_ascii_type_is_not_conventional(self):
        """Type and scope are limited to ASCII word characters."""
        parsed = parse_commit_message("féat: x")

        assert not parsed.is_conventional
        assert parsed.type == "chore"
        assert parsed.subject == "féat: x"
        assert not parse_commit_message("feat(aé): x").is_conventional

    def test_fallback_unknown_word_is_chore(self):
        """Unknown first words default to chore."""
        assert parse_commit_message("Merged branch develop").type == "chore"

    def test_empty_message_is_chore(self):
        """Empty input still yields a concrete type."""
        parsed = parse_commit_message("")

        assert parsed.type == "chore"
        assert parsed.subject == ""

    @pytest.mark.parametrize(
        "message",
        ["", "   ", "???", "Merge pull request #12", "v2", "🎉 initial", "fix:", ":"],
    )
    def test_never_returns_empty_type(self, message: str):
        """Classification is total."""
        assert parse_commit_message(message).type


class TestClassifyFirstWord:
    """Tests for classify_first_word()."""

    @pytest.mark.parametrize(
        ("word", "expected"),
        [
            ("add", "feat"),
            ("new", "feat"),
            ("create", "feat"),
            ("implement", "feat"),
            ("fix", "fix"),
            ("bug", "fix"),
            ("issue", "fix"),
            ("problem", "fix"),
            ("update", "chore"),
            ("upgrade", "chore"),
            ("bump", "chore"),
            ("refactor", "refactor"),
            ("clean", "refactor"),
            ("improve", "refactor"),
            ("test", "test"),
            ("spec", "test"),
            ("doc", "docs"),
            ("readme", "docs"),
            ("comment", "docs"),
            ("Added", "chore"),
            ("whatever", "chore"),
        ],
    )
    def test_keyword_table(self, word: str, expected: str):
        """Each keyword maps to its type; other words fall back to chore."""
        assert classify_first_word(word) == expected

    def test_case_insensitive(self):
        """First words are compared in lowercase."""
        assert classify_first_word("FIX") == "fix"


class TestParseCommit:
    """Tests for parse_commit() and Commit."""

    def test_hash_truncated(self):
        """Hashes are shortened to 8 characters."""
        commit = parse_commit("0123456789abcdef", "feat: x", "A", "2024-01-01")
        assert commit.hash == "01234567"

    def test_degenerate_record(self):
        """A record with no fields classifies as an empty chore."""
        commit = parse_commit()

        assert commit.type == "chore"
        assert commit.subject == ""
        assert commit.hash == ""
        assert commit.author == ""

    def test_commit_type_enum(self):
        """commit_type maps to the closed enumeration."""
        assert parse_commit("a", "perf: faster").commit_type is CommitType.PERF
        assert parse_commit("a", "wip: stuff").commit_type is CommitType.OTHER

    def test_keeps_original_message(self):
        """The raw message is preserved for legacy analysis."""
        commit = parse_commit("a", "feat(ui): dark mode")
        assert commit.message == "feat(ui): dark mode"
        assert commit.is_conventional


class TestParseLogLine:
    """Tests for parse_log_line() and parse_log()."""

    def test_parse_line(self):
        """Parse a hash|subject|author|date line."""
        commit = parse_log_line("abc12345deadbeef|fix(auth): bad token|Jane Smith|2024-01-02")

        assert commit.hash == "abc12345"
        assert commit.type == "fix"
        assert commit.scope == "auth"
        assert commit.subject == "bad token"
        assert commit.author == "Jane Smith"
        assert commit.date == "2024-01-02"

    def test_subject_with_separator(self):
        """A separator inside the subject stays in the subject."""
        commit = parse_log_line("abc12345|docs: a | b table|Jane|2024-01-02")

        assert commit.subject == "a | b table"
        assert commit.author == "Jane"

    def test_missing_fields(self):
        """Short lines are padded with empty fields."""
        commit = parse_log_line("abc12345|add thing")

        assert commit.type == "feat"
        assert commit.author == ""
        assert commit.date == ""

    def test_parse_log_skips_blank_lines(self):
        """Blank lines are ignored and order is kept."""
        commits = parse_log(["a|feat: one|A|2024-01-01", "", "b|fix: two|B|2024-01-02\n"])

        assert [c.hash for c in commits] == ["a", "b"]


class TestIsConventionalCommit:
    """Tests for is_conventional_commit()."""

    def test_all_recognized_types(self):
        """All recognized types are conventional."""
        for commit_type in CONVENTIONAL_TYPES:
            assert is_conventional_commit(f"{commit_type}: some change")

    def test_unknown_type_is_not_conventional(self):
        """Unknown types are rejected by the strict check."""
        assert not is_conventional_commit("wip: some change")

    def test_plain_message(self):
        """Free-form messages are legacy."""
        assert not is_conventional_commit("Updated the readme file")

    def test_non_ascii_scope_is_not_conventional(self):
        """Scopes outside ASCII fail the strict check."""
        assert not is_conventional_commit("feat(ünicode): add thing")
        assert is_conventional_commit("feat(unicode): add thing")

    def test_split_conventional(self, sample_commits: list[Commit]):
        """Split keeps order within each group."""
        legacy_commit = parse_commit("f", "Updated stuff")
        conventional, legacy = split_conventional([*sample_commits, legacy_commit])

        assert conventional == sample_commits
        assert legacy == [legacy_commit]


class TestFilterSkipReleaseCommits:
    """Tests for filter_skip_release_commits()."""

    def test_filter_with_skip_release_marker(self):
        """Commits with [skip release] are filtered out."""
        commits = [
            parse_commit("a", "feat: add feature"),
            parse_commit("b", "fix: bug fix [skip release]"),
            parse_commit("c", "docs: update readme"),
        ]
        filtered = filter_skip_release_commits(commits, ["[skip release]"])

        assert [c.hash for c in filtered] == ["a", "c"]

    def test_filter_case_insensitive(self):
        """Skip markers are matched case-insensitively."""
        commits = [
            parse_commit("a", "feat: add feature [SKIP RELEASE]"),
            parse_commit("b", "fix: bug fix [Skip Release]"),
            parse_commit("c", "docs: update readme"),
        ]
        filtered = filter_skip_release_commits(commits, ["[skip release]"])

        assert [c.hash for c in filtered] == ["c"]

    def test_filter_multiple_patterns(self):
        """Multiple skip patterns are all respected."""
        commits = [
            parse_commit("a", "feat: add feature [skip release]"),
            parse_commit("b", "fix: bug fix [no release]"),
            parse_commit("c", "docs: update readme [release skip]"),
            parse_commit("d", "chore: cleanup"),
        ]
        patterns = ["[skip release]", "[no release]", "[release skip]"]

        assert [c.hash for c in filter_skip_release_commits(commits, patterns)] == ["d"]

    def test_filter_empty_patterns_returns_all(self):
        """Empty patterns list returns all commits."""
        commits = [parse_commit("a", "feat: add feature [skip release]")]

        assert filter_skip_release_commits(commits, []) == commits
