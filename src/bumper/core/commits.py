"""Conventional commit parsing.

Every message is classified. Messages that follow the conventional
grammar keep their literal type; anything else is classified by its
first word, falling back to ``chore``. Parsing never raises.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from bumper.core.types import CONVENTIONAL_TYPES, CommitType

DEFAULT_TYPE = "chore"
HASH_LENGTH = 8
LOG_SEPARATOR = "|"

# type(scope)!: description
COMMIT_PATTERN = re.compile(r"^(\w+)(?:\(([\w-]+)\))?(!)?:\s(.+)$", re.ASCII)

# Same shape, restricted to the recognized types.
STRICT_COMMIT_PATTERN = re.compile(
    rf"^({'|'.join(CONVENTIONAL_TYPES)})(?:\(([\w-]+)\))?(!)?:\s(.+)$",
    re.ASCII,
)

BREAKING_FOOTER_PATTERN = re.compile(r"^BREAKING[ -]CHANGE:", re.MULTILINE)

# First word of a legacy message -> suggested type. Checked in order.
FIRST_WORD_RULES: tuple[tuple[frozenset[str], str], ...] = (
    (frozenset({"add", "new", "create", "implement"}), "feat"),
    (frozenset({"fix", "bug", "issue", "problem"}), "fix"),
    (frozenset({"update", "upgrade", "bump"}), "chore"),
    (frozenset({"refactor", "clean", "improve"}), "refactor"),
    (frozenset({"test", "spec"}), "test"),
    (frozenset({"doc", "readme", "comment"}), "docs"),
)


@dataclass(frozen=True)
class ParsedMessage:
    """The structured form of a single commit message."""

    type: str
    subject: str
    scope: str | None = None
    breaking: bool = False
    is_conventional: bool = False


@dataclass(frozen=True)
class Commit:
    """A classified commit.

    ``type`` is always a non-empty string. It keeps whatever literal the
    author wrote (``wip: ...`` yields ``"wip"``); use :attr:`commit_type`
    for the closed enumeration.
    """

    hash: str
    type: str
    subject: str
    scope: str | None = None
    breaking: bool = False
    author: str = ""
    date: str = ""
    message: str = ""
    is_conventional: bool = False

    @property
    def commit_type(self) -> CommitType:
        return CommitType.from_literal(self.type)


def first_word(message: str) -> str:
    """Return the lowercase first whitespace-delimited token, or ``""``."""
    words = message.lower().split()
    return words[0] if words else ""


def classify_first_word(word: str) -> str:
    """Suggest a commit type from the first word of a legacy message."""
    word = word.lower()
    for keywords, commit_type in FIRST_WORD_RULES:
        if word in keywords:
            return commit_type
    return DEFAULT_TYPE


def parse_commit_message(message: str) -> ParsedMessage:
    """Parse a commit message into type, scope, breaking flag and subject.

    Only the first line is matched against the grammar. A
    ``BREAKING CHANGE:`` footer in the body also marks the commit as
    breaking. A message that does not match keeps the whole message,
    body included, as its subject.

    Examples:
        >>> parse_commit_message("feat(api)!: drop v1 endpoints").breaking
        True
        >>> parse_commit_message("add new feature").type
        'feat'
    """
    message = message or ""
    header, _, body = message.partition("\n")

    match = COMMIT_PATTERN.match(header)
    if match is None:
        return ParsedMessage(type=classify_first_word(first_word(message)), subject=message)

    commit_type, scope, bang, description = match.groups()
    return ParsedMessage(
        type=commit_type,
        subject=description.strip(),
        scope=scope or None,
        breaking=bool(bang) or bool(BREAKING_FOOTER_PATTERN.search(body)),
        is_conventional=True,
    )


def is_conventional_commit(message: str) -> bool:
    """Return True if the first line uses one of the recognized types."""
    header = (message or "").partition("\n")[0]
    return STRICT_COMMIT_PATTERN.match(header) is not None


def parse_commit(
    commit_hash: str = "",
    message: str = "",
    author: str = "",
    date: str = "",
) -> Commit:
    """Build a classified :class:`Commit` from raw fields.

    Missing fields are tolerated; a record with nothing in it becomes a
    ``chore`` with an empty subject and it is up to the caller to skip it.
    """
    message = message or ""
    parsed = parse_commit_message(message)
    return Commit(
        hash=(commit_hash or "")[:HASH_LENGTH],
        type=parsed.type,
        subject=parsed.subject,
        scope=parsed.scope,
        breaking=parsed.breaking,
        author=author or "",
        date=date or "",
        message=message,
        is_conventional=parsed.is_conventional,
    )


def parse_log_line(line: str, separator: str = LOG_SEPARATOR) -> Commit:
    """Parse a ``hash|subject|author|date`` line from ``git log``.

    The subject may itself contain the separator; author and date are
    taken from the end of the line.
    """
    parts = line.rstrip("\r\n").split(separator)
    if len(parts) >= 4:
        hash_, author, date = parts[0], parts[-2], parts[-1]
        subject = separator.join(parts[1:-2])
    else:
        parts += [""] * (4 - len(parts))
        hash_, subject, author, date = parts
    return parse_commit(hash_, subject, author, date)


def parse_log(lines: Iterable[str], separator: str = LOG_SEPARATOR) -> list[Commit]:
    """Parse every non-blank log line, preserving order."""
    return [parse_log_line(line, separator) for line in lines if line.strip()]


def filter_skip_release_commits(commits: Iterable[Commit], patterns: Iterable[str]) -> list[Commit]:
    """Drop commits whose message contains a skip marker (case-insensitive).

    Args:
        commits: Commits to filter
        patterns: Markers such as ``[skip release]``

    Returns:
        Commits without any marker, in their original order
    """
    markers = [p.lower() for p in patterns if p]
    if not markers:
        return list(commits)
    return [
        commit
        for commit in commits
        if not any(marker in (commit.message or commit.subject).lower() for marker in markers)
    ]


def split_conventional(commits: Iterable[Commit]) -> tuple[list[Commit], list[Commit]]:
    """Split commits into (conventional, legacy) using the recognized types."""
    conventional: list[Commit] = []
    legacy: list[Commit] = []
    for commit in commits:
        text = commit.message or commit.subject
        (conventional if is_conventional_commit(text) else legacy).append(commit)
    return conventional, legacy
