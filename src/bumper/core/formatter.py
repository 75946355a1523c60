"""Turn free text into conventional commit messages.

The type suggester here scans the whole message for keyword substrings.
It is intentionally broader than the first-word classifier used when
parsing history (:func:`bumper.core.commits.classify_first_word`).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from bumper.core.commits import STRICT_COMMIT_PATTERN, is_conventional_commit

DEFAULT_TYPE = "chore"
MAX_MESSAGE_LENGTH = 72

# Checked in order; the first type with any matching keyword wins.
TYPE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "feat": ("add", "new", "create", "implement", "introduce", "support", "enable", "allow"),
    "fix": ("fix", "resolve", "repair", "correct", "solve", "patch", "bug", "issue", "error"),
    "docs": ("document", "readme", "docs", "comment", "example", "guide", "tutorial"),
    "style": ("style", "format", "indent", "whitespace", "prettier", "eslint"),
    "refactor": ("refactor", "restructure", "reorganize", "cleanup", "simplify", "extract"),
    "perf": ("performance", "optimize", "speed", "fast", "slow", "cache"),
    "test": ("test", "spec", "coverage", "mock", "stub", "fixture"),
    "build": ("build", "compile", "bundle", "webpack", "rollup", "dependencies"),
    "ci": ("ci", "github", "actions", "workflow", "pipeline", "deploy"),
    "chore": ("chore", "maintenance", "update", "upgrade", "bump", "version"),
    "revert": ("revert", "undo", "rollback", "backout"),
    "security": ("security", "vulnerability", "cve", "auth", "permission", "access"),
}

# Table order is priority order.
COMMON_SCOPES: tuple[str, ...] = (
    "auth",
    "api",
    "ui",
    "cli",
    "docs",
    "test",
    "build",
    "ci",
    "deps",
    "config",
    "types",
    "utils",
    "core",
    "server",
    "client",
    "database",
    "cache",
    "logging",
    "monitoring",
    "security",
)

_EXPLICIT_SCOPE = re.compile(r"\(([^)]+)\)")
_SCOPE_PATTERNS = tuple(
    (scope, re.compile(rf"\b{re.escape(scope)}\b", re.IGNORECASE)) for scope in COMMON_SCOPES
)

IMPROVE_CONVENTIONAL = "Convert to conventional commit format"
IMPROVE_BREAKING = "Mark as breaking change"
IMPROVE_LENGTH = f"Shorten message to under {MAX_MESSAGE_LENGTH} characters"
IMPROVE_PERIOD = "Remove trailing period"


@dataclass(frozen=True)
class CommitSuggestion:
    """A suggested rewrite of a commit message plus advisory hints."""

    original: str
    suggested: str
    type: str
    scope: str | None = None
    breaking: bool = False
    improvements: list[str] = field(default_factory=list)


def suggest_commit_type(message: str) -> str:
    """Suggest a type from keywords anywhere in the message."""
    lowered = message.lower()
    for commit_type, keywords in TYPE_KEYWORDS.items():
        if any(keyword in lowered for keyword in keywords):
            return commit_type
    return DEFAULT_TYPE


def suggest_scope(message: str) -> str | None:
    """Suggest a scope: an explicit ``(scope)`` first, then a known scope word."""
    explicit = _EXPLICIT_SCOPE.search(message)
    if explicit:
        return explicit.group(1)
    for scope, pattern in _SCOPE_PATTERNS:
        if pattern.search(message):
            return scope
    return None


def _strip_period(text: str) -> str:
    return text[:-1] if text.endswith(".") else text


def _capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def clean_subject(message: str) -> str:
    """Trim, drop one trailing period and convert to sentence case.

    >>> clean_subject("  Update the API docs. ")
    'Update the api docs'
    """
    return _capitalize_first(_strip_period(message.strip()).lower())


def _assemble(commit_type: str, scope: str | None, breaking: bool, subject: str) -> str:
    header = commit_type
    if scope:
        header += f"({scope})"
    if breaking:
        header += "!"
    return f"{header}: {subject}"


def format_commit_message(
    message: str,
    commit_type: str | None = None,
    scope: str | None = None,
    breaking: bool = False,
) -> str:
    """Format free text as ``type[(scope)][!]: Subject``.

    Type and scope are inferred from the text when not given (an empty
    string counts as not given).

    >>> format_commit_message("fix login bug")
    'fix: Fix login bug'
    """
    return _assemble(
        commit_type or suggest_commit_type(message),
        scope or suggest_scope(message),
        breaking,
        clean_subject(message),
    )


def _improvements(message: str) -> list[str]:
    hints: list[str] = []
    if not is_conventional_commit(message):
        hints.append(IMPROVE_CONVENTIONAL)
    if _looks_breaking(message):
        hints.append(IMPROVE_BREAKING)
    if len(message) > MAX_MESSAGE_LENGTH:
        hints.append(IMPROVE_LENGTH)
    if message.endswith("."):
        hints.append(IMPROVE_PERIOD)
    return hints


def _looks_breaking(message: str) -> bool:
    return "breaking" in message.lower() or "!" in message


def suggest_commit_format(message: str) -> CommitSuggestion:
    """Suggest a conventional rewrite of ``message``.

    Messages that already parse as conventional commits keep the author's
    type, scope and breaking flag; only the subject is tidied (trailing
    period removed, first letter capitalized). Hints never block the
    suggestion.
    """
    improvements = _improvements(message)

    match = STRICT_COMMIT_PATTERN.match(message)
    if match:
        commit_type, scope, bang, subject = match.groups()
        return CommitSuggestion(
            original=message,
            suggested=_assemble(
                commit_type, scope, bool(bang), _capitalize_first(_strip_period(subject.strip()))
            ),
            type=commit_type,
            scope=scope,
            breaking=bool(bang),
            improvements=improvements,
        )

    commit_type = suggest_commit_type(message)
    scope = suggest_scope(message)
    breaking = _looks_breaking(message)
    return CommitSuggestion(
        original=message,
        suggested=format_commit_message(message, commit_type, scope, breaking),
        type=commit_type,
        scope=scope,
        breaking=breaking,
        improvements=improvements,
    )
