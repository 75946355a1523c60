"""The closed set of conventional commit types.

Each type carries the emoji and title used for its changelog section.
Anything outside the set (including the ``invalid`` marker produced by
validation) collapses into :attr:`CommitType.OTHER`.
"""

from __future__ import annotations

from enum import Enum


class CommitType(Enum):
    """Conventional commit types with their changelog presentation."""

    FEAT = ("feat", "✨", "Features")
    FIX = ("fix", "🐛", "Bug Fixes")
    DOCS = ("docs", "📚", "Documentation")
    STYLE = ("style", "💄", "Styles")
    REFACTOR = ("refactor", "♻️", "Code Refactoring")
    PERF = ("perf", "⚡", "Performance Improvements")
    TEST = ("test", "✅", "Tests")
    BUILD = ("build", "📦", "Builds")
    CI = ("ci", "🔧", "Continuous Integration")
    CHORE = ("chore", "🔨", "Chores")
    REVERT = ("revert", "⏪", "Reverts")
    SECURITY = ("security", "🔒", "Security Fixes")
    OTHER = ("other", "🔧", "Other Changes")

    def __init__(self, literal: str, emoji: str, title: str) -> None:
        self.literal = literal
        self.emoji = emoji
        self.title = title

    @property
    def section_title(self) -> str:
        return f"{self.emoji} {self.title}"

    @classmethod
    def from_literal(cls, value: str | None) -> CommitType:
        """Map a parsed type string to a member; unknown strings map to OTHER."""
        return _BY_LITERAL.get(value or "", cls.OTHER)


_BY_LITERAL: dict[str, CommitType] = {
    member.literal: member for member in CommitType if member is not CommitType.OTHER
}

# Order matters: it is the type list accepted by strict validation.
CONVENTIONAL_TYPES: tuple[str, ...] = tuple(_BY_LITERAL)
