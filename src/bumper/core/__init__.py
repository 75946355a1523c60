"""Core business logic for bumper.

This package contains the pure building blocks:
- Conventional commit parsing and heuristic classification
- Release type resolution and version transitions
- Changelog grouping and rendering
- Commit message formatting and validation
- Legacy history analysis
"""

from __future__ import annotations

from bumper.core.changelog import (
    ChangelogSection,
    ReleaseInfo,
    append_to_changelog,
    build_release,
    group_into_sections,
    render_changelog,
)
from bumper.core.commits import (
    Commit,
    ParsedMessage,
    filter_skip_release_commits,
    is_conventional_commit,
    parse_commit,
    parse_commit_message,
    parse_log,
    parse_log_line,
)
from bumper.core.formatter import (
    CommitSuggestion,
    format_commit_message,
    suggest_commit_format,
    suggest_commit_type,
    suggest_scope,
)
from bumper.core.legacy import (
    CommitPattern,
    MigrationAnalysis,
    MigrationStrategy,
    analyze_history,
    analyze_patterns,
)
from bumper.core.types import CommitType
from bumper.core.validation import ValidationResult, validate_commit_message, validate_commits
from bumper.core.version import ReleaseType, next_version, resolve_release_type

__all__ = [
    "ChangelogSection",
    "Commit",
    "CommitPattern",
    "CommitSuggestion",
    "CommitType",
    "MigrationAnalysis",
    "MigrationStrategy",
    "ParsedMessage",
    "ReleaseInfo",
    "ReleaseType",
    "ValidationResult",
    "analyze_history",
    "analyze_patterns",
    "append_to_changelog",
    "build_release",
    "filter_skip_release_commits",
    "format_commit_message",
    "group_into_sections",
    "is_conventional_commit",
    "next_version",
    "parse_commit",
    "parse_commit_message",
    "parse_log",
    "parse_log_line",
    "render_changelog",
    "resolve_release_type",
    "suggest_commit_format",
    "suggest_commit_type",
    "suggest_scope",
    "validate_commit_message",
    "validate_commits",
]
