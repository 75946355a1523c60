"""Legacy commit analysis and migration planning.

Legacy commits are those that do not follow the conventional grammar.
They are grouped by their first word to find recurring patterns, which
drive the migration advice and the bulk reformatting plan.
"""

from __future__ import annotations

import json
import shlex
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import asdict, dataclass, field
from enum import StrEnum

from bumper.core.commits import (
    DEFAULT_TYPE,
    Commit,
    classify_first_word,
    first_word,
    is_conventional_commit,
    split_conventional,
)

MAX_EXAMPLES = 3
DEFAULT_MAPPING_THRESHOLD = 5

RECOMMEND_GRADUAL = (
    "Large number of legacy commits detected. "
    "Consider gradual migration starting from recent commits."
)
RECOMMEND_BULK_RULES = "Many different commit patterns found. Use bulk formatting with custom rules."
RECOMMEND_HYBRID = "Some conventional commits already exist. Use hybrid migration strategy."
RECOMMEND_CUSTOM_MAPPING = (
    "High-frequency patterns detected. Create custom mapping rules for these patterns."
)


class MigrationStrategy(StrEnum):
    BULK = "bulk"
    HYBRID = "hybrid"
    GRADUAL = "gradual"


@dataclass(frozen=True)
class CommitPattern:
    """Legacy commits sharing the same first word."""

    pattern: str
    count: int
    examples: tuple[str, ...]
    suggested_type: str


@dataclass(frozen=True)
class MigrationAnalysis:
    """Summary of a repository's commit history.

    Attributes:
        total_commits: Number of commits analyzed
        conventional_commits: Commits already in conventional format
        legacy_commits: Everything else
        patterns: Legacy first-word patterns, most frequent first
        recommendations: Human-readable migration advice
        migration_strategy: Suggested approach for the remaining commits
    """

    total_commits: int
    conventional_commits: int
    legacy_commits: int
    patterns: tuple[CommitPattern, ...]
    recommendations: tuple[str, ...] = ()
    migration_strategy: MigrationStrategy = MigrationStrategy.GRADUAL

    @property
    def migration_rate(self) -> float:
        """Percentage of commits already in conventional format."""
        if not self.total_commits:
            return 0.0
        return self.conventional_commits / self.total_commits * 100

    def to_json(self) -> str:
        """Serialize for ``analyze-legacy --output``, including the migration rate."""
        data = asdict(self)
        data["migration_strategy"] = self.migration_strategy.value
        data["migration_rate"] = round(self.migration_rate, 1)
        return json.dumps(data, indent=2)


@dataclass(frozen=True)
class FormattedCommit:
    """A legacy commit and its proposed conventional message."""

    commit: Commit
    formatted: str


@dataclass
class _PatternAccumulator:
    count: int = 0
    examples: list[str] = field(default_factory=list)


def analyze_patterns(commits: Iterable[Commit]) -> list[CommitPattern]:
    """Group legacy commits by first word.

    Conventional commits and empty messages are ignored. The result is
    sorted by count, highest first; equal counts keep the order in which
    the pattern was first seen.
    """
    groups: dict[str, _PatternAccumulator] = {}
    for commit in commits:
        message = commit.message or commit.subject
        if is_conventional_commit(message):
            continue
        word = first_word(message)
        if not word:
            continue
        group = groups.setdefault(word, _PatternAccumulator())
        group.count += 1
        if len(group.examples) < MAX_EXAMPLES:
            group.examples.append(message)

    patterns = [
        CommitPattern(
            pattern=word,
            count=group.count,
            examples=tuple(group.examples),
            suggested_type=classify_first_word(word),
        )
        for word, group in groups.items()
    ]
    return sorted(patterns, key=lambda p: p.count, reverse=True)


def generate_recommendations(analysis: MigrationAnalysis) -> list[str]:
    """Return every applicable piece of migration advice, in a fixed order."""
    recommendations: list[str] = []
    if analysis.legacy_commits > 100:
        recommendations.append(RECOMMEND_GRADUAL)
    if len(analysis.patterns) > 10:
        recommendations.append(RECOMMEND_BULK_RULES)
    if analysis.conventional_commits > 0:
        recommendations.append(RECOMMEND_HYBRID)
    if any(p.count > 20 for p in analysis.patterns):
        recommendations.append(RECOMMEND_CUSTOM_MAPPING)
    return recommendations


def determine_migration_strategy(analysis: MigrationAnalysis) -> MigrationStrategy:
    """Pick a strategy; the first matching rule wins."""
    if analysis.legacy_commits < 50:
        return MigrationStrategy.BULK
    if analysis.conventional_commits > analysis.legacy_commits * 0.3:
        return MigrationStrategy.HYBRID
    return MigrationStrategy.GRADUAL


def analyze_history(commits: Sequence[Commit]) -> MigrationAnalysis:
    """Analyze a commit history for migration to conventional commits."""
    conventional, legacy = split_conventional(commits)
    base = MigrationAnalysis(
        total_commits=len(commits),
        conventional_commits=len(conventional),
        legacy_commits=len(legacy),
        patterns=tuple(analyze_patterns(legacy)),
    )
    return MigrationAnalysis(
        total_commits=base.total_commits,
        conventional_commits=base.conventional_commits,
        legacy_commits=base.legacy_commits,
        patterns=base.patterns,
        recommendations=tuple(generate_recommendations(base)),
        migration_strategy=determine_migration_strategy(base),
    )


def build_mapping_rules(
    patterns: Iterable[CommitPattern],
    min_count: int = DEFAULT_MAPPING_THRESHOLD,
) -> dict[str, str]:
    """Map frequent patterns (more than ``min_count`` commits) to their type."""
    return {p.pattern: p.suggested_type for p in patterns if p.count > min_count}


def format_legacy_message(message: str, commit_type: str) -> str:
    """Prefix a legacy message with a type, keeping the author's casing."""
    cleaned = message.strip()
    if cleaned.endswith("."):
        cleaned = cleaned[:-1]
    return f"{commit_type}: {cleaned[:1].upper()}{cleaned[1:]}"


def plan_bulk_format(
    commits: Iterable[Commit],
    rules: Mapping[str, str],
) -> list[FormattedCommit]:
    """Propose a conventional message for every legacy commit.

    Words without a mapping rule become ``chore``.
    """
    _, legacy = split_conventional(commits)
    plan: list[FormattedCommit] = []
    for commit in legacy:
        message = commit.message or commit.subject
        word = first_word(message)
        if not word:
            continue
        commit_type = rules.get(word, DEFAULT_TYPE)
        plan.append(FormattedCommit(commit, format_legacy_message(message, commit_type)))
    return plan


def render_msg_filter(plan: Iterable[FormattedCommit]) -> str:
    """Render a ``git filter-branch --msg-filter`` script for a plan.

    Commits are matched on their abbreviated hash, so the script compares
    against a prefix of ``$GIT_COMMIT``. Unmatched commits pass through
    unchanged.
    """
    lines = ["#!/bin/sh", 'case "$GIT_COMMIT" in']
    for item in plan:
        if not item.commit.hash:
            continue
        lines.append(f"  {item.commit.hash}*) printf '%s\\n' {shlex.quote(item.formatted)} ;;")
    lines += ["  *) cat ;;", "esac", ""]
    return "\n".join(lines)
