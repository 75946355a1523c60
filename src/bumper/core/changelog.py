"""Changelog grouping and Markdown rendering.

The rendered text is scraped by other tools, so headers and bullet
formats are fixed:

- ``## [1.2.0] - 2024-05-01 (MINOR RELEASE)``
- ``- **scope: subject** (hash)`` under breaking changes
- ``- **scope:** subject (hash)`` under each type section

Writing the result to disk is the caller's job; :func:`append_to_changelog`
only computes the new file content.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING

from bumper.core.types import CommitType
from bumper.core.version import ReleaseType, next_version, resolve_release_type

if TYPE_CHECKING:
    from bumper.core.commits import Commit

BREAKING_HEADER = "### ⚠️ BREAKING CHANGES"
CONTRIBUTORS_HEADER = "### 👥 Contributors"

CHANGELOG_HEADER = (
    "# Changelog\n\nAll notable changes to this project will be documented in this file.\n\n"
)


@dataclass(frozen=True)
class ChangelogSection:
    """A titled group of commits of one type."""

    title: str
    commits: tuple[Commit, ...]


@dataclass(frozen=True)
class ReleaseInfo:
    """Everything needed to render one changelog entry."""

    version: str
    date: str
    release_type: ReleaseType
    sections: tuple[ChangelogSection, ...]

    @property
    def commits(self) -> list[Commit]:
        return [commit for section in self.sections for commit in section.commits]

    @property
    def is_empty(self) -> bool:
        return not any(section.commits for section in self.sections)


def _date_key(commit: Commit) -> date:
    # Unparseable dates sort after every real date.
    try:
        return datetime.fromisoformat(commit.date.strip()).date()
    except ValueError:
        return date.min


def group_into_sections(commits: Iterable[Commit]) -> tuple[ChangelogSection, ...]:
    """Group commits into sections by type.

    Sections appear in the order their type is first seen. Within a
    section commits are ordered newest first; commits with the same date
    keep their relative order.
    """
    grouped: dict[CommitType, list[Commit]] = {}
    for commit in commits:
        grouped.setdefault(commit.commit_type, []).append(commit)

    return tuple(
        ChangelogSection(
            title=commit_type.section_title,
            commits=tuple(sorted(members, key=_date_key, reverse=True)),
        )
        for commit_type, members in grouped.items()
    )


def _contributors(sections: Sequence[ChangelogSection]) -> list[str]:
    seen: dict[str, None] = {}
    for section in sections:
        for commit in section.commits:
            if commit.author:
                seen.setdefault(commit.author, None)
    return list(seen)


def format_breaking_entry(commit: Commit) -> str:
    """Format a commit for the breaking changes block.

    The whole entry is bold, scope included:
    ``- **api: change api** (abc12345)``.
    """
    scope = f"{commit.scope}: " if commit.scope else ""
    return f"- **{scope}{commit.subject}** ({commit.hash})"


def format_section_entry(commit: Commit) -> str:
    """Format a commit for its type section; only the scope is bold."""
    scope = f"**{commit.scope}:** " if commit.scope else ""
    return f"- {scope}{commit.subject} ({commit.hash})"


def render_changelog(release: ReleaseInfo) -> str:
    """Render a release as a Markdown changelog entry.

    Args:
        release: The release to render

    Returns:
        The entry text, ending with a blank line
    """
    lines = [
        f"## [{release.version}] - {release.date} ({release.release_type.value.upper()} RELEASE)",
        "",
    ]

    breaking = [c for section in release.sections for c in section.commits if c.breaking]
    if breaking:
        lines += [BREAKING_HEADER, ""]
        lines += [format_breaking_entry(c) for c in breaking]
        lines.append("")

    for section in release.sections:
        if not section.commits:
            continue
        lines += [f"### {section.title}", ""]
        lines += [format_section_entry(c) for c in section.commits]
        lines.append("")

    contributors = _contributors(release.sections)
    if contributors:
        lines += [
            CONTRIBUTORS_HEADER,
            "",
            f"Thanks to {', '.join(contributors)} for contributing to this release!",
            "",
        ]

    return "\n".join(lines) + "\n"


def build_release(
    commits: Sequence[Commit],
    current_version: str,
    *,
    release_date: date | str,
    release_type: ReleaseType | str | None = None,
) -> ReleaseInfo:
    """Derive the release for ``commits`` on top of ``current_version``.

    ``release_type`` overrides the type inferred from the commits.
    """
    resolved = ReleaseType(release_type) if release_type else resolve_release_type(commits)
    if isinstance(release_date, date):
        release_date = release_date.isoformat()
    return ReleaseInfo(
        version=next_version(current_version, resolved),
        date=release_date,
        release_type=resolved,
        sections=group_into_sections(commits),
    )


def append_to_changelog(existing: str | None, entry: str) -> str:
    """Return the changelog content with ``entry`` appended.

    A missing file starts from :data:`CHANGELOG_HEADER`. Entries are never
    merged or de-duplicated.
    """
    base = CHANGELOG_HEADER if existing is None else existing
    return base + entry


def release_notes(entry: str) -> str:
    """Strip the version heading from a rendered entry for use as release notes."""
    lines = entry.splitlines()
    if lines and lines[0].startswith("## ["):
        lines = lines[1:]
    return "\n".join(lines).strip()
