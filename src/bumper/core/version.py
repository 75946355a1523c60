"""Release type resolution and semantic version transitions."""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bumper.core.commits import Commit

_DIGITS = re.compile(r"[0-9]+")


class ReleaseType(StrEnum):
    """Semantic version increments, strongest first."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


def resolve_release_type(commits: Iterable[Commit]) -> ReleaseType:
    """Reduce commits to a single release type.

    Any breaking commit forces MAJOR; otherwise any ``feat`` commit gives
    MINOR; everything else (including no commits at all) is a PATCH.
    The result does not depend on commit order.
    """
    has_feature = False
    for commit in commits:
        if commit.breaking:
            return ReleaseType.MAJOR
        if commit.type == "feat":
            has_feature = True
    return ReleaseType.MINOR if has_feature else ReleaseType.PATCH


def _component(parts: list[str], index: int) -> int:
    if index >= len(parts) or not _DIGITS.fullmatch(parts[index]):
        return 0
    return int(parts[index])


def parse_version_triplet(current: str) -> tuple[int, int, int]:
    """Split ``X.Y.Z`` into integers, using 0 for missing or non-numeric parts."""
    parts = (current or "").strip().split(".")
    return _component(parts, 0), _component(parts, 1), _component(parts, 2)


def next_version(current: str, release_type: ReleaseType | str) -> str:
    """Compute the next version.

    Examples:
        >>> next_version("1.0.0", "major")
        '2.0.0'
        >>> next_version("2.1.3", ReleaseType.MINOR)
        '2.2.0'
        >>> next_version("1.9.9", "patch")
        '1.9.10'
    """
    major, minor, patch = parse_version_triplet(current)
    release_type = ReleaseType(release_type)

    if release_type is ReleaseType.MAJOR:
        return f"{major + 1}.0.0"
    if release_type is ReleaseType.MINOR:
        return f"{major}.{minor + 1}.0"
    return f"{major}.{minor}.{patch + 1}"
