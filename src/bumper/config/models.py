"""Pydantic models for the ``[tool.bumper]`` configuration table."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class CommitsConfig(_Section):
    """How commits are filtered and validated."""

    skip_release_patterns: list[str] = Field(
        default_factory=lambda: ["[skip release]", "[release skip]", "[no release]"]
    )
    max_subject_length: int = Field(default=72, ge=1)


class ChangelogConfig(_Section):
    """Changelog output settings."""

    enabled: bool = True
    path: Path = Path("CHANGELOG.md")


class VersionConfig(_Section):
    """Version and tag settings."""

    tag_prefix: str = "v"
    version_files: list[Path] = Field(default_factory=list)


class PublishConfig(_Section):
    """Package publishing settings."""

    enabled: bool = True
    tool: Literal["uv", "twine", "poetry", "npm"] = "uv"
    extra_args: list[str] = Field(default_factory=list)


class GitHubConfig(_Section):
    """GitHub release settings (via the ``gh`` CLI)."""

    create_release: bool = True
    release_title: str = "Release v{version}"


class BumperConfig(_Section):
    """Top-level bumper configuration."""

    default_branch: str = "main"
    release_branches: list[str] = Field(default_factory=lambda: ["main", "master"])
    allow_dirty: bool = False
    remote: str = "origin"

    commits: CommitsConfig = Field(default_factory=CommitsConfig)
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
    version: VersionConfig = Field(default_factory=VersionConfig)
    publish: PublishConfig = Field(default_factory=PublishConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)

    @field_validator("release_branches")
    @classmethod
    def _require_branch(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("release_branches must name at least one branch")
        return value

    @property
    def allowed_release_branches(self) -> list[str]:
        """The default branch followed by any other release branches."""
        return [self.default_branch] + [
            branch for branch in self.release_branches if branch != self.default_branch
        ]

    @property
    def effective_tag_prefix(self) -> str:
        return self.version.tag_prefix

    @property
    def effective_changelog_path(self) -> Path:
        return self.changelog.path

    def tag_for(self, version: str) -> str:
        """Return the git tag name for a version."""
        return f"{self.effective_tag_prefix}{version}"
