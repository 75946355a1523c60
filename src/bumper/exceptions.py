"""Exception hierarchy for bumper.

All errors raised by the I/O layers derive from :class:`BumperError` so
the CLI can report them uniformly. The classification core never raises
these: malformed commit messages and version strings are repaired, not
rejected.
"""

from __future__ import annotations


class BumperError(Exception):
    """Base class for all bumper errors."""


# Configuration


class ConfigError(BumperError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """No pyproject.toml could be found."""


class ConfigValidationError(ConfigError):
    """Configuration values are invalid or required fields are missing."""


# Git


class GitError(BumperError):
    """A git operation failed."""


class GitCommandError(GitError):
    """A git subprocess exited with a non-zero status."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr

    def __str__(self) -> str:
        base = super().__str__()
        if self.stderr:
            return f"{base}: {self.stderr.strip()}"
        return base


class DirtyWorkingTreeError(GitError):
    """The working tree has uncommitted changes."""


# Project files


class ProjectError(BumperError):
    """A project file could not be read or updated."""


class VersionNotFoundError(ProjectError):
    """No version declaration was found in a project file."""


# Release


class ReleaseError(BumperError):
    """A release step failed."""


class PublishError(ReleaseError):
    """Publishing the package failed."""
