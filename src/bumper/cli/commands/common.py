"""Helpers shared by the command implementations."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from bumper.config import load_config
from bumper.config.models import BumperConfig
from bumper.core.commits import Commit, filter_skip_release_commits
from bumper.exceptions import BumperError
from bumper.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console


def open_project(path: str | None, err_console: Console) -> tuple[Path, BumperConfig, GitRepository]:
    """Load configuration and the git repository, exiting with status 1 on failure."""
    project_path = Path(path) if path else Path.cwd()

    try:
        config = load_config(project_path)
    except BumperError as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e

    return project_path, config, open_repository(project_path, err_console)


def open_repository(project_path: Path, err_console: Console) -> GitRepository:
    """Open the git repository at ``project_path``, exiting with status 1 if there is none."""
    try:
        return GitRepository(project_path)
    except BumperError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1) from e


def unreleased_commits(
    repo: GitRepository,
    config: BumperConfig,
    err_console: Console,
) -> tuple[str | None, list[Commit]]:
    """Return the latest release tag and the releasable commits after it.

    Without any tag the whole history is used.
    """
    latest_tag = repo.get_latest_tag(f"{config.effective_tag_prefix}*")
    try:
        commits = repo.get_commits_since_tag(latest_tag)
    except BumperError as e:
        err_console.print(f"[red]Error reading git history:[/] {e}")
        raise SystemExit(1) from e
    return latest_tag, filter_skip_release_commits(commits, config.commits.skip_release_patterns)


def range_commits(repo: GitRepository, revision_range: str | None, err_console: Console) -> list[Commit]:
    """Return every commit in ``revision_range``, without skip-release filtering.

    Git failures are printed and end the command with status 1.
    """
    try:
        return repo.get_commits(revision_range)
    except BumperError as e:
        err_console.print(f"[red]Error reading git history:[/] {e}")
        raise SystemExit(1) from e
