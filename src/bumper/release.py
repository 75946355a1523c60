"""Release orchestration.

A :class:`ReleasePlan` is computed up front from plain data (current
version, commits, configuration) and then carried out step by step by
:class:`ReleaseRunner`. Each step shells out to git, the publish tool or
``gh``; nothing here decides versions or renders text.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

from bumper.core.changelog import append_to_changelog, build_release, release_notes, render_changelog
from bumper.core.version import ReleaseType
from bumper.exceptions import DirtyWorkingTreeError, PublishError
from bumper.project.pyproject import update_pyproject_version, update_version_file

if TYPE_CHECKING:
    from bumper.config.models import BumperConfig
    from bumper.core.changelog import ReleaseInfo
    from bumper.core.commits import Commit
    from bumper.vcs.git import GitRepository

logger = logging.getLogger(__name__)

PUBLISH_COMMANDS: dict[str, tuple[str, ...]] = {
    "uv": ("uv", "publish"),
    "poetry": ("poetry", "publish", "--build"),
    "twine": ("twine", "upload", "dist/*"),
    "npm": ("npm", "publish"),
}


@dataclass(frozen=True)
class ReleasePlan:
    """Everything a release will do, computed before anything is touched."""

    current_version: str
    release: ReleaseInfo
    tag: str
    changelog_entry: str

    @property
    def version(self) -> str:
        return self.release.version

    @property
    def release_type(self) -> ReleaseType:
        return self.release.release_type

    @property
    def commit_message(self) -> str:
        return f"chore: release v{self.version}"

    @property
    def tag_message(self) -> str:
        return f"Release v{self.version}"


def plan_release(
    commits: Sequence[Commit],
    current_version: str,
    config: BumperConfig,
    *,
    release_type: ReleaseType | str | None = None,
    release_date: date | None = None,
) -> ReleasePlan:
    """Build the release plan for ``commits``.

    ``release_type`` forces the increment; otherwise it is resolved from
    the commits.
    """
    release = build_release(
        commits,
        current_version,
        release_date=release_date or date.today(),
        release_type=release_type,
    )
    return ReleasePlan(
        current_version=current_version,
        release=release,
        tag=config.tag_for(release.version),
        changelog_entry=render_changelog(release),
    )


def describe_steps(plan: ReleasePlan, config: BumperConfig) -> list[str]:
    """Human-readable list of what :meth:`ReleaseRunner.run` would do."""
    steps = [f"Update pyproject.toml version to {plan.version}"]
    steps += [f"Update version in {path}" for path in config.version.version_files]
    if config.changelog.enabled:
        steps.append(f"Append release notes to {config.effective_changelog_path}")
    steps += [
        f'Commit changes with message: "{plan.commit_message}"',
        f"Create git tag: {plan.tag}",
        f"Push changes and tag to {config.remote}",
    ]
    if config.publish.enabled:
        steps.append(f"Publish with {config.publish.tool}")
    if config.github.create_release:
        steps.append("Create GitHub release")
    return steps


class ReleaseRunner:
    """Carries out a :class:`ReleasePlan` against a repository."""

    def __init__(
        self,
        repo: GitRepository,
        config: BumperConfig,
        project_path: Path,
        on_step: Callable[[str], None] | None = None,
    ) -> None:
        self.repo = repo
        self.config = config
        self.project_path = project_path
        self.on_step = on_step or (lambda message: logger.info(message))

    def check_working_tree(self) -> None:
        """Refuse to release from a dirty tree; warn when off a release branch.

        The default branch always counts as a release branch.

        Raises:
            DirtyWorkingTreeError: If there are uncommitted changes
        """
        if not self.config.allow_dirty:
            status = self.repo.status()
            if status:
                raise DirtyWorkingTreeError(
                    "Working directory is not clean. "
                    f"Commit or stash your changes before releasing.\n{status}"
                )
        branch = self.repo.current_branch()
        allowed = self.config.allowed_release_branches
        if branch not in allowed:
            logger.warning(
                'You\'re on branch "%s". Consider switching to %s for releases.',
                branch,
                "/".join(allowed),
            )

    def run(self, plan: ReleasePlan) -> None:
        """Run every step in order, stopping at the first failure.

        A step returning False was skipped with a warning and is not reported.
        """
        for description, step in self._steps(plan):
            if step() is not False:
                self.on_step(description)

    def _steps(self, plan: ReleasePlan) -> Iterator[tuple[str, Callable[[], object]]]:
        yield "Updated version in pyproject.toml", lambda: self.update_version(plan)
        if self.config.changelog.enabled:
            yield (
                f"Updated {self.config.effective_changelog_path}",
                lambda: self.write_changelog(plan),
            )
        yield "Committed changes", lambda: self.commit(plan)
        yield f"Created git tag {plan.tag}", lambda: self.repo.create_tag(plan.tag, plan.tag_message)
        yield "Pushed to remote", lambda: self.push(plan)
        if self.config.publish.enabled:
            yield f"Published with {self.config.publish.tool}", self.publish
        if self.config.github.create_release:
            yield "Created GitHub release", lambda: self.create_github_release(plan)

    def update_version(self, plan: ReleasePlan) -> None:
        update_pyproject_version(self.project_path, plan.version)
        for version_file in self.config.version.version_files:
            update_version_file(self.project_path / version_file, plan.version)

    def write_changelog(self, plan: ReleasePlan) -> Path:
        path = self.project_path / self.config.effective_changelog_path
        existing = path.read_text(encoding="utf-8") if path.exists() else None
        path.write_text(append_to_changelog(existing, plan.changelog_entry), encoding="utf-8")
        return path

    def commit(self, plan: ReleasePlan) -> None:
        self.repo.add_all()
        self.repo.commit(plan.commit_message)

    def push(self, plan: ReleasePlan) -> None:
        self.repo.push(self.config.remote)
        self.repo.push(self.config.remote, plan.tag)

    def publish(self) -> None:
        """Publish the package with the configured tool.

        Raises:
            PublishError: If the tool is missing or exits with an error
        """
        cmd = self._publish_command()
        logger.debug("Running %s", " ".join(cmd))
        try:
            subprocess.run(cmd, cwd=self.project_path, check=True, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise PublishError(f"{cmd[0]} not found") from e
        except subprocess.CalledProcessError as e:
            raise PublishError(f"{' '.join(cmd)} failed: {(e.stderr or '').strip()}") from e

    def _publish_command(self) -> list[str]:
        cmd: list[str] = []
        for arg in PUBLISH_COMMANDS[self.config.publish.tool]:
            if "*" in arg:
                cmd += sorted(str(p) for p in self.project_path.glob(arg))
            else:
                cmd.append(arg)
        return cmd + list(self.config.publish.extra_args)

    def create_github_release(self, plan: ReleasePlan) -> bool:
        """Create a GitHub release with ``gh``.

        A missing or failing ``gh`` is logged and reported as False; the
        release itself has already been pushed at this point.
        """
        cmd = [
            "gh",
            "release",
            "create",
            plan.tag,
            "--title",
            self.config.github.release_title.format(version=plan.version),
            "--notes",
            release_notes(plan.changelog_entry),
        ]
        try:
            subprocess.run(cmd, cwd=self.project_path, check=True, capture_output=True, text=True)
        except (FileNotFoundError, subprocess.CalledProcessError) as e:
            logger.warning(
                "GitHub CLI not available or failed (%s). Please create the release manually.", e
            )
            return False
        return True
