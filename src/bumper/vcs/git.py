"""Git repository access via the ``git`` executable.

This is the commit-log source for the core: it only produces
``hash|subject|author|date`` lines and hands them to
:func:`bumper.core.commits.parse_log`.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from bumper.core.commits import LOG_SEPARATOR, Commit, parse_log
from bumper.exceptions import GitCommandError, GitError

logger = logging.getLogger(__name__)

LOG_FORMAT = f"--pretty=format:%H{LOG_SEPARATOR}%s{LOG_SEPARATOR}%an{LOG_SEPARATOR}%ad"


class GitRepository:
    """A git working tree."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path else Path.cwd()
        if not (self.path / ".git").exists():
            # Subdirectories and worktrees are still fine if git agrees.
            try:
                top = self._run("rev-parse", "--show-toplevel")
            except GitError as e:
                raise GitError(f"Not a git repository: {self.path}") from e
            self.path = Path(top)

    def _run(self, *args: str, check: bool = True) -> str:
        cmd = ["git", *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                cwd=self.path,
                capture_output=True,
                text=True,
                check=check,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise GitCommandError(
                f"git {args[0]} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e
        return result.stdout.strip()

    # Queries

    def get_latest_tag(self, pattern: str | None = None) -> str | None:
        """Return the most recent reachable tag, or None when there is none."""
        args = ["describe", "--tags", "--abbrev=0"]
        if pattern:
            args += ["--match", pattern]
        try:
            return self._run(*args) or None
        except GitCommandError:
            logger.debug("No tags found matching %s", pattern or "*")
            return None

    def get_log_lines(self, revision_range: str | None = None) -> list[str]:
        """Return raw log lines for a range, or for all history."""
        args = ["log", LOG_FORMAT, "--date=short"]
        if revision_range:
            args.append(revision_range)
        output = self._run(*args)
        return output.splitlines() if output else []

    def get_commits(self, revision_range: str | None = None) -> list[Commit]:
        """Parse the log for ``revision_range`` into commits, newest first.

        Args:
            revision_range: A git revision range such as ``v1.0.0..HEAD``;
                None reads the whole history

        Returns:
            Classified commits in ``git log`` order

        Raises:
            GitCommandError: If git rejects the range
        """
        return parse_log(self.get_log_lines(revision_range))

    def get_commits_since_tag(self, tag: str | None) -> list[Commit]:
        """Commits after ``tag``, or the whole history when ``tag`` is None."""
        return self.get_commits(f"{tag}..HEAD" if tag else None)

    def status(self) -> str:
        """Porcelain status output; empty when the tree is clean."""
        return self._run("status", "--porcelain")

    def is_dirty(self) -> bool:
        """True if there are staged, unstaged or untracked changes."""
        return bool(self.status())

    def current_branch(self) -> str:
        """Name of the checked-out branch, or ``""`` on a detached HEAD."""
        return self._run("branch", "--show-current")

    # Mutations

    def add_all(self) -> None:
        """Stage every change in the working tree."""
        self._run("add", "--all")

    def commit(self, message: str) -> None:
        """Commit the staged changes.

        Raises:
            GitCommandError: If there is nothing to commit or a hook fails
        """
        self._run("commit", "-m", message)

    def create_tag(self, name: str, message: str) -> None:
        """Create an annotated tag on HEAD.

        Raises:
            GitCommandError: If the tag already exists
        """
        self._run("tag", "-a", name, "-m", message)

    def push(self, remote: str, ref: str | None = None) -> None:
        """Push to ``remote``.

        Args:
            remote: Remote name, e.g. ``origin``
            ref: Branch or tag to push; None pushes the current branch
                with git's default push behavior

        Raises:
            GitCommandError: If the push is rejected
        """
        self._run("push", remote, *([ref] if ref else []))

    def rewrite_messages(self, msg_filter: Path, revision_range: str | None = None) -> None:
        """Rewrite commit messages with ``git filter-branch --msg-filter``."""
        args = ["filter-branch", "-f", "--msg-filter", str(msg_filter.resolve())]
        args += ["--", revision_range] if revision_range else ["--", "--all"]
        self._run(*args)
