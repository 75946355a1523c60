"""Shared test fixtures."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from bumper.core.commits import Commit, parse_commit

PYPROJECT = """\
[project]
name = "test-project"
version = "1.0.0"

[tool.bumper]
default_branch = "main"
"""


@pytest.fixture
def feat_commit() -> Commit:
    return parse_commit("feat1234abcd", "feat: add user authentication", "Alice", "2024-01-03")


@pytest.fixture
def fix_commit() -> Commit:
    return parse_commit("fix5678abcd", "fix(core): handle null response", "Bob", "2024-01-02")


@pytest.fixture
def breaking_commit() -> Commit:
    return parse_commit("brk9012abcd", "feat(api)!: change api", "Alice", "2024-01-01")


@pytest.fixture
def sample_commits() -> list[Commit]:
    """A small mixed history, newest first like ``git log``."""
    return [
        parse_commit("a1b2c3d4e5", "feat: add login page", "Alice", "2024-01-05"),
        parse_commit("b2c3d4e5f6", "fix(auth): reject expired tokens", "Bob", "2024-01-04"),
        parse_commit("c3d4e5f6a7", "docs: update readme", "Alice", "2024-01-03"),
        parse_commit("d4e5f6a7b8", "chore: bump deps", "Carol", "2024-01-02"),
        parse_commit("e5f6a7b8c9", "feat(api)!: drop v1 endpoints", "Bob", "2024-01-01"),
    ]


@pytest.fixture
def temp_project(tmp_path: Path) -> Path:
    """A directory with a pyproject.toml (not a git repository)."""
    (tmp_path / "pyproject.toml").write_text(PYPROJECT)
    return tmp_path


def _git(path: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=path, check=True, capture_output=True, text=True)


@pytest.fixture
def temp_git_repo_with_pyproject(temp_project: Path) -> Path:
    """A git repository with a pyproject.toml and a few commits."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    _git(temp_project, "init", "-q", "-b", "main")
    _git(temp_project, "config", "user.name", "Test User")
    _git(temp_project, "config", "user.email", "test@example.com")
    _git(temp_project, "config", "commit.gpgsign", "false")
    _git(temp_project, "config", "tag.gpgsign", "false")
    _git(temp_project, "add", ".")
    _git(temp_project, "commit", "-q", "-m", "chore: initial commit")
    _git(temp_project, "tag", "v1.0.0")

    for name, message in [
        ("a.txt", "feat(api): add search endpoint"),
        ("b.txt", "fix: handle empty query"),
        ("c.txt", "Update the readme"),
    ]:
        (temp_project / name).write_text(name)
        _git(temp_project, "add", name)
        _git(temp_project, "commit", "-q", "-m", message)

    return temp_project
