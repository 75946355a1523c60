"""Read and bump the project version in pyproject.toml.

The file is edited with targeted regex replacements so formatting and
comments survive; the TOML is never re-serialized.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from bumper.config.loader import find_pyproject_toml
from bumper.exceptions import ProjectError, VersionNotFoundError

logger = logging.getLogger(__name__)

# Sections that may declare the version, in lookup order.
VERSION_SECTIONS = ("project", "tool.poetry")

_VERSION_LINE = re.compile(r'^(version\s*=\s*)["\']([^"\']+)["\']', re.MULTILINE)
_DUNDER_VERSION = re.compile(r'^(__version__\s*=\s*)["\']([^"\']+)["\']', re.MULTILINE)


def _resolve(path: Path | None) -> Path:
    if path is None:
        return find_pyproject_toml()
    if path.is_dir():
        return find_pyproject_toml(path)
    return path


def _section_pattern(section: str) -> re.Pattern[str]:
    # From the section header up to the next header or end of file.
    return re.compile(rf"^\[{re.escape(section)}\][^\n]*\n.*?(?=^\[|\Z)", re.MULTILINE | re.DOTALL)


def get_pyproject_version(path: Path | None = None) -> str:
    """Return the declared version from ``[project]`` or ``[tool.poetry]``.

    Args:
        path: pyproject.toml, or a directory to search from

    Raises:
        VersionNotFoundError: If neither section declares a version
    """
    pyproject_path = _resolve(path)
    content = pyproject_path.read_text(encoding="utf-8")

    for section in VERSION_SECTIONS:
        block = _section_pattern(section).search(content)
        if block:
            match = _VERSION_LINE.search(block.group(0))
            if match:
                return match.group(2)

    raise VersionNotFoundError(
        f"Could not find version in {pyproject_path}. "
        "Expected [project].version or [tool.poetry].version."
    )


def update_pyproject_version(path: Path | None, new_version: str) -> Path:
    """Overwrite the declared version.

    Returns:
        The path of the updated file

    Raises:
        VersionNotFoundError: If no version declaration exists
        ProjectError: If the file already declares ``new_version``
    """
    pyproject_path = _resolve(path)
    content = pyproject_path.read_text(encoding="utf-8")

    for section in VERSION_SECTIONS:
        block = _section_pattern(section).search(content)
        if not block or not _VERSION_LINE.search(block.group(0)):
            continue
        new_block = _VERSION_LINE.sub(rf'\g<1>"{new_version}"', block.group(0), count=1)
        if new_block == block.group(0):
            raise ProjectError(
                f"Version in {pyproject_path} was not updated. It may already be {new_version}."
            )
        pyproject_path.write_text(
            content[: block.start()] + new_block + content[block.end() :], encoding="utf-8"
        )
        logger.debug("Set [%s].version = %s in %s", section, new_version, pyproject_path)
        return pyproject_path

    raise VersionNotFoundError(
        f"Could not find version to update in {pyproject_path}. "
        "Expected [project].version or [tool.poetry].version."
    )


def update_version_file(file_path: Path, new_version: str) -> None:
    """Rewrite ``__version__ = "..."`` in a Python module.

    Raises:
        ProjectError: If the file does not exist
        VersionNotFoundError: If it has no ``__version__`` assignment
    """
    if not file_path.is_file():
        raise ProjectError(f"Version file not found: {file_path}")

    content = file_path.read_text(encoding="utf-8")
    new_content, count = _DUNDER_VERSION.subn(rf'\g<1>"{new_version}"', content, count=1)
    if count == 0:
        raise VersionNotFoundError(f"Could not find __version__ in {file_path}")
    file_path.write_text(new_content, encoding="utf-8")
