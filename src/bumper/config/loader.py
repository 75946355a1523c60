"""Configuration loading from pyproject.toml.

The ``[tool.bumper]`` table is optional; every setting has a default.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from bumper.config.models import BumperConfig
from bumper.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

PYPROJECT = "pyproject.toml"
TOOL_KEY = "bumper"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml in ``start`` or any of its parents.

    Args:
        start: Directory to search from (defaults to the current directory)

    Returns:
        Path to the nearest pyproject.toml

    Raises:
        ConfigNotFoundError: If no pyproject.toml exists up to the filesystem root
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / PYPROJECT
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"No {PYPROJECT} found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"{path} does not exist")
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_bumper_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.bumper]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_KEY, {})


def load_config(path: Path | None = None) -> BumperConfig:
    """Load the bumper configuration for the project at ``path``.

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
        ConfigValidationError: If the ``[tool.bumper]`` table is invalid
    """
    pyproject_path = find_pyproject_toml(path)
    raw = extract_bumper_config(load_pyproject_toml(pyproject_path))
    if not raw:
        logger.debug("No [tool.%s] table in %s, using defaults", TOOL_KEY, pyproject_path)
    try:
        return BumperConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid [tool.{TOOL_KEY}] configuration:\n{e}") from e
