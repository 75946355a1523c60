"""Configuration management for bumper."""

from __future__ import annotations

from bumper.config.loader import load_config
from bumper.config.models import (
    BumperConfig,
    ChangelogConfig,
    CommitsConfig,
    GitHubConfig,
    PublishConfig,
    VersionConfig,
)

__all__ = [
    "BumperConfig",
    "ChangelogConfig",
    "CommitsConfig",
    "GitHubConfig",
    "PublishConfig",
    "VersionConfig",
    "load_config",
]
