"""Version control integration."""

from __future__ import annotations

from bumper.vcs.git import GitRepository

__all__ = ["GitRepository"]
