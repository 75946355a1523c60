"""bumper - release management from conventional commits."""

from __future__ import annotations

__version__ = "1.6.0"

__all__ = ["__version__"]
