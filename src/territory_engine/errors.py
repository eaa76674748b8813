"""Exceptions raised at the engine's call boundaries."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a computation is requested with invalid parameters."""
