"""Configuration-related exceptions."""

from __future__ import annotations

from objperms.exceptions.base import ObjPermsError


class ConfigError(ObjPermsError, ValueError):
    """Raised when configuration or credentials are invalid."""
