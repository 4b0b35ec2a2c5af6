"""Configuration loading and normalization for objperms runs."""

from __future__ import annotations

from objperms.config.loader import load_config
from objperms.config.model import ObjPermsConfig

__all__ = ["ObjPermsConfig", "load_config"]
