"""Base exception for objperms."""

from __future__ import annotations


class ObjPermsError(Exception):
    """Base class for all errors raised by objperms."""
