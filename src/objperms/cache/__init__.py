"""File-backed response cache keyed by FNV-1a hashes."""

from .hashing import fnv1a_32
from .store import ContentCache

__all__ = ["ContentCache", "fnv1a_32"]
