"""Cache lookup failures.

Both are recoverable: callers fall through to a live fetch.
"""

from __future__ import annotations

from pathlib import Path

from objperms.exceptions.base import ObjPermsError


class CacheMiss(ObjPermsError):
    """Raised when a cache entry cannot be served."""

    def __init__(self, key: str, path: Path, message: str) -> None:
        super().__init__(message)
        self.key = key
        self.path = path


class CacheNotFoundError(CacheMiss, LookupError):
    """Raised when no cache file exists for a key."""

    def __init__(self, key: str, path: Path) -> None:
        super().__init__(key, path, f"No cache entry for {key} at {path}")


class CacheExpiredError(CacheMiss):
    """Raised when a cache file is older than the configured expiry."""

    def __init__(self, key: str, path: Path, age_days: int, expire_days: int) -> None:
        super().__init__(key, path, f"Cache entry {key} is {age_days} days old (expires after {expire_days})")
        self.age_days = age_days
        self.expire_days = expire_days
