"""Hash-keyed JSON cache with day-based expiry."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from objperms.cache.hashing import fnv1a_32
from objperms.constants.cache import CACHE_FILE_SUFFIX, CACHE_TEMP_PREFIX, CACHE_TEMP_SUFFIX, SECONDS_PER_DAY
from objperms.exceptions import CacheExpiredError, CacheMiss, CacheNotFoundError
from objperms.io import load_json_file, write_json_atomic
from objperms.types import JsonValue

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ContentCache:
    """Memoizes API responses as ``{directory}/{hash}.json`` files.

    Entries are never deleted. A file whose modification time is more than
    ``expire_days`` whole days old is reported as expired and is overwritten
    by the next write for the same key.
    """

    def __init__(
        self,
        directory: Path,
        expire_days: int,
        *,
        enabled: bool = True,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.directory = directory
        self.expire_days = expire_days
        self.enabled = enabled
        self._clock = clock

    @staticmethod
    def hash(value: str) -> str:
        """Return the cache key for a logical request key."""
        return fnv1a_32(value)

    def path_for(self, key: str) -> Path:
        """Return the cache file path for a hashed key."""
        return self.directory / f"{key}{CACHE_FILE_SUFFIX}"

    def age_days(self, path: Path) -> int:
        """Return the whole-day age of ``path`` from its modification time."""
        elapsed = self._clock() - path.stat().st_mtime
        return int(elapsed / SECONDS_PER_DAY)

    def read(self, key: str) -> JsonValue:
        """Return cached data for ``key``.

        Raises:
            CacheNotFoundError: no file exists for the key.
            CacheExpiredError: the file is older than ``expire_days``.
            CacheMiss: the file could not be parsed.
        """
        path = self.path_for(key)
        if not self.enabled or not path.is_file():
            raise CacheNotFoundError(key, path)

        age = self.age_days(path)
        if age > self.expire_days:
            raise CacheExpiredError(key, path, age, self.expire_days)

        try:
            return load_json_file(path)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable cache file %s (%s)", path, exc)
            raise CacheMiss(key, path, f"Unreadable cache entry {key}: {exc}") from exc

    def write(self, key: str, data: T) -> T:
        """Persist ``data`` under ``key`` and return it unchanged."""
        if not self.enabled:
            return data

        write_json_atomic(
            path=self.path_for(key),
            payload=data,
            temp_prefix=CACHE_TEMP_PREFIX,
            temp_suffix=CACHE_TEMP_SUFFIX,
        )
        return data

    def fetch(self, logical_key: str, loader: Callable[[], T]) -> T:
        """Return the cached value for ``logical_key``, loading and storing it on a miss."""
        key = self.hash(logical_key)
        try:
            cached = self.read(key)
        except CacheMiss as exc:
            logger.debug("Cache miss for %r: %s", logical_key, exc)
        else:
            logger.debug("Cache hit for %r (%s)", logical_key, key)
            return cached  # type: ignore[return-value]

        return self.write(key, loader())
