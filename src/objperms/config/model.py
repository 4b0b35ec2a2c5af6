"""Config data model for objperms runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from objperms.constants.cache import DEFAULT_CACHE_DIR, DEFAULT_CACHE_EXPIRE_DAYS
from objperms.constants.config import DEFAULT_API_VERSION, DEFAULT_CREDENTIALS_DIR, DEFAULT_METADATA_MAX_WORKERS
from objperms.constants.salesforce import DEFAULT_BULK_POLL_INTERVAL_SECONDS, DEFAULT_BULK_POLL_TIMEOUT_SECONDS


@dataclass(frozen=True)
class ObjPermsConfig:
    """Resolved run configuration."""

    cache_dir: Path = field(default_factory=lambda: Path(DEFAULT_CACHE_DIR))
    cache_expire_days: int = DEFAULT_CACHE_EXPIRE_DAYS
    credentials_dir: Path = DEFAULT_CREDENTIALS_DIR
    bulk_poll_interval: float = DEFAULT_BULK_POLL_INTERVAL_SECONDS
    bulk_poll_timeout: float = DEFAULT_BULK_POLL_TIMEOUT_SECONDS
    metadata_max_workers: int = DEFAULT_METADATA_MAX_WORKERS
    api_version: str = DEFAULT_API_VERSION
