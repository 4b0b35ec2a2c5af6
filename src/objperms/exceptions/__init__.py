"""Shared exception hierarchy for objperms."""

from __future__ import annotations

from .base import ObjPermsError
from .cache import CacheExpiredError, CacheMiss, CacheNotFoundError
from .config import ConfigError
from .reporting import OutputExistsError
from .salesforce import BulkQueryTimeoutError, QueryError, SalesforceConnectionError

__all__ = [
    "BulkQueryTimeoutError",
    "CacheExpiredError",
    "CacheMiss",
    "CacheNotFoundError",
    "ConfigError",
    "ObjPermsError",
    "OutputExistsError",
    "QueryError",
    "SalesforceConnectionError",
]
