"""Config loading and validation for objperms runs."""

from __future__ import annotations

import difflib
from pathlib import Path
from typing import Any

import yaml

from objperms.config.model import ObjPermsConfig
from objperms.constants.cache import DEFAULT_CACHE_DIR, DEFAULT_CACHE_EXPIRE_DAYS
from objperms.constants.config import (
    ALLOWED_CONFIG_KEYS,
    CONFIG_FILENAME,
    DEFAULT_API_VERSION,
    DEFAULT_CREDENTIALS_DIR,
    DEFAULT_METADATA_MAX_WORKERS,
)
from objperms.constants.salesforce import DEFAULT_BULK_POLL_INTERVAL_SECONDS, DEFAULT_BULK_POLL_TIMEOUT_SECONDS
from objperms.exceptions import ConfigError


def load_config(config_path: Path | None = None, *, cwd: Path | None = None) -> ObjPermsConfig:
    """Load config from ``config.json`` in ``cwd`` or an explicit path.

    The file may be JSON or YAML. A missing default file yields defaults; a
    missing explicit file is an error.
    """
    path = config_path if config_path is not None else (cwd or Path.cwd()) / CONFIG_FILENAME
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return ObjPermsConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a mapping")

    unknown = sorted(set(raw) - ALLOWED_CONFIG_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config key(s): {', '.join(_describe_unknown(key) for key in unknown)}")

    cache_raw = _section(raw, "cache")
    credentials_raw = _section(raw, "credentials")
    bulk_raw = _section(raw, "bulk")
    metadata_raw = _section(raw, "metadata")
    salesforce_raw = _section(raw, "salesforce")

    return ObjPermsConfig(
        cache_dir=Path(_string(cache_raw.get("dir", DEFAULT_CACHE_DIR), "cache.dir")),
        cache_expire_days=_non_negative_int(cache_raw.get("expire", DEFAULT_CACHE_EXPIRE_DAYS), "cache.expire"),
        credentials_dir=Path(_string(credentials_raw.get("dir", str(DEFAULT_CREDENTIALS_DIR)), "credentials.dir")),
        bulk_poll_interval=_positive_number(
            bulk_raw.get("poll_interval", DEFAULT_BULK_POLL_INTERVAL_SECONDS), "bulk.poll_interval"
        ),
        bulk_poll_timeout=_positive_number(
            bulk_raw.get("poll_timeout", DEFAULT_BULK_POLL_TIMEOUT_SECONDS), "bulk.poll_timeout"
        ),
        metadata_max_workers=_positive_int(
            metadata_raw.get("max_workers", DEFAULT_METADATA_MAX_WORKERS), "metadata.max_workers"
        ),
        api_version=_api_version(salesforce_raw.get("api_version", DEFAULT_API_VERSION)),
    )


def _section(raw: dict[str, Any], key: str) -> dict[str, Any]:
    value = raw.get(key, {})
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key} must be a mapping")
    return value


def _describe_unknown(key: str) -> str:
    matches = difflib.get_close_matches(key, sorted(ALLOWED_CONFIG_KEYS), n=1)
    return f"{key} (did you mean {matches[0]}?)" if matches else key


def _string(value: Any, key_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{key_name} must be a non-empty string")
    return value


def _api_version(value: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{float(value):.1f}"
    return _string(value, "salesforce.api_version")


def _non_negative_int(value: Any, key_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"{key_name} must be a non-negative integer")
    return value


def _positive_int(value: Any, key_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{key_name} must be a positive integer")
    return value


def _positive_number(value: Any, key_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"{key_name} must be a positive number")
    return float(value)
