"""Configuration defaults and filenames."""

from __future__ import annotations

from pathlib import Path

CONFIG_FILENAME: str = "config.json"

DEFAULT_CREDENTIALS_DIR: Path = Path("~/.solenopsis/credentials")
CREDENTIALS_FILE_SUFFIX: str = ".properties"
CREDENTIALS_REQUIRED_KEYS: tuple[str, ...] = ("username", "password", "url")

DEFAULT_API_VERSION: str = "59.0"
DEFAULT_METADATA_MAX_WORKERS: int = 8

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset({"cache", "credentials", "bulk", "metadata", "salesforce"})
