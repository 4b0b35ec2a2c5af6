"""Cache layout, hashing and expiry defaults."""

from __future__ import annotations

FNV_32_OFFSET_BASIS: int = 0x811C9DC5
FNV_32_PRIME: int = 0x01000193
FNV_32_MASK: int = 0xFFFFFFFF
HASH_HEX_LENGTH: int = 8

CACHE_FILE_SUFFIX: str = ".json"
CACHE_TEMP_PREFIX: str = ".cache-tmp-"
CACHE_TEMP_SUFFIX: str = ".json"

DEFAULT_CACHE_DIR: str = ".cache"
DEFAULT_CACHE_EXPIRE_DAYS: int = 1

SECONDS_PER_DAY: int = 24 * 60 * 60

METADATA_LIST_KEY_PREFIX: str = "metadataList"
