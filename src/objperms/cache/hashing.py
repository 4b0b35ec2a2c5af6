"""32-bit FNV-1a hashing for cache keys."""

from __future__ import annotations

from objperms.constants.cache import FNV_32_MASK, FNV_32_OFFSET_BASIS, FNV_32_PRIME, HASH_HEX_LENGTH


def fnv1a_32(value: str) -> str:
    """Return the FNV-1a hash of ``value`` as zero-padded lowercase hex.

    The hash is taken over UTF-16 code units rather than UTF-8 bytes so that
    keys stay stable with caches written by earlier tooling. Characters
    outside the BMP contribute both surrogate halves; lone surrogates hash as
    their single code unit.
    """
    data = value.encode("utf-16-le", "surrogatepass")
    hval = FNV_32_OFFSET_BASIS
    for index in range(0, len(data), 2):
        hval ^= data[index] | (data[index + 1] << 8)
        hval = (hval * FNV_32_PRIME) & FNV_32_MASK
    return f"{hval:0{HASH_HEX_LENGTH}x}"
