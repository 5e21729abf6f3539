"""32-bit string hash functions for bucketing byte keys.

Every function takes a bytes-like key (``str`` is encoded as UTF-8) and
returns an unsigned 32-bit integer.
"""

from __future__ import annotations

from typing import Union

Key = Union[bytes, bytearray, memoryview, str]

_MASK = 0xFFFFFFFF
_JEN_GOLDEN = 0x9E3779B9
_JEN_SEED = 0xFEEDBEEF
_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619

__all__ = ["hash_jen", "hash_ber", "hash_sax", "hash_fnv", "hash_oat"]


def _as_bytes(key: Key) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes(key)
    raise TypeError(f"hash key must be bytes-like or str, not {type(key).__name__}")


def _le32(chunk: bytes) -> int:
    return int.from_bytes(chunk, "little")


def _jen_mix(a: int, b: int, c: int) -> tuple[int, int, int]:
    a = (a - b - c) & _MASK
    a ^= c >> 13
    b = (b - c - a) & _MASK
    b ^= (a << 8) & _MASK
    c = (c - a - b) & _MASK
    c ^= b >> 13
    a = (a - b - c) & _MASK
    a ^= c >> 12
    b = (b - c - a) & _MASK
    b ^= (a << 16) & _MASK
    c = (c - a - b) & _MASK
    c ^= b >> 5
    a = (a - b - c) & _MASK
    a ^= c >> 3
    b = (b - c - a) & _MASK
    b ^= (a << 10) & _MASK
    c = (c - a - b) & _MASK
    c ^= b >> 15
    return a, b, c


def hash_jen(key: Key) -> int:
    """Bob Jenkins' lookup2 hash, the default bucketing hash."""
    data = _as_bytes(key)
    i = j = _JEN_GOLDEN
    hashv = _JEN_SEED
    whole = len(data) - len(data) % 12
    for offset in range(0, whole, 12):
        i = (i + _le32(data[offset:offset + 4])) & _MASK
        j = (j + _le32(data[offset + 4:offset + 8])) & _MASK
        hashv = (hashv + _le32(data[offset + 8:offset + 12])) & _MASK
        i, j, hashv = _jen_mix(i, j, hashv)

    tail = data[whole:]
    hashv = (hashv + (len(data) & _MASK)) & _MASK
    # The last word's low byte is reserved for the length.
    hashv = (hashv + (_le32(tail[8:11]) << 8)) & _MASK
    j = (j + _le32(tail[4:8])) & _MASK
    i = (i + _le32(tail[0:4])) & _MASK
    _, _, hashv = _jen_mix(i, j, hashv)
    return hashv


def hash_ber(key: Key) -> int:
    """Bernstein hash: ``h = h * 33 + byte``."""
    hashv = 0
    for byte in _as_bytes(key):
        hashv = (hashv * 33 + byte) & _MASK
    return hashv


def hash_sax(key: Key) -> int:
    """Shift-add-xor hash."""
    hashv = 0
    for byte in _as_bytes(key):
        hashv ^= (((hashv << 5) & _MASK) + (hashv >> 2) + byte) & _MASK
    return hashv


def hash_fnv(key: Key) -> int:
    """FNV-1a hash."""
    hashv = _FNV_OFFSET
    for byte in _as_bytes(key):
        hashv = ((hashv ^ byte) * _FNV_PRIME) & _MASK
    return hashv


def hash_oat(key: Key) -> int:
    """Jenkins one-at-a-time hash."""
    hashv = 0
    for byte in _as_bytes(key):
        hashv = (hashv + byte) & _MASK
        hashv = (hashv + (hashv << 10)) & _MASK
        hashv ^= hashv >> 6
    hashv = (hashv + (hashv << 3)) & _MASK
    hashv ^= hashv >> 11
    hashv = (hashv + (hashv << 15)) & _MASK
    return hashv