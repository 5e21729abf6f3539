"""Additional 32-bit string hashes: Hsieh's SuperFastHash and MurmurHash3.

Both take a bytes-like key (``str`` is encoded as UTF-8) and return an
unsigned 32-bit integer. Multi-byte reads are little-endian.
"""

from __future__ import annotations

from snihash.hashes import Key, _as_bytes

_MASK = 0xFFFFFFFF
_SFH_SEED = 0xCAFEBABE
_MUR_SEED = 0xF88D5353
_MUR_C1 = 0xCC9E2D51
_MUR_C2 = 0x1B873593

__all__ = ["hash_sfh", "hash_mur"]


def _get16(data: bytes, offset: int) -> int:
    return data[offset] | (data[offset + 1] << 8)


def _rotl32(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (32 - shift))) & _MASK


def _fmix32(h: int) -> int:
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & _MASK
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & _MASK
    h ^= h >> 16
    return h


def hash_sfh(key: Key) -> int:
    """Paul Hsieh's SuperFastHash."""
    data = _as_bytes(key)
    hashv = _SFH_SEED
    whole = len(data) - len(data) % 4

    for offset in range(0, whole, 4):
        hashv = (hashv + _get16(data, offset)) & _MASK
        tmp = ((_get16(data, offset + 2) << 11) ^ hashv) & _MASK
        hashv = ((hashv << 16) ^ tmp) & _MASK
        hashv = (hashv + (hashv >> 11)) & _MASK

    tail = data[whole:]
    if len(tail) == 3:
        hashv = (hashv + _get16(tail, 0)) & _MASK
        hashv ^= (hashv << 16) & _MASK
        hashv ^= (tail[2] << 18) & _MASK
        hashv = (hashv + (hashv >> 11)) & _MASK
    elif len(tail) == 2:
        hashv = (hashv + _get16(tail, 0)) & _MASK
        hashv ^= (hashv << 11) & _MASK
        hashv = (hashv + (hashv >> 17)) & _MASK
    elif len(tail) == 1:
        hashv = (hashv + tail[0]) & _MASK
        hashv ^= (hashv << 10) & _MASK
        hashv = (hashv + (hashv >> 1)) & _MASK

    # Force avalanching of the final bits.
    hashv ^= (hashv << 3) & _MASK
    hashv = (hashv + (hashv >> 5)) & _MASK
    hashv ^= (hashv << 4) & _MASK
    hashv = (hashv + (hashv >> 17)) & _MASK
    hashv ^= (hashv << 25) & _MASK
    hashv = (hashv + (hashv >> 6)) & _MASK
    return hashv


def _mur_scramble(k1: int) -> int:
    k1 = (k1 * _MUR_C1) & _MASK
    k1 = _rotl32(k1, 15)
    return (k1 * _MUR_C2) & _MASK


def hash_mur(key: Key) -> int:
    """MurmurHash3 (x86, 32-bit) with a fixed seed."""
    data = _as_bytes(key)
    h1 = _MUR_SEED
    whole = len(data) - len(data) % 4

    for offset in range(0, whole, 4):
        k1 = int.from_bytes(data[offset:offset + 4], "little")
        h1 ^= _mur_scramble(k1)
        h1 = _rotl32(h1, 13)
        h1 = (h1 * 5 + 0xE6546B64) & _MASK

    tail = data[whole:]
    if tail:
        h1 ^= _mur_scramble(int.from_bytes(tail, "little"))

    h1 ^= len(data) & _MASK
    return _fmix32(h1)