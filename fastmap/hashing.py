"""Seeded 64-bit hash functions used to place keys in tables."""

from __future__ import annotations

import hashlib
import secrets

__all__ = [
    "MASK64",
    "make_seed",
    "hash_uint64",
    "hash_uint32",
    "hash_string",
    "hash_int",
]

MASK64 = (1 << 64) - 1
_MASK32 = (1 << 32) - 1
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

# secret[8:] ^ secret[16:] and prime_MX2 of the xxh3 short-input path
_K0 = 0x1CAD21F72C81017C ^ 0xDB979083E96DD4DE
_K1 = 0x9FB21C651E98DF25


def _rotl64(v: int, n: int) -> int:
    return ((v << n) | (v >> (64 - n))) & MASK64


def _require_range(name: str, value: int, limit: int) -> None:
    if not 0 <= value <= limit:
        raise ValueError(f"{name} {value!r} is out of range [0, {limit:#x}]")


def make_seed() -> int:
    """Return a random 64-bit seed read from the system's secure source."""
    return int.from_bytes(secrets.token_bytes(8), "little")


def _avalanche(h: int, length: int) -> int:
    h ^= _rotl64(h, 49) ^ _rotl64(h, 24)
    h = (h * _K1) & MASK64
    h ^= (h >> 35) + length
    h = (h * _K1) & MASK64
    h ^= h >> 28
    return h


def hash_uint64(v: int, seed: int) -> int:
    """Hash a 64-bit unsigned integer with the given seed.

    The seed is used as is, on the assumption that it is truly random.
    """
    _require_range("value", v, MASK64)
    _require_range("seed", seed, MASK64)
    h = ((_K0 - seed) & MASK64) ^ _rotl64(v, 32)
    return _avalanche(h, 8)


def hash_uint32(v: int, seed: int) -> int:
    """Hash a 32-bit unsigned integer with the given seed."""
    _require_range("value", v, _MASK32)
    _require_range("seed", seed, MASK64)
    h = ((_K0 - seed) & MASK64) ^ (v | (v << 32))
    return _avalanche(h, 4)


def hash_string(key: str, seed: int) -> int:
    """Hash a string with the given seed to a 64-bit unsigned integer."""
    _require_range("seed", seed, MASK64)
    digest = hashlib.blake2b(
        key.encode("utf-8"),
        digest_size=8,
        key=seed.to_bytes(8, "little"),
    ).digest()
    return int.from_bytes(digest, "little")


def hash_int(key: int, seed: int) -> int:
    """Hash a signed 64-bit integer key; negative keys wrap as two's complement."""
    if not _INT64_MIN <= key <= _INT64_MAX:
        raise OverflowError(f"key {key!r} does not fit in 64 bits")
    return hash_uint64(key & MASK64, seed)