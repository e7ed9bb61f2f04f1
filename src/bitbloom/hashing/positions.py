"""Sinh k vị trí bit bằng double hashing (Kirsch–Mitzenmacher)."""
from __future__ import annotations

from typing import Callable, Dict

from bitbloom.errors import InvalidParameterError
from bitbloom.hashing.murmur import murmur3_hash_32, murmur_hash2_32

HashFn = Callable[[bytes, int], int]

DEFAULT_HASHER = "murmur2"

HASHERS: Dict[str, HashFn] = {
    "murmur2": murmur_hash2_32,
    "murmur3": murmur3_hash_32,
}


def get_hasher(name: str) -> HashFn:
    """Tra hàm băm theo tên trong HASHERS."""
    try:
        return HASHERS[name]
    except KeyError:
        raise InvalidParameterError(
            f"unknown hasher {name!r}, expected one of {sorted(HASHERS)}"
        ) from None


def double_hash_positions(h1: int, h2: int, k: int, m: int) -> list[int]:
    """Tính g_i = (h1 + i*h2) mod m cho i trong [0, k).

    h1, h2 là số không dấu và int của Python không tràn, nên mọi vị trí
    nằm trong [0, m) kể cả khi h1 hay h2 bằng 0x80000000.
    """
    if k < 1:
        raise InvalidParameterError("k must be positive")
    if m < 1:
        raise InvalidParameterError("m must be positive")
    return [(h1 + i * h2) % m for i in range(k)]


def create_hashes(data: bytes, k: int, m: int, hasher: str = DEFAULT_HASHER) -> list[int]:
    """Băm bytes hai lần (seed 0, rồi seed = h1) và suy ra k vị trí."""
    hash_fn = get_hasher(hasher)
    h1 = hash_fn(data, 0)
    h2 = hash_fn(data, h1)
    return double_hash_positions(h1, h2, k, m)
