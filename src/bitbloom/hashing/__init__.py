from bitbloom.hashing.murmur import murmur3_hash_32, murmur_hash2_32
from bitbloom.hashing.positions import (
    DEFAULT_HASHER,
    HASHERS,
    create_hashes,
    double_hash_positions,
    get_hasher,
)

__all__ = [
    "DEFAULT_HASHER",
    "HASHERS",
    "create_hashes",
    "double_hash_positions",
    "get_hasher",
    "murmur3_hash_32",
    "murmur_hash2_32",
]
