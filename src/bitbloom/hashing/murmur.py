"""Hàm băm 32-bit không mật mã dùng cho Bloom filter.

MurmurHash2 được viết tay vì thư viện mmh3 chỉ có MurmurHash3; mọi phép
tính được rút gọn modulo 2^32 nên kết quả luôn là số không dấu.
"""
from __future__ import annotations

import struct

import mmh3

MASK_32 = 0xFFFFFFFF
MURMUR2_M = 0x5BD1E995
MURMUR2_R = 24


def murmur_hash2_32(data: bytes, seed: int = 0) -> int:
    """MurmurHash2 32-bit (little-endian), trả về số nguyên trong [0, 2^32)."""
    length = len(data)
    h = ((seed & MASK_32) ^ length) & MASK_32

    body_len = length & ~3
    for (k,) in struct.iter_unpack("<I", data[:body_len]):
        k = (k * MURMUR2_M) & MASK_32
        k ^= k >> MURMUR2_R
        k = (k * MURMUR2_M) & MASK_32
        h = (h * MURMUR2_M) & MASK_32
        h ^= k

    tail = data[body_len:]
    if tail:
        for shift, byte in enumerate(tail):
            h ^= byte << (8 * shift)
        h = (h * MURMUR2_M) & MASK_32

    h ^= h >> 13
    h = (h * MURMUR2_M) & MASK_32
    h ^= h >> 15
    return h


def murmur3_hash_32(data: bytes, seed: int = 0) -> int:
    """MurmurHash3 x86 32-bit qua mmh3 (không dấu)."""
    return mmh3.hash(data, seed & MASK_32, signed=False)
