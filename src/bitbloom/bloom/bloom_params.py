"""Tiện ích tham số Bloom filter."""
from __future__ import annotations

import math
import numbers
from dataclasses import dataclass

from bitbloom.errors import InvalidParameterError


def validate_probability(p: float) -> float:
    """Kiểm tra p là số thực trong khoảng mở (0, 1)."""
    if isinstance(p, bool) or not isinstance(p, numbers.Real):
        raise InvalidParameterError(f"false positive probability must be a real number, got {p!r}")
    p = float(p)
    if math.isnan(p) or not (0.0 < p < 1.0):
        raise InvalidParameterError(f"false positive probability must be in (0,1), got {p!r}")
    return p


def validate_expected_items(n: int) -> int:
    """Kiểm tra số phần tử kỳ vọng là số nguyên dương."""
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise InvalidParameterError(f"expected_items must be an integer, got {n!r}")
    if n <= 0:
        raise InvalidParameterError(f"expected_items must be positive, got {n!r}")
    return int(n)


@dataclass(frozen=True)
class BloomParams:
    k_hash: int
    m_bits: int
    bits_per_elem: float
    expected_items: int
    target_fpr: float

    @staticmethod
    def optimal_hash_count(target_fpr: float) -> int:
        """k = ceil(-log2 p); log2 cho kết quả đúng tuyệt đối khi p là lũy thừa của 2."""
        return max(1, math.ceil(-math.log2(validate_probability(target_fpr))))

    @staticmethod
    def for_target(target_fpr: float, expected_items: int) -> "BloomParams":
        """Tính k, m và số bit/phần tử cho FPR mục tiêu và số phần tử kỳ vọng."""
        p = validate_probability(target_fpr)
        n = validate_expected_items(expected_items)

        k = BloomParams.optimal_hash_count(p)
        bits_per_elem = k / math.log(2)
        m_bits = max(1, math.ceil(bits_per_elem * n))
        return BloomParams(
            k_hash=k,
            m_bits=m_bits,
            bits_per_elem=bits_per_elem,
            expected_items=n,
            target_fpr=p,
        )
