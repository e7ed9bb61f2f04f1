"""Công thức xác suất dương tính giả của Bloom filter."""
from __future__ import annotations

import math
import numbers

from bitbloom.errors import InvalidParameterError


def false_positive_probability(k: int, m: int, n_items: float) -> float:
    """p(x) = (1 - e^(-k*x/m))^k."""
    if k < 1 or m < 1:
        raise InvalidParameterError("k and m must be positive")
    if isinstance(n_items, bool) or not isinstance(n_items, numbers.Real):
        raise InvalidParameterError(f"element count must be a real number, got {n_items!r}")
    if math.isnan(n_items) or n_items < 0:
        raise InvalidParameterError(f"element count must be non-negative, got {n_items!r}")
    exponent = -k * float(n_items) / m
    return (1.0 - math.exp(exponent)) ** k
