"""Bọc BloomFilter bằng RLock để dùng chung giữa nhiều luồng."""
from __future__ import annotations

import threading
from typing import Any, Iterable

from bitarray import frozenbitarray

from bitbloom.bloom.bloom_filter import BloomFilter


class SynchronizedBloomFilter:
    def __init__(self, bloom: BloomFilter) -> None:
        """Mọi thao tác đọc/ghi đều đi qua một lock duy nhất."""
        self._bloom = bloom
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def add(self, element: Any) -> None:
        with self._lock:
            self._bloom.add(element)

    def add_all(self, elements: Iterable[Any]) -> None:
        """Thêm cả lô dưới một lần giữ lock."""
        with self._lock:
            self._bloom.add_all(elements)

    def contains(self, element: Any) -> bool:
        with self._lock:
            return self._bloom.contains(element)

    def __contains__(self, element: Any) -> bool:
        return self.contains(element)

    def clear(self) -> None:
        """Bit và bộ đếm được xóa cùng nhau dưới lock."""
        with self._lock:
            self._bloom.clear()

    def size(self) -> int:
        with self._lock:
            return self._bloom.size()

    def count(self) -> int:
        with self._lock:
            return self._bloom.count()

    def __len__(self) -> int:
        return self.count()

    def hash_rounds(self) -> int:
        with self._lock:
            return self._bloom.hash_rounds()

    def bitset(self) -> frozenbitarray:
        with self._lock:
            return self._bloom.bitset()

    def expected_false_positive_probability(self) -> float:
        with self._lock:
            return self._bloom.expected_false_positive_probability()

    def current_false_positive_probability(self) -> float:
        with self._lock:
            return self._bloom.current_false_positive_probability()

    def expected_bits_per_element(self) -> float:
        with self._lock:
            return self._bloom.expected_bits_per_element()

    def current_bits_per_element(self) -> float:
        with self._lock:
            return self._bloom.current_bits_per_element()

    def estimate_fpr(self) -> float:
        with self._lock:
            return self._bloom.estimate_fpr()

    def __repr__(self) -> str:
        with self._lock:
            return f"Synchronized{self._bloom!r}"
