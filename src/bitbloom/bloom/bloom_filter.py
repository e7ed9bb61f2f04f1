"""Bloom filter: kiểm tra thành viên xác suất, không có âm tính giả."""
from __future__ import annotations

import logging
from typing import Any, Iterable

from bitarray import bitarray, frozenbitarray

from bitbloom.bloom.bloom_params import BloomParams
from bitbloom.bloom.probability import false_positive_probability
from bitbloom.errors import UndefinedEstimateError
from bitbloom.hashing.positions import DEFAULT_HASHER, create_hashes, get_hasher
from bitbloom.types.element_types import element_to_bytes

logger = logging.getLogger(__name__)


class BloomFilter:
    """
    Bloom filter kích thước cố định:
    - k, m suy ra từ FPR mục tiêu và số phần tử kỳ vọng (BloomParams)
    - k vị trí bit từ 2 lần băm 32-bit (double hashing)
    - Bộ đếm chèn tăng mỗi lần add, kể cả phần tử trùng lặp
    - Không khóa: một chủ sở hữu, một luồng (xem SynchronizedBloomFilter)
    """

    def __init__(
        self,
        false_positive_probability: float,
        expected_num_elems: int,
        hasher: str = DEFAULT_HASHER,
    ) -> None:
        get_hasher(hasher)
        self._params = BloomParams.for_target(false_positive_probability, expected_num_elems)
        self._hasher = hasher
        self._m = self._params.m_bits
        self._k = self._params.k_hash
        self._bits = bitarray(self._m)
        self._bits.setall(0)
        self._inserted = 0

        logger.debug(
            "BloomFilter init: m=%d bits (~%.1f KB), k=%d, expected_n=%d, target_fpr=%.4g, hasher=%s",
            self._m,
            self._m / 8 / 1024,
            self._k,
            self._params.expected_items,
            self._params.target_fpr,
            hasher,
        )

    @property
    def params(self) -> BloomParams:
        return self._params

    @property
    def hasher(self) -> str:
        return self._hasher

    def create_hashes(self, data: bytes, hashes: int) -> list[int]:
        """Sinh `hashes` vị trí bit trong [0, m) cho bytes thô."""
        return create_hashes(data, hashes, self._m, self._hasher)

    def positions(self, element: Any) -> list[int]:
        """k vị trí bit mà add/contains dùng cho phần tử."""
        return self.create_hashes(element_to_bytes(element), self._k)

    def add(self, element: Any) -> None:
        """Thêm phần tử (đặt k bit) và tăng bộ đếm."""
        for pos in self.positions(element):
            self._bits[pos] = 1
        self._inserted += 1

    def add_all(self, elements: Iterable[Any]) -> None:
        """Thêm nhiều phần tử tuần tự."""
        for element in elements:
            self.add(element)

    def contains(self, element: Any) -> bool:
        """False: chắc chắn chưa thêm; True: có thể đã thêm (có FPR)."""
        bits = self._bits
        return all(bits[pos] for pos in self.positions(element))

    def __contains__(self, element: Any) -> bool:
        return self.contains(element)

    def clear(self) -> None:
        """Xóa toàn bộ bit và đặt lại bộ đếm."""
        self._bits.setall(0)
        self._inserted = 0
        logger.debug("BloomFilter cleared (m=%d)", self._m)

    def size(self) -> int:
        return self._m

    def count(self) -> int:
        """Số lần add (đếm logic, không khử trùng lặp)."""
        return self._inserted

    def __len__(self) -> int:
        return self._inserted

    def hash_rounds(self) -> int:
        return self._k

    def expected_num_elems(self) -> int:
        return self._params.expected_items

    def target_false_positive_probability(self) -> float:
        return self._params.target_fpr

    def bit_count(self) -> int:
        """Số bit đang bật."""
        return self._bits.count(1)

    def fill_ratio(self) -> float:
        return self.bit_count() / self._m

    def bitset(self) -> frozenbitarray:
        """Bản chụp bất biến của mảng bit."""
        return frozenbitarray(self._bits)

    # Ước lượng xác suất
    def false_positive_probability(self, n_items: float) -> float:
        return false_positive_probability(self._k, self._m, n_items)

    def expected_false_positive_probability(self) -> float:
        """FPR lý thuyết tại số phần tử kỳ vọng."""
        return self.false_positive_probability(self._params.expected_items)

    def current_false_positive_probability(self) -> float:
        """FPR lý thuyết tại số phần tử đã thêm; lỗi nếu filter rỗng."""
        if self._inserted == 0:
            raise UndefinedEstimateError("no elements added yet")
        return self.false_positive_probability(self._inserted)

    def expected_bits_per_element(self) -> float:
        return self._params.bits_per_elem

    def current_bits_per_element(self) -> float:
        """m / count; lỗi nếu filter rỗng."""
        if self._inserted == 0:
            raise UndefinedEstimateError("bits per element is undefined for an empty filter")
        return self._m / self._inserted

    def estimate_fpr(self) -> float:
        """Estimate FPR dựa trên độ bão hòa thực tế (tỉ lệ bit 1)^k."""
        if self._inserted == 0:
            return 0.0
        return self.fill_ratio() ** self._k

    def __repr__(self) -> str:
        return (
            f"BloomFilter(m={self._m:,} bits, k={self._k}, "
            f"inserted={self._inserted:,}, target_fpr={self._params.target_fpr:.2%}, "
            f"hasher={self._hasher!r})"
        )
