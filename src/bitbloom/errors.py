"""Các lỗi của Bloom filter (đều có thể bắt lại, không làm sập tiến trình)."""
from __future__ import annotations


class BloomFilterError(Exception):
    """Lỗi gốc cho mọi lỗi của bitbloom."""


class InvalidParameterError(BloomFilterError, ValueError):
    """Tham số kích thước/xác suất không hợp lệ."""


class InvalidElementError(BloomFilterError, TypeError):
    """Phần tử không có biểu diễn bytes ổn định."""


class UndefinedEstimateError(BloomFilterError, ZeroDivisionError):
    """Ước lượng hiện tại không xác định vì filter còn rỗng."""
