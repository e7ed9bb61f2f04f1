"""Chuyển phần tử bất kỳ thành bytes ổn định trước khi băm.

Phần tử được so khớp theo biểu diễn văn bản (UTF-8): hai phần tử in ra
cùng một chuỗi được coi là cùng một phần tử.
"""
from __future__ import annotations

from typing import Any, Optional, Protocol, Set, runtime_checkable

from bitbloom.errors import InvalidElementError


@runtime_checkable
class BloomSerializable(Protocol):
    """Kiểu tự cung cấp bytes ổn định cho Bloom filter."""

    def to_bloom_bytes(self) -> bytes:
        ...


def _has_stable_text(value: Any, _seen: Optional[Set[int]] = None) -> bool:
    """Kiểu mặc định của object in ra địa chỉ bộ nhớ, không ổn định giữa các lần chạy.

    tuple/list/dict được kiểm tra đệ quy; phần tử con được in bằng repr()
    nên phải tự định nghĩa __repr__. set không có thứ tự lặp ổn định nên bị từ chối.
    """
    if isinstance(value, (set, frozenset)):
        return False
    cls = type(value)
    if cls.__repr__ is object.__repr__ and (_seen is not None or cls.__str__ is object.__str__):
        return False
    if isinstance(value, (tuple, list, dict)):
        seen = set() if _seen is None else _seen
        if id(value) in seen:
            return True
        seen.add(id(value))
        children = [part for pair in value.items() for part in pair] if isinstance(value, dict) else value
        return all(_has_stable_text(child, seen) for child in children)
    return True


def _encode_text(text: str) -> bytes:
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidElementError(f"element text is not valid UTF-8: {exc}") from exc


def element_to_bytes(element: Any) -> bytes:
    """Trả về bytes dùng để băm phần tử; lỗi InvalidElementError nếu không xác định."""
    if element is None:
        raise InvalidElementError("element must not be None")

    if isinstance(element, BloomSerializable):
        data = element.to_bloom_bytes()
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise InvalidElementError(
                f"to_bloom_bytes() must return bytes, got {type(data).__name__}"
            )
        return bytes(data)

    if isinstance(element, (bytes, bytearray, memoryview)):
        return bytes(element)

    if isinstance(element, str):
        return _encode_text(element)

    if not _has_stable_text(element):
        raise InvalidElementError(
            f"{type(element).__name__} has no stable text representation"
        )
    try:
        text = str(element)
    except Exception as exc:
        raise InvalidElementError(f"str() failed for {type(element).__name__}: {exc}") from exc
    return _encode_text(text)
