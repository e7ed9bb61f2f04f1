"""Test chuyển phần tử thành bytes."""
import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))
from bitbloom import BloomFilter, BloomSerializable, InvalidElementError, element_to_bytes


class Point:
    def __init__(self, x, y):
        self.x, self.y = x, y

    def __str__(self):
        return f"({self.x}, {self.y})"


class Packed:
    def __init__(self, value):
        self.value = value

    def to_bloom_bytes(self):
        return self.value.to_bytes(4, "big")


class BadPacked:
    def to_bloom_bytes(self):
        return "not bytes"


class Exploding:
    def __str__(self):
        raise RuntimeError("boom")


def test_str_is_utf8():
    assert element_to_bytes("héllo") == "héllo".encode("utf-8")


def test_bytes_like_pass_through():
    assert element_to_bytes(b"\x00\xff") == b"\x00\xff"
    assert element_to_bytes(bytearray(b"ab")) == b"ab"
    assert element_to_bytes(memoryview(b"cd")) == b"cd"


def test_numbers_use_text():
    assert element_to_bytes(42) == b"42"
    assert element_to_bytes(2.5) == b"2.5"


def test_custom_str_is_used():
    assert element_to_bytes(Point(1, 2)) == b"(1, 2)"


def test_protocol_takes_precedence():
    packed = Packed(258)
    assert isinstance(packed, BloomSerializable)
    assert element_to_bytes(packed) == b"\x00\x00\x01\x02"


def test_protocol_in_filter():
    bf = BloomFilter(0.01, 10)
    bf.add(Packed(7))
    assert bf.contains(Packed(7))
    assert bf.positions(Packed(7)) == bf.positions(b"\x00\x00\x00\x07")


@pytest.mark.parametrize("element", [
    None,
    object(),
    BadPacked(),
    Exploding(),
    "\ud800",
    (object(),),
    [1, object()],
    {"key": object()},
    {object(): "value"},
    ((1, [object()]),),
    (Point(1, 2),),
    {1, 2},
    frozenset(["a"]),
])
def test_invalid_elements(element):
    with pytest.raises(InvalidElementError):
        element_to_bytes(element)


def test_invalid_element_is_type_error():
    with pytest.raises(TypeError):
        element_to_bytes(None)


class MemoryPacked:
    def to_bloom_bytes(self):
        return memoryview(b"mv")


def test_protocol_may_return_memoryview():
    assert element_to_bytes(MemoryPacked()) == b"mv"


def test_containers_with_stable_text():
    assert element_to_bytes((1, "a")) == b"(1, 'a')"
    assert element_to_bytes([None, {"k": [2.5]}]) == b"[None, {'k': [2.5]}]"


def test_self_referencing_list_is_stable():
    items = [1]
    items.append(items)
    assert element_to_bytes(items) == b"[1, [...]]"
