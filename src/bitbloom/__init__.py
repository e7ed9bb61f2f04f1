"""bitbloom: Bloom filter kích thước cố định với MurmurHash2 + double hashing."""
from bitbloom.bloom import BloomFilter, BloomParams, SynchronizedBloomFilter, false_positive_probability
from bitbloom.errors import (
    BloomFilterError,
    InvalidElementError,
    InvalidParameterError,
    UndefinedEstimateError,
)
from bitbloom.types import BloomSerializable, element_to_bytes

__version__ = "0.1.0"

__all__ = [
    "BloomFilter",
    "BloomFilterError",
    "BloomParams",
    "BloomSerializable",
    "InvalidElementError",
    "InvalidParameterError",
    "SynchronizedBloomFilter",
    "UndefinedEstimateError",
    "element_to_bytes",
    "false_positive_probability",
]
