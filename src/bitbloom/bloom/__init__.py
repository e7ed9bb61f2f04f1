from bitbloom.bloom.bloom_filter import BloomFilter
from bitbloom.bloom.bloom_params import BloomParams
from bitbloom.bloom.probability import false_positive_probability
from bitbloom.bloom.synchronized import SynchronizedBloomFilter

__all__ = [
    "BloomFilter",
    "BloomParams",
    "SynchronizedBloomFilter",
    "false_positive_probability",
]
