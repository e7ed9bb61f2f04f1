"""Test BloomParams: k, m, bit/phần tử và kiểm tra đầu vào."""
import math
import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))
from bitbloom import BloomParams, InvalidParameterError


@pytest.mark.parametrize("p", [0.5, 0.3, 0.1, 0.05, 0.01, 0.001, 1e-6, 0.999])
def test_for_target_matches_formulas(p):
    params = BloomParams.for_target(p, 1000)
    k = math.ceil(-math.log2(p))
    assert params.k_hash == k
    assert params.bits_per_elem == pytest.approx(k / math.log(2))
    assert params.m_bits == math.ceil(params.bits_per_elem * 1000)
    assert params.k_hash >= 1
    assert params.m_bits >= 1


@pytest.mark.parametrize("p, k", [(0.5, 1), (0.25, 2), (0.125, 3), (2 ** -10, 10)])
def test_powers_of_two_give_exact_k(p, k):
    assert BloomParams.for_target(p, 10).k_hash == k


def test_single_element_still_has_bits():
    params = BloomParams.for_target(0.9, 1)
    assert params.k_hash == 1
    assert params.m_bits == 2


def test_params_are_frozen():
    params = BloomParams.for_target(0.01, 10)
    with pytest.raises(AttributeError):
        params.m_bits = 1


@pytest.mark.parametrize("p", [0, 1, -0.5, 2.0, float("nan"), float("inf"), True, "0.1", None])
def test_invalid_probability(p):
    with pytest.raises(InvalidParameterError):
        BloomParams.for_target(p, 10)


@pytest.mark.parametrize("n", [0, -1, 2.5, True, "10", None])
def test_invalid_expected_items(n):
    with pytest.raises(InvalidParameterError):
        BloomParams.for_target(0.01, n)


def test_invalid_parameter_is_value_error():
    with pytest.raises(ValueError):
        BloomParams.for_target(0.01, 0)
