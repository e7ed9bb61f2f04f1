"""Test bộ đếm Metrics."""
import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))
from bitbloom.metrics import Metrics


def test_query_classification():
    m = Metrics()
    m.record_query(hit=True, truly_present=True)
    m.record_query(hit=True, truly_present=False)
    m.record_query(hit=False, truly_present=False)
    m.record_query(hit=False, truly_present=False)

    assert m.queries == 4
    assert m.positives == 2
    assert m.negatives == 2
    assert m.true_positives == 1
    assert m.false_positives == 1
    assert m.absent_queries == 3
    assert m.observed_fpr() == pytest.approx(1 / 3)


def test_empty_rates_are_zero():
    m = Metrics()
    assert m.observed_fpr() == 0.0
    assert m.average_lookup_latency_us() == 0.0


def test_latency_and_adds():
    m = Metrics()
    m.record_add()
    m.record_add()
    m.record_lookup_latency(10)
    m.record_lookup_latency(30)
    assert m.insertions == 2
    assert m.average_lookup_latency_us() == 20.0
