"""Test script benchmark với kích thước nhỏ."""
import os
import random
import sys

import pandas as pd
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.append(os.path.join(ROOT, "src"))
sys.path.append(ROOT)
from benchmark import run_benchmark


def test_generate_elements_are_unique_and_disjoint():
    rng = random.Random(0)
    first = run_benchmark.generate_elements(rng, 300)
    second = run_benchmark.generate_elements(rng, 300, exclude=set(first))
    assert len(set(first)) == 300
    assert not set(first) & set(second)


def test_benchmark_filter_reports_measurements():
    rng = random.Random(1)
    inserted = run_benchmark.generate_elements(rng, 500)
    queries = run_benchmark.generate_elements(rng, 2000, exclude=set(inserted))
    res = run_benchmark.benchmark_filter(0.05, inserted, queries)
    assert res["k_hash"] == 5
    assert 0.0 <= res["fpr"] <= 1.0
    assert res["expected_fpr"] <= 0.05
    assert res["query_qps"] > 0


def test_run_full_benchmark_writes_plot(tmp_path, capsys):
    plot_path = str(tmp_path / "plots" / "fpr.png")
    summary = run_benchmark.run_full_benchmark(
        target_fprs=(0.1, 0.01),
        expected_items=300,
        total_queries=1000,
        num_runs=2,
        plot_path=plot_path,
    )
    assert list(summary.index) == [0.1, 0.01]
    assert {"fpr_mean", "fpr_std", "expected_fpr", "within_3sigma"} <= set(summary.columns)
    assert os.path.exists(plot_path)
    assert "KẾT QUẢ BENCHMARK" in capsys.readouterr().out


def test_load_elements_from_csv(tmp_path):
    path = tmp_path / "data.csv"
    pd.DataFrame({"element": ["a", "b", "a", None, " c "]}).to_csv(path, index=False)
    assert run_benchmark.load_elements([str(path)], sample_size=10) == ["a", "b", "c"]
    assert run_benchmark.load_elements([str(path)], sample_size=2) == ["a", "b"]


def test_main_skips_data_without_elements(tmp_path, capsys):
    pd.DataFrame({"element": [None, "  "]}).to_csv(tmp_path / "empty.csv", index=False)
    assert run_benchmark.main(data_dir=str(tmp_path)) is None
    assert "bỏ qua benchmark" in capsys.readouterr().out
