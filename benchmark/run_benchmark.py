# benchmark/run_benchmark.py
"""
Benchmark thực nghiệm cho bitbloom.

- Mỗi FPR mục tiêu: chèn N phần tử, truy vấn M phần tử rời rạc chưa chèn
- So FPR quan sát với FPR lý thuyết (kèm độ lệch chuẩn nhị thức)
- Đo throughput insert/query và memory thật (psutil RSS)
- Nhiều lần chạy, avg ± std gom bằng DataFrame (pandas)
- Có thể lấy phần tử từ CSV/Parquet thay cho chuỗi ngẫu nhiên
- In bảng (tabulate) và vẽ biểu đồ có error bar (matplotlib)
"""

import math
import os
import random
import string
import time
from glob import glob
from typing import AbstractSet, Dict, List, Optional, Sequence, Set

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import psutil
from tabulate import tabulate

from bitbloom.bloom.bloom_filter import BloomFilter
from bitbloom.hashing.positions import DEFAULT_HASHER
from bitbloom.metrics.metrics import Metrics

TARGET_FPRS = (0.1, 0.05, 0.01, 0.001)
EXPECTED_ITEMS = 50_000
TOTAL_QUERIES = 200_000
NUM_RUNS = 3
PLOT_PATH = "plots/benchmark_fpr.png"


def random_element(rng: random.Random, length: int = 12) -> str:
    """Sinh chuỗi ngẫu nhiên a–z0–9."""
    return "".join(rng.choices(string.ascii_lowercase + string.digits, k=length))


def generate_elements(rng: random.Random, count: int, exclude: AbstractSet[str] = frozenset()) -> List[str]:
    """Sinh `count` chuỗi khác nhau, không trùng với `exclude`."""
    result: List[str] = []
    seen: Set[str] = set()
    while len(result) < count:
        item = random_element(rng)
        if item in seen or item in exclude:
            continue
        seen.add(item)
        result.append(item)
    return result


def load_elements(file_paths: Sequence[str], column: str = "element", sample_size: int = EXPECTED_ITEMS) -> List[str]:
    """
    Đọc cột phần tử từ nhiều file (CSV hoặc Parquet)
    - Khử trùng lặp, bỏ giá trị rỗng/NaN
    - Dừng khi đủ sample_size
    """
    elements: List[str] = []
    seen: Set[str] = set()
    process = psutil.Process()
    print(f"Loading elements từ {len(file_paths)} files (target ~{sample_size:,} unique), cột '{column}'")
    print(f"  Memory trước load: {process.memory_info().rss / 1024 / 1024:.1f} MB")

    for path in file_paths:
        print(f"  Processing {os.path.basename(path)}...")
        if path.endswith(".parquet"):
            df = pd.read_parquet(path, columns=[column])
        else:
            df = pd.read_csv(path, usecols=[column], low_memory=False)

        values = df[column].dropna().astype(str).str.strip()
        for value in values[values != ""].unique().tolist():
            if value in seen:
                continue
            seen.add(value)
            elements.append(value)
            if len(elements) >= sample_size:
                print(f"  Đạt {sample_size:,} unique elements.")
                return elements

    print(f"  Tổng unique elements: {len(elements):,}")
    return elements


def benchmark_filter(
    target_fpr: float,
    inserted: Sequence[str],
    queries: Sequence[str],
    hasher: str = DEFAULT_HASHER,
) -> Dict[str, float]:
    """Chèn `inserted`, truy vấn `queries` (đều chưa chèn), trả về số đo một lần chạy."""
    process = psutil.Process()
    mem_before = process.memory_info().rss

    bf = BloomFilter(target_fpr, len(inserted), hasher=hasher)
    metrics = Metrics()

    start_insert = time.perf_counter()
    for item in inserted:
        bf.add(item)
        metrics.record_add()
    insert_duration = max(1e-9, time.perf_counter() - start_insert)

    start_query = time.perf_counter()
    for item in queries:
        metrics.record_query(bf.contains(item), truly_present=False)
    query_duration = max(1e-9, time.perf_counter() - start_query)

    expected = bf.expected_false_positive_probability()
    return {
        "target_fpr": target_fpr,
        "m_bits": bf.size(),
        "k_hash": bf.hash_rounds(),
        "fpr": metrics.observed_fpr(),
        "expected_fpr": expected,
        "binomial_std": math.sqrt(expected * (1 - expected) / max(1, len(queries))),
        "insert_qps": len(inserted) / insert_duration,
        "query_qps": len(queries) / query_duration,
        "memory_kb": (process.memory_info().rss - mem_before) / 1024,
    }


def run_full_benchmark(
    target_fprs: Sequence[float] = TARGET_FPRS,
    expected_items: int = EXPECTED_ITEMS,
    total_queries: int = TOTAL_QUERIES,
    num_runs: int = NUM_RUNS,
    elements: Optional[Sequence[str]] = None,
    hasher: str = DEFAULT_HASHER,
    seed: int = 42,
    plot_path: Optional[str] = PLOT_PATH,
) -> pd.DataFrame:
    """Chạy benchmark cho từng FPR mục tiêu, nhiều lần; trả về bảng avg ± std."""
    rng = random.Random(seed)
    rows = []

    for run in range(1, num_runs + 1):
        print(f"\n{'='*20} RUN {run}/{num_runs} {'='*20}")
        if elements is not None:
            inserted = list(elements)[:expected_items]
        else:
            inserted = generate_elements(rng, expected_items)
        queries = generate_elements(rng, total_queries, exclude=set(inserted))

        for p in target_fprs:
            res = benchmark_filter(p, inserted, queries, hasher=hasher)
            res["run"] = run
            rows.append(res)
            print(
                f"  p={p:<6} m={res['m_bits']:,} k={res['k_hash']} "
                f"fpr={res['fpr']:.4%} expected={res['expected_fpr']:.4%}"
            )

    runs = pd.DataFrame(rows)
    summary = (
        runs.groupby("target_fpr")
        .agg(
            m_bits=("m_bits", "first"),
            k_hash=("k_hash", "first"),
            expected_fpr=("expected_fpr", "first"),
            binomial_std=("binomial_std", "first"),
            fpr_mean=("fpr", "mean"),
            fpr_std=("fpr", "std"),
            query_qps_mean=("query_qps", "mean"),
            query_qps_std=("query_qps", "std"),
            insert_qps_mean=("insert_qps", "mean"),
            memory_kb_mean=("memory_kb", "mean"),
        )
        .sort_index(ascending=False)
    )
    summary["fpr_std"] = summary["fpr_std"].fillna(0.0)
    summary["query_qps_std"] = summary["query_qps_std"].fillna(0.0)
    summary["within_3sigma"] = (summary["fpr_mean"] - summary["expected_fpr"]).abs() <= 3 * summary["binomial_std"]

    print_results(summary, num_runs)
    if plot_path:
        plot_results(summary, plot_path)
    return summary


def print_results(summary: pd.DataFrame, num_runs: int = NUM_RUNS) -> None:
    """In bảng kết quả đẹp"""
    table = []
    for p, s in summary.iterrows():
        table.append([
            p,
            f"{int(s['m_bits']):,}",
            int(s["k_hash"]),
            f"{s['fpr_mean']:.4%} ± {s['fpr_std']:.4%}",
            f"{s['expected_fpr']:.4%}",
            "yes" if s["within_3sigma"] else "NO",
            f"{s['query_qps_mean']:,.0f} ± {s['query_qps_std']:,.0f} qps",
            f"{s['memory_kb_mean']:,.0f} KB",
        ])

    print(f"\n=== KẾT QUẢ BENCHMARK (Avg ± Std over {num_runs} runs) ===")
    print(tabulate(
        table,
        headers=["Target p", "m", "k", "Observed FPR", "Expected FPR", "≤3σ", "Query throughput", "Δ Memory"],
        tablefmt="github",
    ))


def plot_results(summary: pd.DataFrame, plot_path: str = PLOT_PATH) -> str:
    """Vẽ FPR quan sát vs lý thuyết và throughput, có error bars"""
    labels = [str(p) for p in summary.index]
    x = np.arange(len(labels))
    width = 0.38

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(14, 6))

    ax1.bar(x - width / 2, summary["fpr_mean"] * 100, width, yerr=summary["fpr_std"] * 100,
            capsize=5, color="orange", alpha=0.8, label="Observed")
    ax1.bar(x + width / 2, summary["expected_fpr"] * 100, width, color="green", alpha=0.8, label="Expected")
    ax1.set_xticks(x)
    ax1.set_xticklabels(labels)
    ax1.set_xlabel("Target false positive probability")
    ax1.set_ylabel("False Positive Rate (%)")
    ax1.set_title("False Positive Rate")
    ax1.legend()

    ax2.bar(labels, summary["query_qps_mean"] / 1000, yerr=summary["query_qps_std"] / 1000,
            capsize=5, color="steelblue", alpha=0.8)
    ax2.set_xlabel("Target false positive probability")
    ax2.set_ylabel("Throughput (K queries/s)")
    ax2.set_title("Query Throughput")

    plt.suptitle("bitbloom: FPR thực nghiệm vs lý thuyết")
    plt.tight_layout()

    directory = os.path.dirname(plot_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    plt.savefig(plot_path, dpi=200)
    plt.close(fig)
    print(f"\nBiểu đồ đã lưu tại: {plot_path}")
    return plot_path


def main(data_dir: str = "data") -> Optional[pd.DataFrame]:
    """Đặt file CSV/Parquet có cột 'element' vào folder 'data/' để dùng dữ liệu thật"""
    data_files = glob(os.path.join(data_dir, "*.csv")) + glob(os.path.join(data_dir, "*.parquet"))
    if data_files:
        loaded = load_elements(data_files, sample_size=EXPECTED_ITEMS)
        if loaded:
            return run_full_benchmark(expected_items=len(loaded), elements=loaded)
        print("File data không có phần tử nào ở cột 'element', bỏ qua benchmark.")
        return None
    print("Không tìm thấy file data, dùng chuỗi ngẫu nhiên.")
    return run_full_benchmark()


if __name__ == "__main__":
    main()
