"""CLI demo: nạp tập phần tử vào Bloom filter rồi replay truy vấn.

- Bước 1: đọc một cột của CSV thành tập phần tử, tạo filter vừa kích thước.
- Bước 2: chạy một CSV truy vấn qua contains, so với nhãn thật, in thống kê FPR.
- Menu console cho phép chọn file và xem tiến trình.
"""

from __future__ import annotations

import csv
import os
import time
from typing import Dict, Iterable, List, Optional

import psutil

from bitbloom.bloom.bloom_filter import BloomFilter
from bitbloom.metrics.metrics import Metrics

# Ngưỡng mặc định
FPR_TARGET = 0.01
DEFAULT_COLUMN = "element"
DEFAULT_LABEL_COLUMN = "label"
PROGRESS_EVERY = 50_000

_PRESENT_LABELS = {"1", "true", "yes", "present", "member"}


def _current_memory_bytes() -> int:
    """Lấy RSS của tiến trình (bytes)."""
    return psutil.Process(os.getpid()).memory_info().rss


def load_elements_csv(csv_path: str, column: str = DEFAULT_COLUMN) -> List[str]:
    """Đọc cột phần tử từ CSV (đã khử trùng lặp, giữ thứ tự, bỏ ô trống)."""
    if not os.path.exists(csv_path):
        raise FileNotFoundError(f"Dataset not found: {csv_path}")

    elements: list[str] = []
    seen: set[str] = set()
    with open(csv_path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None or column not in reader.fieldnames:
            raise KeyError(f"column {column!r} not found in {csv_path}")
        for row in reader:
            value = (row.get(column) or "").strip()
            if not value or value in seen:
                continue
            seen.add(value)
            elements.append(value)
    return elements


def build_filter(elements: Iterable[str], target_fpr: float = FPR_TARGET) -> BloomFilter:
    """Tạo filter vừa với số phần tử rồi nạp toàn bộ."""
    elements_list = list(elements)
    bloom = BloomFilter(target_fpr, max(1, len(elements_list)))
    bloom.add_all(elements_list)

    print(
        "[Init] Nạp tập phần tử: entries={} m_bits={} k_hash={} fpr_expected={:.4%} bits/elem={:.2f}".format(
            bloom.count(),
            bloom.size(),
            bloom.hash_rounds(),
            bloom.expected_false_positive_probability(),
            bloom.expected_bits_per_element(),
        )
    )
    return bloom


def _label_is_present(label_raw: str) -> bool:
    return (label_raw or "").strip().lower() in _PRESENT_LABELS


def replay_queries(
    bloom: BloomFilter,
    csv_path: str,
    column: str = DEFAULT_COLUMN,
    label_column: str = DEFAULT_LABEL_COLUMN,
    known: Optional[set[str]] = None,
    verbose: bool = False,
    max_rows: Optional[int] = None,
) -> tuple[Metrics, Dict[str, float]]:
    """Stream CSV truy vấn qua contains, trả về Metrics và thống kê thời gian/bộ nhớ.

    Nhãn thật lấy từ `known` nếu có, ngược lại từ cột `label_column`.
    """
    if not os.path.exists(csv_path):
        raise FileNotFoundError(f"Dataset not found: {csv_path}")

    metrics = Metrics()
    start_time = time.time()
    start_mem = _current_memory_bytes()

    with open(csv_path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for idx, row in enumerate(reader, start=1):
            value = (row.get(column) or "").strip()
            if not value:
                continue

            if known is not None:
                present = value in known
            else:
                present = _label_is_present(row.get(label_column) or "")

            t0 = time.perf_counter_ns()
            hit = bloom.contains(value)
            metrics.record_lookup_latency(int((time.perf_counter_ns() - t0) / 1000))
            metrics.record_query(hit, present)

            if verbose:
                verdict = "CÓ THỂ CÓ" if hit else "KHÔNG CÓ"
                print(f"[Dòng {idx}] phần_tử={value} thật={present} -> phán đoán={verdict}")

            if max_rows is not None and metrics.queries >= max_rows:
                break

            if idx % PROGRESS_EVERY == 0:
                elapsed = max(1e-9, time.time() - start_time)
                print(
                    f"[Replay tiến độ] đã_xử_lý={idx} dương={metrics.positives} "
                    f"fp={metrics.false_positives} throughput={metrics.queries / elapsed:,.0f} q/s "
                    f"fpr_thực={metrics.observed_fpr():.4%}"
                )

    stats: Dict[str, float] = {
        "duration_sec": time.time() - start_time,
        "start_mem_bytes": start_mem,
        "end_mem_bytes": _current_memory_bytes(),
    }
    return metrics, stats


def print_stats(bloom: BloomFilter, metrics: Metrics, stats: Dict[str, float]) -> None:
    duration = stats.get("duration_sec") or 0.0

    print("\n=== Tóm tắt kết quả ===")
    print(f"Tổng số truy vấn: {metrics.queries}")
    print(f"Dương (có thể có): {metrics.positives}")
    print(f" ├─ Đúng (true positive): {metrics.true_positives}")
    print(f" └─ Dương tính giả: {metrics.false_positives}")
    print(f"Âm (chắc chắn không có): {metrics.negatives}")

    if duration > 0 and metrics.queries > 0:
        print(f"Thời gian chạy: {duration:.1f}s (~{metrics.queries / duration:,.0f} q/s)")
    print(f"Độ trễ trung bình: {metrics.average_lookup_latency_us():.2f} µs")
    end_mem = int(stats["end_mem_bytes"])
    delta = end_mem - int(stats["start_mem_bytes"])
    print(f"Memory tiến trình (kết thúc): {end_mem:,} bytes (Δ={delta:+,} bytes)")

    print("Các tỉ lệ chính:")
    if metrics.absent_queries > 0:
        print(
            f"- FPR thực tế ≈ {metrics.false_positives}/{metrics.absent_queries} ≈ {metrics.observed_fpr():.4%}"
        )
    if bloom.count() > 0:
        print(f"- FPR lý thuyết hiện tại ≈ {bloom.current_false_positive_probability():.4%}")
        print(f"- Bit/phần tử hiện tại ≈ {bloom.current_bits_per_element():.2f}")
    print(f"- Tỉ lệ bit đã bật ≈ {bloom.fill_ratio():.2%}")


def main() -> None:
    print("=== Demo Bloom Filter (log tiếng Việt) ===")
    bloom: Optional[BloomFilter] = None
    known: Optional[set[str]] = None

    while True:
        print("\nMenu:")
        print(" 1. Nạp tập phần tử từ CSV")
        print(" 2. Replay CSV truy vấn qua contains")
        print(" 3. Thoát")
        choice = input("Chọn [1/2/3]: ").strip()

        if choice == "1" or choice == "":
            path = input("Đường dẫn CSV: ").strip()
            column = input(f"Tên cột [{DEFAULT_COLUMN}]: ").strip() or DEFAULT_COLUMN
            try:
                elements = load_elements_csv(path, column)
            except (FileNotFoundError, KeyError) as exc:
                print(f"Không đọc được dữ liệu: {exc}")
                continue
            bloom = build_filter(elements)
            known = set(elements)
        elif choice == "2":
            if bloom is None:
                print("Hãy nạp tập phần tử trước (chọn 1).")
                continue
            path = input("Đường dẫn CSV truy vấn: ").strip()
            column = input(f"Tên cột [{DEFAULT_COLUMN}]: ").strip() or DEFAULT_COLUMN
            verbose = input("In log từng dòng? [y/N]: ").strip().lower() == "y"
            try:
                metrics, stats = replay_queries(bloom, path, column=column, known=known, verbose=verbose)
            except FileNotFoundError as exc:
                print(f"Không đọc được dữ liệu: {exc}")
                continue
            print_stats(bloom, metrics, stats)
        elif choice == "3":
            print("Thoát.")
            break
        else:
            print("Lựa chọn không hợp lệ.")


if __name__ == "__main__":
    main()
