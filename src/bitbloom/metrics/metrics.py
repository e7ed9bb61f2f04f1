"""Bộ đếm metrics gọn cho các lần chạy thử Bloom filter."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Metrics:
    insertions: int = 0
    queries: int = 0
    positives: int = 0
    negatives: int = 0
    true_positives: int = 0
    false_positives: int = 0
    absent_queries: int = 0
    lookup_latency_total_us: int = 0
    lookup_count: int = 0

    def record_add(self) -> None:
        self.insertions += 1

    def record_query(self, hit: bool, truly_present: bool) -> None:
        """Ghi một lần contains; truly_present là nhãn thật của phần tử."""
        self.queries += 1
        if hit:
            self.positives += 1
        else:
            self.negatives += 1

        if truly_present:
            if hit:
                self.true_positives += 1
        else:
            self.absent_queries += 1
            if hit:
                self.false_positives += 1

    def record_lookup_latency(self, micros: int) -> None:
        self.lookup_latency_total_us += micros
        self.lookup_count += 1

    def observed_fpr(self) -> float:
        """Tỉ lệ dương tính giả trên các truy vấn vốn không có trong tập."""
        if self.absent_queries == 0:
            return 0.0
        return self.false_positives / float(self.absent_queries)

    def average_lookup_latency_us(self) -> float:
        if self.lookup_count == 0:
            return 0.0
        return self.lookup_latency_total_us / float(self.lookup_count)
