"""
Performance benchmarks for the GS1 label toolkit.
"""

import statistics
import tempfile
import time
from datetime import date
from pathlib import Path
from typing import Tuple

from gs1_labels import (
    DEFAULT_LAYOUT,
    GridSlotComposer,
    LabelRecord,
    build_machine_payload,
    parse_flexible_date,
    read_labels,
)


def benchmark(func, iterations: int = 1000) -> Tuple[float, float, float]:
    """
    Run a benchmark and return timing statistics.

    Returns:
        (mean_ms, min_ms, max_ms)
    """
    times = []

    for _ in range(iterations):
        start = time.perf_counter()
        func()
        elapsed = time.perf_counter() - start
        times.append(elapsed * 1000)

    return (
        statistics.mean(times),
        min(times),
        max(times)
    )


def run_benchmarks():
    """Run all benchmarks and print results."""
    print("=" * 60)
    print("GS1 Label Toolkit Benchmarks")
    print("=" * 60)
    print()

    print("Date parsing (by chain step):")
    print("-" * 60)

    date_cases = [
        ("ISO date", "2025-06-05"),
        ("Day-zero", "2025-06-00"),
        ("Day-first", "31/1/2025"),
        ("Spreadsheet serial", "45658"),
        ("Generic fallback", "June 5, 2025"),
    ]

    for name, text in date_cases:
        mean, min_t, max_t = benchmark(lambda s=text: parse_flexible_date(s), iterations=1000)
        print(f"  {name:30} {mean:8.3f}ms avg ({min_t:.3f}-{max_t:.3f})")

    print()
    print("Encoding and composition:")
    print("-" * 60)

    record = LabelRecord("12345678905", "LOT42", date(2025, 6, 1), date(2025, 1, 1), True)
    mean, min_t, max_t = benchmark(lambda: build_machine_payload(record), iterations=1000)
    print(f"  {'Machine payload':30} {mean:8.3f}ms avg ({min_t:.3f}-{max_t:.3f})")

    composer = GridSlotComposer()
    mean, min_t, max_t = benchmark(lambda: composer.compose(210.0, 297.0, DEFAULT_LAYOUT), iterations=1000)
    print(f"  {'A4 slot grid':30} {mean:8.3f}ms avg ({min_t:.3f}-{max_t:.3f})")

    print()
    print("Throughput test (10000-row CSV):")
    print("-" * 60)

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "batch.csv"
        lines = ["gtin;lot;expiry;mfg"]
        lines.extend(f"12345678901231;LOT{i};2025-06-{i % 28 + 1:02d};45658" for i in range(10000))
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")

        start = time.perf_counter()
        count = sum(1 for _ in read_labels(path))
        total = time.perf_counter() - start

    print(f"  Throughput: {count / total:.0f} records/second")
    print(f"  Total time: {total:.3f}s for {count} records")

    print()
    print("=" * 60)


if __name__ == "__main__":
    run_benchmarks()
