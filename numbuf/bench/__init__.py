"""numbuf benchmark harness."""

from numbuf.bench.harness import (
    BenchmarkReport,
    Timing,
    run_benchmark,
    format_report,
)

__all__ = ["BenchmarkReport", "Timing", "run_benchmark", "format_report"]
