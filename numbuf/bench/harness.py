"""Benchmark harness: interpreted loop vs compiled multiply.

Fills two buffers with uniform [0, 1) values, times a plain Python loop over
a preallocated output, then times ``multiply`` once per backend.  Each
backend's result is checked bit-for-bit against the loop.

Usage:
    from numbuf.bench import run_benchmark, format_report

    report = run_benchmark(1 << 20, seed=0, backends=["numpy", "python"])
    print(format_report(report))
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field

import numpy as np

from numbuf.config import BENCHMARK_LENGTH
from numbuf.core.backend import available_backends, get_backend_name, get_kernel
from numbuf.core.errors import InvalidLength
from numbuf.core.operations import multiply
from numbuf.core.types import NumericBuffer

logger = logging.getLogger(__name__)

BASELINE_NAME = "native loop"
WARMUP_LENGTH = 1024


@dataclass
class Timing:
    """Wall-clock samples for one multiply path."""

    name: str
    workers: int = 1
    samples_ms: list[float] = field(default_factory=list)
    matches_baseline: bool = True

    @property
    def best_ms(self) -> float:
        return min(self.samples_ms) if self.samples_ms else float("nan")

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "workers": self.workers,
            "samples_ms": [round(s, 4) for s in self.samples_ms],
            "best_ms": round(self.best_ms, 4) if self.samples_ms else None,
            "matches_baseline": self.matches_baseline,
        }


@dataclass
class BenchmarkReport:
    length: int
    seed: int | None
    baseline: Timing
    results: list[Timing] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    def speedup(self, timing: Timing) -> float:
        """How many times faster than the interpreted loop."""
        if timing.best_ms <= 0.0:
            return float("inf")
        return self.baseline.best_ms / timing.best_ms

    @property
    def all_match(self) -> bool:
        return all(t.matches_baseline for t in self.results)

    def to_dict(self) -> dict:
        return {
            "length": self.length,
            "seed": self.seed,
            "baseline": self.baseline.to_dict(),
            "results": [
                {**t.to_dict(), "speedup": _json_float(self.speedup(t))}
                for t in self.results
            ],
            "skipped": list(self.skipped),
            "all_match": self.all_match,
        }


def _json_float(value: float) -> float | None:
    return round(value, 2) if math.isfinite(value) else None


def _native_loop(left: list[float], right: list[float], out: list[float]) -> None:
    for i in range(len(out)):
        out[i] = left[i] * right[i]


def run_benchmark(
    length: int = BENCHMARK_LENGTH,
    *,
    seed: int | None = None,
    backends: list[str] | None = None,
    repeats: int = 1,
    workers: int = 1,
    warmup: bool = True,
) -> BenchmarkReport:
    """Time the interpreted loop and ``multiply`` on each backend.

    Args:
        length: Number of elements in each input.
        seed: Seed for the uniform fill; None draws fresh entropy.
        backends: Backend names to time. Defaults to the current backend.
        repeats: Samples per path; the report keeps all and ranks by the best.
        workers: Threads for backends with a parallel kernel. Others run serially.
        warmup: Run each backend once on a small buffer first so one-off
            costs (JIT compilation, device init) stay outside the timed call.
    """
    if length <= 0:
        raise InvalidLength(length)
    if repeats < 1:
        raise ValueError(f"repeats must be >= 1, got {repeats}")
    names = list(backends) if backends else [get_backend_name()]
    kernels = [get_kernel(name) for name in names]  # unknown names fail before any work

    rng = np.random.default_rng(seed)
    src_a = rng.random(length)
    src_b = rng.random(length)

    left = src_a.tolist()
    right = src_b.tolist()
    baseline = Timing(BASELINE_NAME)
    out: list[float] = []
    for _ in range(repeats):
        out = [0.0] * length
        t1 = time.perf_counter()
        _native_loop(left, right, out)
        t2 = time.perf_counter()
        baseline.samples_ms.append((t2 - t1) * 1000)
    expected = np.array(out, dtype=np.float64).tobytes()

    a = NumericBuffer(src_a)
    b = NumericBuffer(src_b)
    report = BenchmarkReport(length=length, seed=seed, baseline=baseline)
    installed = set(available_backends())

    for kernel in kernels:
        if kernel.name not in installed:
            logger.warning("Skipping backend %s: library not installed", kernel.name)
            report.skipped.append(kernel.name)
            continue
        n_workers = workers if kernel.parallel else 1
        timing = Timing(kernel.name, workers=n_workers)

        if warmup:
            small = NumericBuffer.ones(min(length, WARMUP_LENGTH))
            multiply(small, small, backend=kernel.name, workers=n_workers)

        result = None
        for _ in range(repeats):
            t1 = time.perf_counter()
            result = multiply(a, b, backend=kernel.name, workers=n_workers)
            t2 = time.perf_counter()
            timing.samples_ms.append((t2 - t1) * 1000)

        timing.matches_baseline = result.data.tobytes() == expected
        if not timing.matches_baseline:
            logger.error("Backend %s disagrees with the interpreted loop", kernel.name)
        logger.info(
            "%s: best %.3f ms over %d run(s) (%.1fx)",
            kernel.name, timing.best_ms, repeats, report.speedup(timing),
        )
        report.results.append(timing)

    return report


def format_report(report: BenchmarkReport, markdown: bool = False) -> str:
    """Render *report* as a console table, or as markdown for docs."""
    lines: list[str] = []
    rows = [(report.baseline, "1.0x", "-")]
    for t in report.results:
        rows.append((t, f"{report.speedup(t):.1f}x", "yes" if t.matches_baseline else "NO"))

    if markdown:
        lines.append(f"# numbuf benchmark (n={report.length})\n")
        lines.append("| Path | Workers | Best (ms) | Speedup | Matches loop |")
        lines.append("|------|---------|-----------|---------|--------------|")
        for t, speedup, match in rows:
            lines.append(f"| {t.name} | {t.workers} | {t.best_ms:.3f} | {speedup} | {match} |")
        if report.skipped:
            lines.append("")
            lines.append(f"Skipped (not installed): {', '.join(report.skipped)}")
        return "\n".join(lines)

    lines.append("=" * 72)
    lines.append(f"  numbuf element-wise multiply, n={report.length}")
    lines.append("=" * 72)
    lines.append(f"  {'Path':<20} | {'Workers':>7} | {'Best ms':>10} | {'Speedup':>8} | {'Match':>5}")
    lines.append(f"  {'-'*20}-+-{'-'*7}-+-{'-'*10}-+-{'-'*8}-+-{'-'*5}")
    for t, speedup, match in rows:
        lines.append(f"  {t.name:<20} | {t.workers:>7} | {t.best_ms:>10.3f} | {speedup:>8} | {match:>5}")
    lines.append("=" * 72)
    if report.skipped:
        lines.append(f"  Skipped (not installed): {', '.join(report.skipped)}")
    return "\n".join(lines)
