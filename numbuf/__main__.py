"""Command-line benchmark: python -m numbuf

    python -m numbuf                              # current backend, n = 2**20
    python -m numbuf -b numpy -b python -r 5      # several backends, best of 5
    python -m numbuf -b numba -w 4 --markdown     # parallel kernel, docs table
"""

from __future__ import annotations

import argparse
import logging
import sys

from numbuf.bench.harness import format_report, run_benchmark
from numbuf.config import BENCHMARK_LENGTH, DEFAULT_WORKERS, LOG_LEVEL
from numbuf.core.errors import NumBufError
from numbuf.logging_config import setup_logging

logger = logging.getLogger("numbuf.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="numbuf",
        description="Time an interpreted loop against numbuf's compiled element-wise multiply",
    )
    parser.add_argument("-n", "--length", type=int, default=BENCHMARK_LENGTH,
                        help=f"elements per input (default: {BENCHMARK_LENGTH})")
    parser.add_argument("-s", "--seed", type=int, default=None,
                        help="seed for the uniform [0, 1) fill")
    parser.add_argument("-b", "--backend", action="append", dest="backends",
                        help="backend to time; repeat for several (default: current backend)")
    parser.add_argument("-r", "--repeats", type=int, default=1,
                        help="timed runs per path, best is reported")
    parser.add_argument("-w", "--workers", type=int, default=DEFAULT_WORKERS,
                        help="threads for backends with a parallel kernel")
    parser.add_argument("--no-warmup", action="store_true",
                        help="include JIT compilation and device init in the timing")
    parser.add_argument("--markdown", action="store_true",
                        help="output a markdown table for documentation")
    parser.add_argument("--log-level", default=LOG_LEVEL,
                        help="logging level (default: %(default)s)")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the benchmark. Returns 0 on success, 1 if a backend disagreed or failed."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        report = run_benchmark(
            args.length,
            seed=args.seed,
            backends=args.backends,
            repeats=args.repeats,
            workers=args.workers,
            warmup=not args.no_warmup,
        )
    except (NumBufError, ValueError, ImportError) as e:
        logger.error("%s", e)
        return 1

    print(format_report(report, markdown=args.markdown))
    sys.stdout.flush()
    return 0 if report.all_match else 1


if __name__ == "__main__":
    sys.exit(main())
