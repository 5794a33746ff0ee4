"""
Configuration
=============
Global constants for numbuf. Values that differ between deployments can be
overridden through environment variables, read once at import.

Exports:
    DEFAULT_BACKEND (str): Kernel backend selected at startup (NUMBUF_BACKEND).
    DEFAULT_WORKERS (int): Threads used by parallel backends when multiply is
        not given workers (NUMBUF_WORKERS).
    LOG_LEVEL (str): Level name for setup_logging (NUMBUF_LOG_LEVEL).
    SERVER_HOST, SERVER_PORT: Bind address of the HTTP server.
    BENCHMARK_LENGTH (int): Buffer length used by the benchmark harness.
    MAX_BENCHMARK_LENGTH (int): Largest benchmark accepted over HTTP.
"""
import os

DEFAULT_BACKEND: str = os.environ.get("NUMBUF_BACKEND", "numpy")
DEFAULT_WORKERS: int = int(os.environ.get("NUMBUF_WORKERS", "1"))
LOG_LEVEL: str = os.environ.get("NUMBUF_LOG_LEVEL", "INFO").upper()

SERVER_HOST: str = os.environ.get("NUMBUF_HOST", "0.0.0.0")
SERVER_PORT: int = int(os.environ.get("NUMBUF_PORT", "8080"))

# 2**20 elements per input
BENCHMARK_LENGTH: int = 1_048_576
MAX_BENCHMARK_LENGTH: int = 1 << 22
