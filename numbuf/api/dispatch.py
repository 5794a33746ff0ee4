"""numbuf API dispatcher — JSON request/response interface.

Usage:
    from numbuf.api.dispatch import dispatch
    result = dispatch({"action": "multiply", "a": [2, 3, 4], "b": [5, 0, -1]})
"""

from __future__ import annotations

import logging
import math
import time

import numpy as np

from numbuf.bench.harness import run_benchmark
from numbuf.core.backend import available_backends, get_backend_name, get_kernel
from numbuf.core.errors import NumBufError
from numbuf.core.kernels import KERNELS
from numbuf.core.operations import multiply
from numbuf.core.types import NumericBuffer

logger = logging.getLogger(__name__)

ACTIONS = ("multiply", "read", "benchmark", "list_backends")

# strict JSON has no tokens for these; they travel as strings
_NON_FINITE = {math.inf: "Infinity", -math.inf: "-Infinity"}


def json_float(value: float) -> float | str:
    """Return *value* itself, or "Infinity", "-Infinity" or "NaN"."""
    if math.isnan(value):
        return "NaN"
    return _NON_FINITE.get(value, value)


def json_values(buf: NumericBuffer) -> list[float | str]:
    """Buffer contents as a list that strict JSON encoders accept."""
    if np.isfinite(buf.data).all():
        return buf.to_list()
    return [json_float(v) for v in buf.to_list()]


def dispatch(request: dict) -> dict:
    """Main entry point for the numbuf JSON API.

    Args:
        request: JSON-like dict with "action" and action-specific params.

    Returns:
        JSON-like dict with results or error information.
    """
    action = request.get("action")
    if not action:
        return {"error": "Missing 'action' field"}

    try:
        if action == "multiply":
            return _handle_multiply(request)
        elif action == "read":
            return _handle_read(request)
        elif action == "benchmark":
            return _handle_benchmark(request)
        elif action == "list_backends":
            return _handle_list_backends()
        else:
            return {"error": f"Unknown action: {action!r}. Must be one of {list(ACTIONS)}"}
    except NumBufError as e:
        return {"error": str(e), "kind": type(e).__name__}
    except (ValueError, TypeError, ImportError) as e:
        logger.debug("dispatch %s failed", action, exc_info=True)
        return {"error": f"{type(e).__name__}: {e}"}


# ---------------------------------------------------------------------------
# Action handlers
# ---------------------------------------------------------------------------

def _handle_multiply(request: dict) -> dict:
    for key in ("a", "b"):
        if request.get(key) is None:
            return {"error": f"Missing '{key}' field"}

    a = NumericBuffer.from_list(request["a"])
    b = NumericBuffer.from_list(request["b"])
    backend = request.get("backend")
    workers = int(request.get("workers", 1))

    t0 = time.perf_counter()
    c = multiply(a, b, backend=backend, workers=workers)
    elapsed = time.perf_counter() - t0

    return {
        "result": json_values(c),
        "length": c.length,
        "backend": get_kernel(backend).name,
        "elapsed_ms": round(elapsed * 1000, 3),
    }


def _handle_read(request: dict) -> dict:
    if request.get("values") is None:
        return {"error": "Missing 'values' field"}
    if request.get("index") is None:
        return {"error": "Missing 'index' field"}

    buf = NumericBuffer.from_list(request["values"])
    return {"value": json_float(buf.read(request["index"]))}


def _handle_benchmark(request: dict) -> dict:
    length = request.get("length")
    if length is None:
        return {"error": "Missing 'length' field"}

    report = run_benchmark(
        int(length),
        seed=request.get("seed"),
        backends=request.get("backends"),
        repeats=int(request.get("repeats", 1)),
        workers=int(request.get("workers", 1)),
    )
    return report.to_dict()


def _handle_list_backends() -> dict:
    return {
        "backends": sorted(KERNELS),
        "available": available_backends(),
        "current": get_backend_name(),
    }
