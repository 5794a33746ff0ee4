"""numbuf FastAPI server — REST API over buffers and benchmarks."""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from numbuf import __version__
from numbuf.api.dispatch import dispatch as api_dispatch, json_float, json_values
from numbuf.bench.harness import run_benchmark
from numbuf.config import BENCHMARK_LENGTH, MAX_BENCHMARK_LENGTH
from numbuf.core.backend import get_kernel
from numbuf.core.errors import NumBufError
from numbuf.core.operations import multiply
from numbuf.core.types import NumericBuffer

logger = logging.getLogger(__name__)

app = FastAPI(title="numbuf", version=__version__)


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class MultiplyRequest(BaseModel):
    a: list[float]
    b: list[float]
    backend: str | None = None
    workers: int = Field(default=1, ge=1)

class ReadRequest(BaseModel):
    values: list[float]
    index: int

class BenchmarkRequest(BaseModel):
    length: int = Field(default=BENCHMARK_LENGTH, le=MAX_BENCHMARK_LENGTH)
    seed: int | None = None
    backends: list[str] | None = None
    repeats: int = Field(default=1, ge=1, le=100)
    workers: int = Field(default=1, ge=1)


def _error(status: int, e: Exception) -> JSONResponse:
    content = {"error": str(e)}
    if isinstance(e, NumBufError):
        content["kind"] = type(e).__name__
    return JSONResponse(status_code=status, content=content)


# ---------------------------------------------------------------------------
# API endpoints
# ---------------------------------------------------------------------------

@app.get("/api/backends")
async def api_backends():
    return api_dispatch({"action": "list_backends"})


@app.post("/api/multiply")
def api_multiply(req: MultiplyRequest):
    try:
        a = NumericBuffer.from_list(req.a)
        b = NumericBuffer.from_list(req.b)

        t0 = time.perf_counter()
        c = multiply(a, b, backend=req.backend, workers=req.workers)
        elapsed = time.perf_counter() - t0

        return {
            "result": json_values(c),
            "length": c.length,
            "backend": get_kernel(req.backend).name,
            "elapsed_ms": round(elapsed * 1000, 3),
        }
    except (NumBufError, ValueError, ImportError) as e:
        return _error(400, e)
    except Exception as e:
        logger.exception("multiply failed")
        return _error(500, e)


@app.post("/api/read")
async def api_read(req: ReadRequest):
    try:
        buf = NumericBuffer.from_list(req.values)
        return {"value": json_float(buf.read(req.index))}
    except NumBufError as e:
        return _error(400, e)


@app.post("/api/benchmark")
def api_benchmark(req: BenchmarkRequest):
    try:
        report = run_benchmark(
            req.length,
            seed=req.seed,
            backends=req.backends,
            repeats=req.repeats,
            workers=req.workers,
        )
        return report.to_dict()
    except (NumBufError, ValueError) as e:
        return _error(400, e)
    except Exception as e:
        logger.exception("benchmark failed")
        return _error(500, e)
