"""Element-wise multiply kernels, one per backend.

Every kernel takes two equal-length, C-contiguous float64 arrays and returns
a newly allocated array with the pointwise product (a device array for
cupy; see ``backend.to_numpy``).  Inputs are never written.

All kernels use plain IEEE-754 double multiplication, subnormals included,
so their results agree bit-for-bit.  XLA flushes subnormals to zero on CPU,
which is why there is no jax kernel.
"""

from __future__ import annotations

import functools
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable

import numpy as np

# below this many elements per thread, chunking costs more than it saves
MIN_CHUNK = 16_384


@dataclass(frozen=True)
class Kernel:
    name: str
    fn: Callable[[np.ndarray, np.ndarray, int], np.ndarray]
    parallel: bool = False  # accepts workers > 1

    def __call__(self, a: np.ndarray, b: np.ndarray, workers: int = 1) -> np.ndarray:
        return self.fn(a, b, workers)


def chunk_bounds(n: int, parts: int) -> list[tuple[int, int]]:
    """Split [0, n) into at most *parts* contiguous, non-empty ranges."""
    parts = max(1, min(parts, n))
    step, extra = divmod(n, parts)
    bounds = []
    lo = 0
    for i in range(parts):
        hi = lo + step + (1 if i < extra else 0)
        bounds.append((lo, hi))
        lo = hi
    return bounds


# ---------------------------------------------------------------------------
# python: interpreted loop
# ---------------------------------------------------------------------------

def _python_multiply(a: np.ndarray, b: np.ndarray, workers: int) -> np.ndarray:
    left = a.tolist()
    right = b.tolist()
    out = [0.0] * len(left)
    for i in range(len(left)):
        out[i] = left[i] * right[i]
    return np.array(out, dtype=np.float64)


# ---------------------------------------------------------------------------
# numpy: ufunc into a preallocated output, optionally split across threads
# ---------------------------------------------------------------------------

def _numpy_multiply(a: np.ndarray, b: np.ndarray, workers: int) -> np.ndarray:
    out = np.empty(a.shape[0], dtype=np.float64)
    n = a.shape[0]
    if workers <= 1 or n < 2 * MIN_CHUNK:
        np.multiply(a, b, out=out)
        return out

    chunks = chunk_bounds(n, min(workers, n // MIN_CHUNK))

    def _run(bounds: tuple[int, int]) -> None:
        lo, hi = bounds
        np.multiply(a[lo:hi], b[lo:hi], out=out[lo:hi])

    # numpy drops the GIL inside the ufunc loop; each chunk owns its slice of out
    with ThreadPoolExecutor(max_workers=len(chunks)) as ex:
        list(ex.map(_run, chunks))
    return out


# ---------------------------------------------------------------------------
# numba: JIT-compiled loops, serial and prange
# ---------------------------------------------------------------------------

@functools.lru_cache(maxsize=None)
def _numba_kernels():
    import numba

    @numba.njit
    def serial(a, b, out):
        for i in range(a.shape[0]):
            out[i] = a[i] * b[i]

    @numba.njit(parallel=True)
    def parallel(a, b, out):
        for i in numba.prange(a.shape[0]):
            out[i] = a[i] * b[i]

    return numba, serial, parallel


def _numba_multiply(a: np.ndarray, b: np.ndarray, workers: int) -> np.ndarray:
    numba, serial, parallel = _numba_kernels()
    out = np.empty(a.shape[0], dtype=np.float64)
    if workers <= 1:
        serial(a, b, out)
    else:
        previous = numba.get_num_threads()
        numba.set_num_threads(min(workers, numba.config.NUMBA_NUM_THREADS))
        try:
            parallel(a, b, out)
        finally:
            numba.set_num_threads(previous)
    return out


# ---------------------------------------------------------------------------
# cupy: device round-trip
# ---------------------------------------------------------------------------

def _cupy_multiply(a: np.ndarray, b: np.ndarray, workers: int) -> np.ndarray:
    import cupy
    return cupy.multiply(cupy.asarray(a), cupy.asarray(b))


KERNELS: dict[str, Kernel] = {
    "python": Kernel("python", _python_multiply),
    "numpy": Kernel("numpy", _numpy_multiply, parallel=True),
    "numba": Kernel("numba", _numba_multiply, parallel=True),
    "cupy": Kernel("cupy", _cupy_multiply),
}
