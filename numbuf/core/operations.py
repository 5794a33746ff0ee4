"""numbuf operations — pure functions over NumericBuffer."""

from __future__ import annotations

import logging
import time

from numbuf.config import DEFAULT_WORKERS
from numbuf.core.backend import get_kernel, to_numpy
from numbuf.core.errors import LengthMismatch
from numbuf.core.types import NumericBuffer

logger = logging.getLogger(__name__)


def multiply(
    a: NumericBuffer,
    b: NumericBuffer,
    *,
    backend: str | None = None,
    workers: int | None = None,
) -> NumericBuffer:
    """Element-wise product: c[i] = a[i] * b[i] → NumericBuffer[N].

    Plain IEEE-754 double multiplication, NaN and Inf propagate as usual.
    Neither operand is modified, also when ``a is b``.  With ``workers > 1``
    the numpy and numba backends split the range across threads; the result
    is identical to the serial one and is returned only once complete.
    """
    if not isinstance(a, NumericBuffer) or not isinstance(b, NumericBuffer):
        raise TypeError(
            f"multiply expects NumericBuffer operands, got {type(a).__name__} and {type(b).__name__}"
        )
    if a.length != b.length:
        raise LengthMismatch(a.length, b.length)

    kernel = get_kernel(backend)
    if workers is None:
        # the configured default only applies where threads can be used
        workers = DEFAULT_WORKERS if kernel.parallel else 1
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    if workers > 1 and not kernel.parallel:
        raise ValueError(f"Backend {kernel.name!r} does not support workers > 1")

    t0 = time.perf_counter()
    out = to_numpy(kernel(a.data, b.data, workers))
    elapsed = time.perf_counter() - t0
    logger.debug(
        "multiply n=%d backend=%s workers=%d: %.3f ms",
        a.length, kernel.name, workers, elapsed * 1000,
    )
    return NumericBuffer._adopt(out)
