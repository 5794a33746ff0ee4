"""numbuf — immutable float64 buffers with a compiled element-wise multiply.

    from numbuf import NumericBuffer, multiply

    a = NumericBuffer.from_list([2.0, 3.0, 4.0])
    b = NumericBuffer.from_list([5.0, 0.0, -1.0])
    multiply(a, b).to_list()  # [10.0, 0.0, -4.0]
"""

__version__ = "0.1.0"

from numbuf.core import (
    NumBufError,
    InvalidLength,
    LengthMismatch,
    IndexOutOfRange,
    UnsupportedInput,
    NumericBuffer,
    multiply,
    get_backend_name,
    set_backend,
    available_backends,
)
from numbuf.bench import run_benchmark, format_report

__all__ = [
    "NumBufError", "InvalidLength", "LengthMismatch", "IndexOutOfRange", "UnsupportedInput",
    "NumericBuffer", "multiply",
    "get_backend_name", "set_backend", "available_backends",
    "run_benchmark", "format_report",
]
