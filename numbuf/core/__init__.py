"""numbuf core: buffer type, errors, kernel backends and operations."""

from numbuf.core.errors import (
    NumBufError,
    InvalidLength,
    LengthMismatch,
    IndexOutOfRange,
    UnsupportedInput,
)
from numbuf.core.types import NumericBuffer
from numbuf.core.operations import multiply
from numbuf.core.backend import (
    get_backend_name, set_backend, available_backends, get_kernel, to_numpy,
)

__all__ = [
    "NumBufError", "InvalidLength", "LengthMismatch", "IndexOutOfRange", "UnsupportedInput",
    "NumericBuffer",
    "multiply",
    "get_backend_name", "set_backend", "available_backends", "get_kernel", "to_numpy",
]
