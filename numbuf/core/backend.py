"""numbuf backend — pluggable compiled core for element-wise kernels.

Usage:
    from numbuf.core.backend import get_backend_name, set_backend, to_numpy

    set_backend("numba")     # JIT loop (requires numba installed)
    kernel = get_kernel()    # multiply kernel of the current backend
    arr = to_numpy(gpu_arr)  # convert any backend array to numpy
"""

from __future__ import annotations

import importlib
import importlib.util
import logging

import numpy as np

from numbuf.config import DEFAULT_BACKEND
from numbuf.core.kernels import KERNELS, Kernel

logger = logging.getLogger(__name__)

_VALID_BACKENDS = set(KERNELS)
# backends that need a third-party library beyond numpy
_OPTIONAL_MODULES = {"numba": "numba", "cupy": "cupy"}
_current_backend: str = DEFAULT_BACKEND


def get_backend_name() -> str:
    """Return the name of the current backend."""
    return _current_backend


def set_backend(name: str) -> None:
    """Set the kernel backend. One of: 'numpy', 'numba', 'python', 'cupy'."""
    global _current_backend
    if name not in _VALID_BACKENDS:
        raise ValueError(f"Unknown backend: {name!r}. Must be one of {sorted(_VALID_BACKENDS)}")
    module = _OPTIONAL_MODULES.get(name)
    if module is not None:
        importlib.import_module(module)
    if name != _current_backend:
        logger.info("Switching backend: %s -> %s", _current_backend, name)
    _current_backend = name


def available_backends() -> list[str]:
    """Backends whose library is installed, in a stable order."""
    names = []
    for name in sorted(_VALID_BACKENDS):
        module = _OPTIONAL_MODULES.get(name)
        if module is None or importlib.util.find_spec(module) is not None:
            names.append(name)
    return names


def get_kernel(name: str | None = None) -> Kernel:
    """Return the multiply kernel of *name*, or of the current backend."""
    name = name or _current_backend
    if name not in _VALID_BACKENDS:
        raise ValueError(f"Unknown backend: {name!r}. Must be one of {sorted(_VALID_BACKENDS)}")
    return KERNELS[name]


def to_numpy(arr) -> np.ndarray:
    """Convert any backend array to a numpy ndarray."""
    if isinstance(arr, np.ndarray):
        return arr
    # CuPy
    if hasattr(arr, "get"):
        return arr.get()
    # plain sequences
    return np.asarray(arr, dtype=np.float64)
