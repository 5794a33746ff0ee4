"""numbuf buffer type — immutable, contiguous float64 storage."""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Self

import numpy as np

from numbuf.core.errors import IndexOutOfRange, InvalidLength, UnsupportedInput

# integer and floating dtypes; bool and complex are rejected
_REAL_KINDS = frozenset("iuf")


def _copy_in(source: object) -> np.ndarray:
    """Validate *source* and copy it into fresh, read-only float64 storage."""
    if isinstance(source, NumericBuffer):
        source = source.data
    try:
        arr = np.asarray(source)
    except (TypeError, ValueError) as e:
        # ragged nested sequences
        raise UnsupportedInput(
            f"Cannot build a buffer from {type(source).__name__}: {e}"
        ) from e
    if arr.ndim != 1:
        raise UnsupportedInput(
            f"Expected a 1-D sequence, got {arr.ndim}-D input ({type(source).__name__})"
        )
    if arr.dtype.kind not in _REAL_KINDS:
        raise UnsupportedInput(f"Datatype not supported: {arr.dtype}")
    if arr.shape[0] == 0:
        raise InvalidLength(0)
    data = np.array(arr, dtype=np.float64, order="C", copy=True)
    data.flags.writeable = False
    return data


@dataclass(frozen=True, eq=False)
class NumericBuffer:
    """Fixed-length float64 buffer that owns a private copy of its data.

    The constructor accepts any 1-D sequence of real numbers (lists, tuples,
    ``array.array``, integer or float numpy arrays, other buffers) and copies
    it, so later changes to the caller's sequence are not observed.  The
    stored array is flagged read-only.
    """

    data: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", _copy_in(self.data))

    # -- construction ------------------------------------------------------

    @classmethod
    def from_sequence(cls, source: object, length: int | None = None) -> Self:
        """Copy *source*, optionally checking it holds exactly *length* values."""
        buf = cls(data=source)
        if length is not None and length != buf.length:
            raise InvalidLength(buf.length, expected=length)
        return buf

    @classmethod
    def from_list(cls, values: list[float]) -> Self:
        return cls(data=values)

    @classmethod
    def full(cls, n: int, value: float) -> Self:
        if n <= 0:
            raise InvalidLength(n)
        return cls._adopt(np.full(n, value, dtype=np.float64))

    @classmethod
    def ones(cls, n: int) -> Self:
        return cls.full(n, 1.0)

    @classmethod
    def _adopt(cls, arr: np.ndarray) -> Self:
        """Wrap a freshly allocated float64 array without copying it again.

        Only for arrays nothing else references, e.g. kernel outputs.
        """
        if arr.ndim != 1 or arr.dtype != np.float64 or not arr.flags.c_contiguous:
            arr = np.ascontiguousarray(arr, dtype=np.float64).reshape(-1)
        if arr.shape[0] == 0:
            raise InvalidLength(0)
        arr.flags.writeable = False
        buf = object.__new__(cls)
        object.__setattr__(buf, "data", arr)
        return buf

    # -- access ------------------------------------------------------------

    @property
    def length(self) -> int:
        return self.data.shape[0]

    def __len__(self) -> int:
        return self.data.shape[0]

    def read(self, index: int) -> float:
        """Return the element at *index*; no negative wrap-around."""
        i = operator.index(index)
        if i < 0 or i >= self.length:
            raise IndexOutOfRange(i, self.length)
        return float(self.data[i])

    def to_list(self) -> list[float]:
        return self.data.tolist()

    def to_numpy(self) -> np.ndarray:
        """Writable copy of the contents."""
        return self.data.copy()

    def __repr__(self) -> str:
        body = np.array2string(self.data, threshold=8, separator=", ")
        return f"NumericBuffer[{self.length}]({body})"

    def __eq__(self, other: object) -> bool:
        # bit-for-bit: NaN payloads and signed zeros are significant
        if not isinstance(other, NumericBuffer):
            return NotImplemented
        return self.data.tobytes() == other.data.tobytes()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.data.tobytes()))
