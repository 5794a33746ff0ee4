"""numbuf exception hierarchy."""

from __future__ import annotations


class NumBufError(Exception):
    """Base exception for all numbuf errors."""


class InvalidLength(NumBufError, ValueError):
    """Buffer construction with an empty source or a wrong declared length."""

    def __init__(self, length: int, expected: int | None = None) -> None:
        self.length = length
        self.expected = expected
        if expected is None:
            msg = f"Invalid buffer length: {length} (must be > 0)"
        else:
            msg = f"Invalid buffer length: declared {expected}, source has {length} elements"
        super().__init__(msg)


class LengthMismatch(NumBufError, ValueError):
    """Operands of an element-wise operation disagree in length."""

    def __init__(self, left: int, right: int) -> None:
        self.left = left
        self.right = right
        super().__init__(f"Length mismatch: a({left}) vs b({right})")


class IndexOutOfRange(NumBufError, IndexError):
    """Read outside [0, length)."""

    def __init__(self, index: int, length: int) -> None:
        self.index = index
        self.length = length
        super().__init__(f"Index {index} out of range (0..{length - 1})")


class UnsupportedInput(NumBufError, TypeError):
    """Source is not a 1-D sequence of real numbers."""
