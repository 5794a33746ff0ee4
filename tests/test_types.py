"""Tests for numbuf.core.types."""

import array
import dataclasses
import math

import numpy as np
import pytest

from numbuf.core.errors import (
    NumBufError,
    InvalidLength,
    IndexOutOfRange,
    UnsupportedInput,
)
from numbuf.core.types import NumericBuffer


# ── construction ───────────────────────────────────────────────────────────

class TestConstruct:
    def test_from_list(self):
        buf = NumericBuffer.from_list([1.0, 2.0, 3.0])
        assert buf.length == 3
        assert len(buf) == 3
        assert buf.to_list() == [1.0, 2.0, 3.0]
        assert buf.data.dtype == np.float64

    def test_from_tuple(self):
        assert NumericBuffer((4.0, 5.0)).to_list() == [4.0, 5.0]

    def test_from_float64_array(self):
        src = np.array([0.5, 1.5, 2.5])
        assert NumericBuffer(src).to_list() == [0.5, 1.5, 2.5]

    def test_int_array_converted(self):
        buf = NumericBuffer(np.array([1, -2, 3], dtype=np.int32))
        assert buf.data.dtype == np.float64
        assert buf.to_list() == [1.0, -2.0, 3.0]

    def test_int_list_converted(self):
        assert NumericBuffer.from_list([1, 2]).to_list() == [1.0, 2.0]

    def test_from_array_module(self):
        buf = NumericBuffer(array.array("d", [1.25, 2.5]))
        assert buf.to_list() == [1.25, 2.5]

    def test_from_other_buffer_copies(self):
        a = NumericBuffer.from_list([1.0, 2.0])
        b = NumericBuffer(a)
        assert a == b
        assert b.data is not a.data

    def test_data_is_contiguous(self):
        src = np.arange(10, dtype=np.float64)[::2]  # strided view
        buf = NumericBuffer(src)
        assert buf.data.flags.c_contiguous
        assert buf.to_list() == [0.0, 2.0, 4.0, 6.0, 8.0]

    def test_full_and_ones(self):
        assert NumericBuffer.full(3, 2.5).to_list() == [2.5, 2.5, 2.5]
        assert NumericBuffer.ones(2).to_list() == [1.0, 1.0]

    def test_from_sequence_declared_length(self):
        buf = NumericBuffer.from_sequence([1.0, 2.0, 3.0], length=3)
        assert buf.length == 3


class TestConstructErrors:
    def test_empty_list(self):
        with pytest.raises(InvalidLength, match="must be > 0"):
            NumericBuffer.from_list([])

    def test_empty_array(self):
        with pytest.raises(InvalidLength):
            NumericBuffer(np.array([], dtype=np.float64))

    def test_invalid_length_is_value_error(self):
        with pytest.raises(ValueError):
            NumericBuffer.from_list([])

    def test_full_zero(self):
        with pytest.raises(InvalidLength):
            NumericBuffer.full(0, 1.0)

    def test_declared_length_mismatch(self):
        with pytest.raises(InvalidLength) as exc:
            NumericBuffer.from_sequence([1.0, 2.0, 3.0], length=4)
        assert exc.value.length == 3
        assert exc.value.expected == 4

    @pytest.mark.parametrize("source", [
        "abc",
        3.0,
        {"a": 1.0},
        [[1.0, 2.0], [3.0, 4.0]],
        [[1.0], [2.0, 3.0]],
        [1 + 2j, 3.0],
        [True, False],
        [1.0, None],
        ["1.0", "2.0"],
    ])
    def test_unsupported(self, source):
        with pytest.raises(UnsupportedInput):
            NumericBuffer(source)

    def test_unsupported_is_type_error(self):
        with pytest.raises(TypeError):
            NumericBuffer("abc")

    def test_all_errors_share_base(self):
        for exc in (InvalidLength(0), IndexOutOfRange(3, 3), UnsupportedInput("x")):
            assert isinstance(exc, NumBufError)


# ── ownership and immutability ────────────────────────────────────────────

class TestOwnership:
    def test_source_array_mutation_not_observed(self):
        src = np.array([1.0, 2.0, 3.0])
        buf = NumericBuffer(src)
        src[0] = 99.0
        assert buf.read(0) == 1.0

    def test_source_list_mutation_not_observed(self):
        src = [1.0, 2.0]
        buf = NumericBuffer.from_list(src)
        src.append(3.0)
        src[1] = -1.0
        assert buf.to_list() == [1.0, 2.0]

    def test_source_stays_writable(self):
        src = np.array([1.0, 2.0])
        NumericBuffer(src)
        src[1] = 5.0
        assert src.flags.writeable

    def test_frozen(self):
        buf = NumericBuffer.from_list([1.0])
        with pytest.raises(dataclasses.FrozenInstanceError):
            buf.data = np.array([2.0])

    def test_data_read_only(self):
        buf = NumericBuffer.from_list([1.0, 2.0])
        with pytest.raises(ValueError):
            buf.data[0] = 5.0

    def test_to_numpy_is_writable_copy(self):
        buf = NumericBuffer.from_list([1.0, 2.0])
        arr = buf.to_numpy()
        arr[0] = 42.0
        assert arr.flags.writeable
        assert buf.read(0) == 1.0


# ── read ───────────────────────────────────────────────────────────────────

class TestRead:
    def test_read_values(self):
        buf = NumericBuffer.from_list([2.0, 3.0, 4.0])
        assert [buf.read(i) for i in range(3)] == [2.0, 3.0, 4.0]
        assert isinstance(buf.read(0), float)

    def test_read_numpy_integer(self):
        buf = NumericBuffer.from_list([2.0, 3.0])
        assert buf.read(np.int64(1)) == 3.0

    def test_index_equal_to_length(self):
        buf = NumericBuffer.from_list([2.0, 3.0, 4.0])
        with pytest.raises(IndexOutOfRange) as exc:
            buf.read(3)
        assert exc.value.index == 3
        assert exc.value.length == 3

    def test_negative_index_rejected(self):
        buf = NumericBuffer.from_list([2.0, 3.0, 4.0])
        with pytest.raises(IndexOutOfRange):
            buf.read(-1)

    def test_out_of_range_is_index_error(self):
        with pytest.raises(IndexError):
            NumericBuffer.from_list([1.0]).read(5)

    def test_non_integer_index(self):
        with pytest.raises(TypeError):
            NumericBuffer.from_list([1.0, 2.0]).read(1.5)


# ── equality and repr ─────────────────────────────────────────────────────

class TestEquality:
    def test_equal(self):
        a = NumericBuffer.from_list([1.0, 2.0])
        b = NumericBuffer.from_list([1.0, 2.0])
        c = NumericBuffer.from_list([2.0, 1.0])
        assert a == b
        assert a != c
        assert hash(a) == hash(b)

    def test_bitwise_signed_zero(self):
        assert NumericBuffer.from_list([0.0]) != NumericBuffer.from_list([-0.0])

    def test_nan_equals_itself(self):
        a = NumericBuffer.from_list([math.nan])
        assert a == NumericBuffer(a)

    def test_not_equal_to_list(self):
        assert NumericBuffer.from_list([1.0]) != [1.0]

    def test_repr(self):
        r = repr(NumericBuffer.from_list([1.0, 2.0, 3.0]))
        assert r.startswith("NumericBuffer[3](")

    def test_repr_long_is_summarized(self):
        r = repr(NumericBuffer.ones(10_000))
        assert "..." in r
        assert len(r) < 200
