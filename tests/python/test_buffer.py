#!/usr/bin/env python3
# =============================================================================
# numdump - Buffer Test Suite
# =============================================================================
#
# Tests for the Buffer handle:
# - create() sizing and zero fill
# - 1-based get/set and bounds checks
# - float32 narrowing on set
# - released handles
#
# Run with: pytest test_buffer.py -v
#

import numpy as np
import pytest

from numdump import buffer
from numdump.buffer import Buffer
from numdump.errors import IndexOutOfRange, InvalidArgument, InvalidHandle, NumdumpError


# =============================================================================
# Creation Tests
# =============================================================================

class TestCreate:
    """Test buffer.create()."""

    @pytest.mark.parametrize("n", [0, 1, 7, 1024])
    def test_size_matches_request(self, n):
        """Test that size(create(n)) == n."""
        buf = buffer.create(n)
        assert buffer.size(buf) == n
        assert len(buf) == n
        assert buf.nbytes == 4 * n

    def test_zero_filled(self):
        """Test that unset elements read back as 0.0."""
        buf = buffer.create(16)
        for i in range(1, 17):
            assert buffer.get(buf, i) == 0.0

    def test_numpy_integer_size(self):
        """Test that numpy integers are accepted as sizes."""
        buf = buffer.create(np.int64(5))
        assert buffer.size(buf) == 5

    def test_negative_size(self):
        """Test that a negative size is rejected."""
        with pytest.raises(InvalidArgument):
            buffer.create(-1)

    @pytest.mark.parametrize("n", [2.0, "3", None, True])
    def test_non_integer_size(self, n):
        """Test that non-integer sizes are rejected."""
        with pytest.raises(InvalidArgument):
            buffer.create(n)

    def test_storage_is_contiguous_float32(self):
        """Test the backing allocation layout."""
        buf = buffer.create(8)
        values = buf.values
        assert values.dtype == np.float32
        assert values.flags.c_contiguous
        assert buf.data_ptr() == values.ctypes.data


# =============================================================================
# Element Access Tests
# =============================================================================

class TestElementAccess:
    """Test 1-based get/set."""

    def test_set_get_round_trip(self):
        """Test that get returns what set stored."""
        buf = buffer.create(4)
        for i, v in enumerate([1.5, -2.25, 0.0, 1024.0], start=1):
            buffer.set(buf, i, v)
            assert buffer.get(buf, i) == v

    def test_index_one_is_first_element(self):
        """Test that index 1 maps to storage position 0."""
        buf = buffer.create(3)
        buffer.set(buf, 1, 9.0)
        assert buf.to_numpy().tolist() == [9.0, 0.0, 0.0]
        buffer.set(buf, 3, 7.0)
        assert buf.to_numpy().tolist() == [9.0, 0.0, 7.0]

    @pytest.mark.parametrize("index", [0, -1, 5, 100])
    def test_get_out_of_range(self, index):
        """Test out of range reads raise IndexOutOfRange."""
        buf = buffer.create(4)
        with pytest.raises(IndexOutOfRange):
            buffer.get(buf, index)

    @pytest.mark.parametrize("index", [0, -1, 5, 100])
    def test_set_out_of_range_does_not_mutate(self, index):
        """Test out of range writes raise and leave storage untouched."""
        buf = buffer.create(4)
        with pytest.raises(IndexOutOfRange):
            buffer.set(buf, index, 1.0)
        assert buf.to_numpy().tolist() == [0.0, 0.0, 0.0, 0.0]

    def test_empty_buffer_has_no_valid_index(self):
        """Test that a zero-size buffer rejects index 1."""
        buf = buffer.create(0)
        with pytest.raises(IndexOutOfRange):
            buffer.get(buf, 1)

    def test_index_out_of_range_is_index_error(self):
        """Test IndexOutOfRange is catchable as IndexError."""
        buf = buffer.create(2)
        with pytest.raises(IndexError) as excinfo:
            buffer.get(buf, 3)
        assert isinstance(excinfo.value, NumdumpError)
        assert excinfo.value.index == 3
        assert excinfo.value.size == 2

    @pytest.mark.parametrize("index", [1.0, "1", None, True])
    def test_non_integer_index(self, index):
        """Test that non-integer indices are rejected."""
        buf = buffer.create(2)
        with pytest.raises(InvalidArgument):
            buffer.get(buf, index)

    @pytest.mark.parametrize("value", ["1.0", None, [1.0], 1j])
    def test_non_numeric_value(self, value):
        """Test that set rejects values that are not real numbers."""
        buf = buffer.create(2)
        with pytest.raises(InvalidArgument):
            buffer.set(buf, 1, value)
        assert buffer.get(buf, 1) == 0.0

    def test_set_narrows_to_float32(self):
        """Test that stored values are rounded to single precision."""
        buf = buffer.create(1)
        buffer.set(buf, 1, 0.1)
        assert buffer.get(buf, 1) == float(np.float32(0.1))
        assert buffer.get(buf, 1) != 0.1

    def test_set_overflow_becomes_inf(self):
        """Test that values beyond float32 range become infinity."""
        buf = buffer.create(2)
        buffer.set(buf, 1, 1e300)
        buffer.set(buf, 2, -1e300)
        assert buffer.get(buf, 1) == float("inf")
        assert buffer.get(buf, 2) == float("-inf")

    def test_set_accepts_integers(self):
        """Test that integer values are stored as floats."""
        buf = buffer.create(1)
        buffer.set(buf, 1, 3)
        value = buffer.get(buf, 1)
        assert isinstance(value, float)
        assert value == 3.0


# =============================================================================
# Handle Tests
# =============================================================================

class TestHandle:
    """Test live/released handle behaviour."""

    @pytest.mark.parametrize("not_a_buffer", [None, [1.0, 2.0], 3, np.zeros(3, np.float32)])
    def test_invalid_handle(self, not_a_buffer):
        """Test that non-buffers raise InvalidHandle."""
        with pytest.raises(InvalidHandle):
            buffer.size(not_a_buffer)
        with pytest.raises(InvalidHandle):
            buffer.get(not_a_buffer, 1)
        with pytest.raises(InvalidHandle):
            buffer.set(not_a_buffer, 1, 1.0)

    def test_released_handle(self):
        """Test that a released buffer is no longer live."""
        buf = buffer.create(3)
        assert buf.is_valid()
        buf.release()
        assert not buf.is_valid()
        with pytest.raises(InvalidHandle):
            buffer.size(buf)
        with pytest.raises(InvalidHandle):
            buffer.get(buf, 1)
        with pytest.raises(InvalidHandle):
            buf.values
        buf.release()

    def test_invalid_handle_is_type_error(self):
        """Test InvalidHandle is catchable as TypeError."""
        with pytest.raises(TypeError):
            buffer.size("not an array")

    def test_values_view_is_read_only(self):
        """Test the storage view cannot be written through."""
        buf = buffer.create(2)
        with pytest.raises(ValueError):
            buf.values[0] = 1.0

    def test_to_numpy_is_a_copy(self):
        """Test that to_numpy() does not alias storage."""
        buf = buffer.create(2)
        copy = buf.to_numpy()
        copy[0] = 5.0
        assert buffer.get(buf, 1) == 0.0

    def test_tobytes(self):
        """Test tobytes() yields native float32 bytes."""
        buf = buffer.create(2)
        buffer.set(buf, 2, 1.5)
        assert buf.tobytes() == np.array([0.0, 1.5], dtype=np.float32).tobytes()

    def test_repr(self):
        """Test repr for short, long and released buffers."""
        assert repr(buffer.create(2)) == "Buffer(size=2, [0.0, 0.0])"
        assert "..." in repr(buffer.create(10))
        buf = buffer.create(1)
        buf.release()
        assert repr(buf) == "Buffer(<released>)"

    def test_is_buffer_type(self):
        """Test create() returns a Buffer."""
        assert isinstance(buffer.create(1), Buffer)
