# =============================================================================
# numdump - Buffer
# =============================================================================
#
# A fixed-size array of float32 values backed by one contiguous numpy
# allocation. The public accessors use 1-based indices; storage and the
# dump engine use 0-based contiguous layout.
#
# A Buffer has a single owner. Mutating one Buffer from several threads
# needs external synchronization.
#
# =============================================================================

import numbers
import operator

import numpy as np

from .config import FLOAT_SIZE, check_element_count
from .errors import IndexOutOfRange, InvalidArgument, InvalidHandle

DTYPE = np.float32


class Buffer:
    """Opaque handle to a fixed-size float32 array.

    Created with :func:`create` or from a sequence; never resized.
    ``release()`` drops the storage, after which the handle is no longer
    live and every operation on it raises InvalidHandle.
    """

    __slots__ = ("_data", "_size")

    def __init__(self, data):
        # Takes ownership of *data*; callers pass a fresh 1-D float32 array.
        self._data = data
        self._size = int(data.shape[0])

    @property
    def size(self):
        _require_live(self)
        return self._size

    def __len__(self):
        return self.size

    @property
    def nbytes(self):
        return self.size * FLOAT_SIZE

    @property
    def values(self):
        """Read-only view of the contiguous storage."""
        _require_live(self)
        view = self._data.view()
        view.flags.writeable = False
        return view

    def is_valid(self):
        return self._data is not None

    def release(self):
        """Drop the backing allocation. Releasing twice is a no-op."""
        self._data = None

    def data_ptr(self):
        """Address of the first element of the contiguous allocation."""
        _require_live(self)
        return self._data.ctypes.data

    def to_numpy(self):
        """Return a copy of the values as a float32 ndarray."""
        _require_live(self)
        return self._data.copy()

    def tobytes(self):
        """Native-order bytes, identical to what :func:`numdump.dump` writes."""
        _require_live(self)
        return self._data.tobytes()

    def __repr__(self):
        if self._data is None:
            return "Buffer(<released>)"
        if self._size <= 6:
            body = ", ".join(repr(float(v)) for v in self._data)
        else:
            head = ", ".join(repr(float(v)) for v in self._data[:3])
            tail = ", ".join(repr(float(v)) for v in self._data[-3:])
            body = f"{head}, ..., {tail}"
        return f"Buffer(size={self._size}, [{body}])"


def _require_live(buf):
    if not isinstance(buf, Buffer):
        raise InvalidHandle(f"expected a numdump array, got {type(buf).__name__}")
    if buf._data is None:
        raise InvalidHandle("array has been released")


def _to_index(index, size):
    if isinstance(index, bool):
        raise InvalidArgument("index must be an integer, got bool")
    try:
        index = operator.index(index)
    except TypeError:
        raise InvalidArgument(f"index must be an integer, got {type(index).__name__}") from None
    if not 1 <= index <= size:
        raise IndexOutOfRange(index, size)
    return index - 1


def _to_float32(value):
    if not isinstance(value, numbers.Real):
        raise InvalidArgument(f"value must be a real number, got {type(value).__name__}")
    try:
        value = float(value)
    except OverflowError:
        raise InvalidArgument(f"value {value!r} is too large to convert to float") from None
    with np.errstate(over="ignore"):
        return DTYPE(value)


def create(n):
    """Allocate a zero-filled Buffer holding exactly *n* floats."""
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise InvalidArgument(f"size must be an integer, got {type(n).__name__}")
    n = int(n)
    if n < 0:
        raise InvalidArgument(f"size must be non-negative, got {n}")
    return _allocate(n)


def _allocate(n):
    # n is already a validated non-negative int.
    check_element_count(n)
    return Buffer(np.zeros(n, dtype=DTYPE))


def set(buf, index, value):
    """Store *value* (narrowed to float32) at 1-based *index*."""
    _require_live(buf)
    position = _to_index(index, buf._size)
    buf._data[position] = _to_float32(value)


def get(buf, index):
    """Return the value at 1-based *index* as a Python float."""
    _require_live(buf)
    position = _to_index(index, buf._size)
    return float(buf._data[position])


def size(buf):
    """Return the number of elements in *buf*."""
    _require_live(buf)
    return buf._size
