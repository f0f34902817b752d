# =============================================================================
# numdump - Sequence Adapter
# =============================================================================
#
# Copies an ordered sequence of numbers into contiguous float32 storage,
# either as a new Buffer (kept by the caller) or as a scratch array that
# the dump engine consumes once.
#
# Narrowing follows IEEE-754 round-to-nearest, ties-to-even. Values beyond
# the float32 range become +/-inf and nan stays nan.
#
# =============================================================================

import array
import logging
import numbers
from collections.abc import Sequence

import numpy as np

from .buffer import DTYPE, Buffer
from .config import check_element_count
from .errors import InvalidArgument

logger = logging.getLogger(__name__)

_NOT_SEQUENCES = (str, bytes, bytearray, memoryview)


def is_sequence(value):
    """Return True if *value* is an ordered sequence numdump can copy."""
    if isinstance(value, np.ndarray):
        return value.ndim == 1
    if isinstance(value, (Buffer,) + _NOT_SEQUENCES):
        return False
    return isinstance(value, (list, tuple, range, array.array, Sequence))


def _narrow(seq):
    if not is_sequence(seq):
        raise InvalidArgument(f"expected an ordered sequence, got {type(seq).__name__}")
    return _copy(seq)


def _copy(seq):
    # seq has already passed is_sequence(); element types are checked here.
    check_element_count(len(seq))

    if isinstance(seq, np.ndarray):
        if seq.dtype.kind not in "biuf":
            raise InvalidArgument(f"cannot convert array of dtype {seq.dtype} to float32")
        source = seq
    else:
        for item in seq:
            if not isinstance(item, numbers.Real):
                raise InvalidArgument(
                    f"sequence holds a non-numeric element of type {type(item).__name__}"
                )
        try:
            source = np.array(seq, dtype=np.float64)
        except OverflowError:
            raise InvalidArgument("sequence holds an integer too large for float") from None

    # Always a fresh allocation; caller memory is never aliased.
    with np.errstate(over="ignore"):
        return np.array(source, dtype=DTYPE, order="C")


def from_sequence(seq):
    """Copy *seq* into a new Buffer."""
    data = _narrow(seq)
    logger.debug("Created array of %d elements from %s", data.shape[0], type(seq).__name__)
    return Buffer(data)


def to_scratch(seq):
    """Copy *seq* into a transient float32 array.

    Returns ``(scratch, n)``. No handle is created; the array is meant to be
    handed straight to :func:`numdump.writer.write_binary`.
    """
    data = _narrow(seq)
    return data, data.shape[0]
