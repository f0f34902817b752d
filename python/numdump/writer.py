# =============================================================================
# numdump - Dump Engine
# =============================================================================
#
# Writes a run of float32 values to a file as one flat byte stream:
#
#   count * 4 bytes, native byte order, no header, no length prefix
#
# The destination is truncated on open. There is no atomic rename, so a
# failure part-way through can leave a partial file behind; the caller is
# always told through IncompleteWrite or CloseFailed.
#
# =============================================================================

import logging
import operator
import os

import numpy as np

from .config import FLOAT_SIZE, check_element_count
from .errors import CannotOpenFile, CloseFailed, IncompleteWrite, InvalidArgument

logger = logging.getLogger(__name__)


def _check_path(path):
    try:
        path = os.fspath(path)
    except TypeError:
        raise InvalidArgument(f"path must be a string or path-like, got {type(path).__name__}") from None
    if not path:
        raise InvalidArgument("path must not be empty")
    return path


def _contiguous(values, count):
    if isinstance(count, bool):
        raise InvalidArgument("count must be an integer, got bool")
    try:
        count = operator.index(count)
    except TypeError:
        raise InvalidArgument(f"count must be an integer, got {type(count).__name__}") from None
    if count < 0:
        raise InvalidArgument(f"count must be non-negative, got {count}")

    if not (isinstance(values, np.ndarray) and values.dtype == np.float32
            and values.ndim == 1 and values.flags.c_contiguous):
        raise InvalidArgument("values must be a contiguous 1-D float32 array")
    if count > values.shape[0]:
        raise InvalidArgument(f"count {count} exceeds the {values.shape[0]} values supplied")
    return values[:count], count


def _abandon(fh, path):
    try:
        fh.close()
    except OSError as exc:
        logger.warning("Closing %s after a failed write also failed: %s", path, exc)


def write_binary(path, values, count):
    """Write the first *count* float32 values of *values* to *path*.

    Returns True on success. Raises CannotOpenFile, IncompleteWrite or
    CloseFailed; InvalidArgument for a bad path, count or value array.
    """
    path = _check_path(path)
    values, count = _contiguous(values, count)
    expected = count * FLOAT_SIZE

    try:
        fh = open(path, "wb")
    except OSError as exc:
        raise CannotOpenFile(f"cannot open {path!r} for writing: {exc}", path) from exc

    try:
        written = fh.write(memoryview(values).cast("B"))
    except OSError as exc:
        _abandon(fh, path)
        logger.warning("Write to %s failed; the file may be partial", path)
        raise IncompleteWrite(
            f"write to {path!r} failed: {exc}", path, expected, 0
        ) from exc

    if written != expected:
        _abandon(fh, path)
        logger.warning("Short write to %s: %d of %d bytes", path, written, expected)
        raise IncompleteWrite(
            f"wrote {written} of {expected} bytes to {path!r}", path, expected, written
        )

    try:
        fh.close()
    except OSError as exc:
        logger.warning("Close of %s failed; the file may be partial", path)
        raise CloseFailed(f"closing {path!r} failed: {exc}", path) from exc

    logger.debug("Wrote %d floats (%d bytes) to %s", count, expected, path)
    return True


def read_binary(path):
    """Read a dump back as a float32 ndarray in native byte order.

    The file length is checked against ``max_elements`` before any data is
    read.
    """
    path = _check_path(path)
    try:
        fh = open(path, "rb")
    except OSError as exc:
        raise CannotOpenFile(f"cannot open {path!r} for reading: {exc}", path) from exc

    with fh:
        try:
            length = fh.seek(0, os.SEEK_END)
        except OSError as exc:
            raise CannotOpenFile(f"cannot read {path!r}: {exc}", path) from exc
        if length % FLOAT_SIZE:
            raise InvalidArgument(
                f"{path!r} is {length} bytes, not a multiple of {FLOAT_SIZE}"
            )
        check_element_count(length // FLOAT_SIZE)
        try:
            fh.seek(0)
            raw = fh.read()
        except OSError as exc:
            raise CannotOpenFile(f"cannot read {path!r}: {exc}", path) from exc

    return np.frombuffer(raw, dtype=np.float32).copy()
