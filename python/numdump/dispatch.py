# =============================================================================
# numdump - Dispatcher
# =============================================================================
#
# The single entry point for creating and dumping arrays. An incoming value
# is classified once into one of three variants and routed from there:
#
#   SizeRequest(size)     -> zero-filled Buffer allocation
#   SequenceInput(items)  -> float32 copy, kept as a Buffer or dumped once
#   ArrayHandle(buffer)   -> buffer storage straight to the dump engine
#
# =============================================================================

import logging
import numbers
from dataclasses import dataclass
from typing import Any, Union

from . import adapter, buffer, writer
from .buffer import Buffer
from .errors import InvalidArgument

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SizeRequest:
    size: int


@dataclass(frozen=True)
class SequenceInput:
    items: Any


@dataclass(frozen=True)
class ArrayHandle:
    buffer: Buffer


Request = Union[SizeRequest, SequenceInput, ArrayHandle]


def _describe(value):
    if isinstance(value, numbers.Integral) and not isinstance(value, bool):
        return f"negative size {int(value)}"
    return type(value).__name__


def classify(value) -> Request:
    """Resolve *value* into a request variant.

    Raises InvalidArgument when *value* is none of a non-negative integer
    size, an ordered sequence or a numdump array. Downstream code trusts the
    variant and does not repeat these checks.
    """
    if isinstance(value, Buffer):
        return ArrayHandle(value)
    if isinstance(value, numbers.Integral) and not isinstance(value, bool):
        if value < 0:
            raise InvalidArgument(f"size must be non-negative, got {int(value)}")
        return SizeRequest(int(value))
    if adapter.is_sequence(value):
        return SequenceInput(value)
    raise InvalidArgument(
        f"expected size, sequence or array, got {type(value).__name__}"
    )


def new_array(value) -> Buffer:
    """Create an array from a size or from an ordered sequence."""
    try:
        request = classify(value)
    except InvalidArgument:
        raise InvalidArgument(f"expected size or sequence, got {_describe(value)}") from None

    if isinstance(request, SizeRequest):
        logger.debug("new: allocating %d elements", request.size)
        return buffer._allocate(request.size)
    if isinstance(request, SequenceInput):
        data = adapter._copy(request.items)
        logger.debug("new: copied %d elements from %s", data.shape[0], type(request.items).__name__)
        return Buffer(data)
    raise InvalidArgument("expected size or sequence, got Buffer")


def dump_array(value, path) -> bool:
    """Dump an array, or a sequence without creating an array, to *path*."""
    try:
        request = classify(value)
    except InvalidArgument:
        raise InvalidArgument(f"expected array or sequence, got {_describe(value)}") from None

    if isinstance(request, ArrayHandle):
        source = request.buffer
        return writer.write_binary(path, source.values, buffer.size(source))
    if isinstance(request, SequenceInput):
        scratch = adapter._copy(request.items)
        n = scratch.shape[0]
        logger.debug("dump: staged %d elements from %s", n, type(request.items).__name__)
        return writer.write_binary(path, scratch, n)
    raise InvalidArgument(f"expected array or sequence, got {type(value).__name__}")


def load_array(path) -> Buffer:
    """Read a dump back into a new array."""
    data = writer.read_binary(path)
    logger.debug("load: read %d elements from %s", data.shape[0], path)
    return Buffer(data)
