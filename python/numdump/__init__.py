# =============================================================================
# numdump - Numeric Array Buffer & Dump
# =============================================================================
#
# Fixed-size float32 arrays in one contiguous allocation, dumped to disk
# with a single write instead of one write per element.
#
# - Boundary API: new / set / get / size / dump (1-based indices)
# - Developer API: Buffer, from_sequence, to_scratch, write_binary
# - Configuration: configure(max_elements=..., log_level=...)
#
# Usage:
#   import numdump
#
#   arr = numdump.new([1.5, 2.5, 3.5])
#   numdump.set(arr, 1, 0.25)
#   numdump.dump(arr, "out.bin")          # 12 bytes, native float32
#   numdump.dump(range(1000), "r.bin")    # no intermediate array handle
#
# =============================================================================

import logging

from .adapter import from_sequence, is_sequence, to_scratch
from .buffer import Buffer, create, get, set, size
from .config import FLOAT_SIZE, Config, configure, get_config, reset_config
from .dispatch import dump_array, load_array, new_array
from .writer import read_binary, write_binary
from .errors import (
    CannotOpenFile,
    CloseFailed,
    IncompleteWrite,
    IndexOutOfRange,
    InvalidArgument,
    InvalidHandle,
    NumdumpError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Boundary surface
new = new_array
dump = dump_array
load = load_array

# Version
__version__ = "0.1.0"

__all__ = [
    # Boundary
    "new",
    "set",
    "get",
    "size",
    "dump",
    "load",
    # Developer
    "Buffer",
    "create",
    "from_sequence",
    "to_scratch",
    "is_sequence",
    "write_binary",
    "read_binary",
    "new_array",
    "dump_array",
    "load_array",
    # Configuration
    "Config",
    "configure",
    "get_config",
    "reset_config",
    "FLOAT_SIZE",
    # Errors
    "NumdumpError",
    "InvalidHandle",
    "IndexOutOfRange",
    "InvalidArgument",
    "CannotOpenFile",
    "IncompleteWrite",
    "CloseFailed",
]
