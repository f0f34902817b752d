# =============================================================================
# numdump - Error Types
# =============================================================================
#
# Every error derives from NumdumpError and from the builtin exception a
# caller would naturally catch for that condition:
#
#   InvalidHandle    -> TypeError
#   IndexOutOfRange  -> IndexError
#   InvalidArgument  -> ValueError
#   CannotOpenFile   -> OSError
#   IncompleteWrite  -> OSError
#   CloseFailed      -> OSError
#
# =============================================================================


class NumdumpError(Exception):
    """Base class for all numdump errors."""


class InvalidHandle(NumdumpError, TypeError):
    """Operation was given something other than a live array handle."""


class IndexOutOfRange(NumdumpError, IndexError):
    """Index outside ``[1, size]``."""

    def __init__(self, index, size):
        super().__init__(f"index {index} out of range [1, {size}]")
        self.index = index
        self.size = size


class InvalidArgument(NumdumpError, ValueError):
    """Wrong shape or type passed to a numdump operation."""


class DumpError(NumdumpError, OSError):
    """Base class for file errors raised by the dump engine."""

    def __init__(self, message, path):
        super().__init__(message)
        self.path = path

    def __str__(self):
        return self.args[0]


class CannotOpenFile(DumpError):
    """Destination path could not be opened."""


class IncompleteWrite(DumpError):
    """Fewer bytes reached the file than were requested."""

    def __init__(self, message, path, expected, written):
        super().__init__(message, path)
        self.expected = expected
        self.written = written


class CloseFailed(DumpError):
    """Flushing or closing the destination file reported an error."""
