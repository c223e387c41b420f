"""Errors raised by the ordered sample buffer.

Each error also derives from the matching builtin, so callers can catch
``ValueError`` / ``IndexError`` without importing this module.
"""


class SampleBufferError(Exception):
    """Base class for sample buffer precondition violations."""


class OrderViolationError(SampleBufferError, ValueError):
    """Operation would break the ascending m/z order of the buffer."""


class IndexOutOfRangeError(SampleBufferError, IndexError):
    """Access or insertion at an invalid index."""


class CapacityExceededError(SampleBufferError, ValueError):
    """Requested size is larger than the backing arrays."""


class LengthMismatchError(SampleBufferError, ValueError):
    """Paired m/z and intensity arrays differ in length."""
