from __future__ import annotations
from typing import Optional


class NNSTensorsError(Exception):
    def __init__(self, message: str, **kwargs):
        super().__init__(message)
        self.message = message
        self.context = kwargs


class InvalidArgument(NNSTensorsError, ValueError):
    pass


class OutOfRange(NNSTensorsError, IndexError):
    def __init__(self, message: str, index: Optional[int] = None,
                 count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.index = index
        self.count = count


class IncompatibleBuffer(InvalidArgument):
    def __init__(self, message: str, expected_size: Optional[int] = None,
                 actual_size: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.expected_size = expected_size
        self.actual_size = actual_size


class NullBuffer(IncompatibleBuffer):
    pass


class BufferNotDirect(IncompatibleBuffer):
    pass


class ByteOrderMismatch(IncompatibleBuffer):
    pass


class BufferCapacityMismatch(IncompatibleBuffer):
    pass


class SchemaMismatch(NNSTensorsError):
    def __init__(self, message: str, index: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.index = index


class AllocationFailure(NNSTensorsError, MemoryError):
    def __init__(self, message: str, requested_size: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.requested_size = requested_size


class BufferReleased(NNSTensorsError):
    pass
