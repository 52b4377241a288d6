from __future__ import annotations
import ctypes
import logging
import operator
from typing import Optional

from ..config import BUFFER_ALIGNMENT
from ..types.aliases import ByteSize
from ..types.enums import ByteOrder
from ..exceptions import AllocationFailure, BufferReleased, InvalidArgument
from .validation import validate_buffer

logger = logging.getLogger(__name__)


def check_byte_size(size) -> ByteSize:
    try:
        value = None if isinstance(size, bool) else operator.index(size)
    except TypeError:
        value = None
    if value is None:
        raise InvalidArgument(f"Buffer size must be an integer: {size!r}")
    if value <= 0:
        raise InvalidArgument(f"Buffer size must be positive: {value}")
    return ByteSize(value)


class TensorBuffer:
    """Owned, contiguous host memory block handed across the tensor boundary.

    The block is zero-filled at creation, starts at an address aligned to
    ``alignment`` and keeps its capacity for its whole lifetime. Its declared
    byte order defaults to the host order.
    """

    __slots__ = ('_size', '_alignment', '_order', '_offset', '_virtual_address',
                 '_raw_buffer', '_order_pinned', '__weakref__')

    def __init__(self, size: int, alignment: int = BUFFER_ALIGNMENT,
                 order: Optional[ByteOrder] = None):
        self._size = check_byte_size(size)

        if alignment <= 0 or (alignment & (alignment - 1)) != 0:
            raise InvalidArgument(f"Alignment must be a positive power of 2: {alignment}")

        self._alignment = alignment
        self._order = order or ByteOrder.native()
        self._order_pinned = False
        self._offset = 0
        self._virtual_address = 0
        self._raw_buffer: Optional[ctypes.Array] = None

        self._create_buffer()

    @property
    def size(self) -> ByteSize:
        return self._size

    @property
    def capacity(self) -> ByteSize:
        return self._size

    @property
    def alignment(self) -> int:
        return self._alignment

    @property
    def virtual_address(self) -> int:
        return self._virtual_address

    @property
    def order(self) -> ByteOrder:
        return self._order

    @property
    def is_direct(self) -> bool:
        return self._raw_buffer is not None

    @property
    def closed(self) -> bool:
        return self._raw_buffer is None

    def set_order(self, order: ByteOrder) -> TensorBuffer:
        """Declare the byte order of the payload, as NIO ``ByteBuffer.order`` does."""
        if not isinstance(order, ByteOrder):
            raise InvalidArgument(f"Expected ByteOrder, got {type(order).__name__}")
        if self._order_pinned and not order.is_native:
            raise InvalidArgument("Buffers owned by tensors data keep the native byte order")
        self._order = order
        return self

    def pin_native_order(self) -> None:
        """Reject any later switch to a non-native byte order."""
        if not self._order.is_native:
            raise InvalidArgument(f"Buffer declares non-native byte order {self._order.value}")
        self._order_pinned = True

    def _create_buffer(self) -> None:
        try:
            raw_size = self._size + self._alignment
            self._raw_buffer = (ctypes.c_ubyte * raw_size)()
        except (MemoryError, OverflowError) as e:
            raise AllocationFailure(
                f"Failed to allocate tensor buffer: {e}", requested_size=self._size
            ) from e

        raw_addr = ctypes.addressof(self._raw_buffer)
        aligned_addr = (raw_addr + self._alignment - 1) & ~(self._alignment - 1)
        self._offset = aligned_addr - raw_addr
        self._virtual_address = aligned_addr

    def _ensure_open(self) -> None:
        if self._raw_buffer is None:
            raise BufferReleased("Tensor buffer has been released")

    def view(self) -> memoryview:
        """Writable byte view over exactly ``size`` bytes of the block."""
        self._ensure_open()
        # The returned slice holds a reference to the raw array.
        return memoryview(self._raw_buffer).cast('B')[self._offset:self._offset + self._size]

    def read(self, offset: int = 0, size: Optional[int] = None) -> bytes:
        self._ensure_open()
        if size is None:
            size = self._size - offset

        if offset < 0 or size < 0 or offset + size > self._size:
            raise InvalidArgument(f"Read beyond buffer bounds: {offset + size} > {self._size}")

        return ctypes.string_at(self._virtual_address + offset, size)

    def put(self, data, offset: int = 0) -> TensorBuffer:
        """Copy ``data`` into the block starting at ``offset``."""
        self._ensure_open()
        source = memoryview(data)
        if not source.c_contiguous:
            source = memoryview(source.tobytes())
        source = source.cast('B')
        length = source.nbytes

        if offset < 0 or offset + length > self._size:
            raise InvalidArgument(f"Write beyond buffer bounds: {offset + length} > {self._size}")

        self.view()[offset:offset + length] = source
        return self

    def fill_from(self, source: memoryview) -> None:
        """Overwrite the whole block from a validated byte view of equal size."""
        if source.nbytes != self._size:
            raise InvalidArgument(f"Source size {source.nbytes} does not match buffer size {self._size}")
        self.view()[:] = source

    def tobytes(self) -> bytes:
        return self.read(0, self._size)

    @classmethod
    def wrap(cls, source, expected_size: int, alignment: int = BUFFER_ALIGNMENT) -> TensorBuffer:
        """Validate ``source`` for exchange and copy it into a new owned buffer."""
        source_view = validate_buffer(source, expected_size)
        buffer = cls(expected_size, alignment=alignment)
        buffer.fill_from(source_view)
        return buffer

    def close(self) -> None:
        if self._raw_buffer is not None:
            logger.debug("Releasing tensor buffer of %d bytes at 0x%x", self._size, self._virtual_address)
        self._raw_buffer = None
        self._virtual_address = 0

    def __len__(self) -> int:
        return self._size

    def __bytes__(self) -> bytes:
        return self.tobytes()

    def __getitem__(self, key):
        return self.view()[key]

    def __setitem__(self, key, value) -> None:
        self.view()[key] = value

    def __enter__(self) -> TensorBuffer:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "released" if self.closed else f"address=0x{self._virtual_address:x}"
        return f"TensorBuffer(size={self._size}, order={self._order.value}, {state})"
