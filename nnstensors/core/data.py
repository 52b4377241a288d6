"""
Tensor buffer collections for nnstensors.

A ``TensorsData`` owns one ``TensorBuffer`` per tensor of the schema it was
allocated from. Buffer count and sizes are fixed at allocation; incoming
memory is validated against them and copied, never truncated or padded.
"""

from __future__ import annotations
import logging
from typing import Iterator, List, Sequence

from ..memory.buffer import TensorBuffer, check_byte_size
from ..memory.validation import validate_buffer
from ..types.aliases import ByteSize
from ..types.protocols import ITensorsInfo
from ..exceptions import AllocationFailure, BufferReleased, InvalidArgument
from .info import TensorsInfo, TensorsSchema, check_index

logger = logging.getLogger(__name__)


def _freeze(info: ITensorsInfo) -> TensorsSchema:
    if isinstance(info, TensorsSchema):
        return info
    if isinstance(info, TensorsInfo):
        return info.freeze()
    if isinstance(info, ITensorsInfo):
        return TensorsSchema([info.get_tensor_info(i) for i in range(info.get_tensor_count())])
    raise InvalidArgument(f"Expected tensors info, got {type(info).__name__}")


class TensorsData:
    """Ordered host buffers matching a tensors schema."""

    __slots__ = ('_schema', '_buffers', '_closed', '__weakref__')

    def __init__(self, schema: ITensorsInfo, buffers: Sequence[TensorBuffer]):
        schema = _freeze(schema)
        buffers = list(buffers)

        if len(buffers) != schema.get_tensor_count():
            raise InvalidArgument(
                f"Buffer count {len(buffers)} does not match tensor count {schema.get_tensor_count()}"
            )

        seen = set()
        for index, buffer in enumerate(buffers):
            if not isinstance(buffer, TensorBuffer):
                raise InvalidArgument(f"Buffer {index} is not a TensorBuffer: {type(buffer).__name__}")
            if buffer.closed:
                raise InvalidArgument(f"Buffer {index} has been released")
            if not buffer.order.is_native:
                raise InvalidArgument(f"Buffer {index} declares non-native byte order {buffer.order.value}")
            if id(buffer) in seen:
                raise InvalidArgument(f"Buffer {index} is already used by another tensor")
            if buffer.size != schema.get_tensor_size(index):
                raise InvalidArgument(
                    f"Buffer {index} holds {buffer.size} bytes, tensor needs {schema.get_tensor_size(index)}"
                )
            seen.add(id(buffer))

        for buffer in buffers:
            buffer.pin_native_order()

        self._schema = schema
        self._buffers: List[TensorBuffer] = buffers
        self._closed = False

    @classmethod
    def allocate(cls, info: ITensorsInfo) -> TensorsData:
        """Allocate zero-filled buffers for every tensor in ``info``."""
        schema = _freeze(info)

        if schema.get_tensor_count() == 0:
            raise InvalidArgument("Cannot allocate tensors data for an empty tensors info")

        buffers: List[TensorBuffer] = []
        try:
            for entry in schema:
                buffers.append(TensorBuffer(entry.byte_size))
        except AllocationFailure:
            for buffer in buffers:
                buffer.close()
            raise

        logger.debug("Allocated %d tensor buffer(s), %d bytes total",
                     len(buffers), schema.total_byte_size())
        return cls(schema, buffers)

    @staticmethod
    def allocate_byte_buffer(size: int) -> TensorBuffer:
        """Allocate a standalone native-order buffer of exactly ``size`` bytes."""
        return TensorBuffer(check_byte_size(size))

    def _ensure_open(self) -> None:
        if self._closed:
            raise BufferReleased("Tensors data has been released")

    @property
    def closed(self) -> bool:
        return self._closed

    def get_tensors_info(self) -> TensorsSchema:
        return self._schema

    def get_tensor_count(self) -> int:
        return len(self._buffers)

    def get_tensor_data(self, index: int) -> TensorBuffer:
        self._ensure_open()
        return self._buffers[check_index(index, len(self._buffers))]

    def set_tensor_data(self, index: int, buffer) -> None:
        """Copy the full contents of ``buffer`` into the tensor at ``index``."""
        self._ensure_open()
        index = check_index(index, len(self._buffers))
        destination = self._buffers[index]

        source = validate_buffer(buffer, destination.size)
        destination.fill_from(source)

    def byte_sizes(self) -> List[ByteSize]:
        return [buffer.size for buffer in self._buffers]

    def close(self) -> None:
        if self._closed:
            return
        for buffer in self._buffers:
            buffer.close()
        self._closed = True
        logger.debug("Released tensors data with %d buffer(s)", len(self._buffers))

    def __len__(self) -> int:
        return len(self._buffers)

    def __iter__(self) -> Iterator[TensorBuffer]:
        self._ensure_open()
        return iter(tuple(self._buffers))

    def __getitem__(self, index: int) -> TensorBuffer:
        return self.get_tensor_data(index)

    def __enter__(self) -> TensorsData:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"TensorsData(count={len(self._buffers)}, sizes={self.byte_sizes()}, "
            f"released={self._closed})"
        )
