from __future__ import annotations
from typing import Iterator, Protocol, runtime_checkable

from .aliases import ByteSize
from .descriptors import TensorInfo


@runtime_checkable
class ITensorsInfo(Protocol):
    def get_tensor_count(self) -> int:
        ...

    def get_tensor_info(self, index: int) -> TensorInfo:
        ...

    def get_tensor_size(self, index: int) -> ByteSize:
        ...

    def __iter__(self) -> Iterator[TensorInfo]:
        ...


@runtime_checkable
class ITensorBuffer(Protocol):
    @property
    def size(self) -> ByteSize:
        ...

    @property
    def is_direct(self) -> bool:
        ...

    def view(self) -> memoryview:
        ...

    def close(self) -> None:
        ...
