from __future__ import annotations
import operator
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .aliases import ByteSize, Shape
from .enums import TensorType
from ..exceptions import InvalidArgument


def normalize_shape(shape: Sequence[int]) -> Shape:
    try:
        dims = tuple(shape)
    except TypeError:
        raise InvalidArgument(f"Tensor shape must be a sequence of integers: {shape!r}") from None

    if not dims:
        raise InvalidArgument("Tensor shape must have at least one dimension")

    result = []
    for dim in dims:
        if isinstance(dim, bool):
            raise InvalidArgument(f"Tensor dimension must be an integer: {dim!r}")
        try:
            value = operator.index(dim)
        except TypeError:
            raise InvalidArgument(f"Tensor dimension must be an integer: {dim!r}") from None
        if value <= 0:
            raise InvalidArgument(f"Invalid tensor shape: {dims}")
        result.append(value)

    return tuple(result)


@dataclass(frozen=True)
class TensorInfo:
    tensor_type: TensorType
    shape: Shape
    name: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        tensor_type = TensorType.coerce(self.tensor_type)
        if tensor_type == TensorType.UNKNOWN:
            raise InvalidArgument("Tensor type must not be UNKNOWN")

        object.__setattr__(self, 'tensor_type', tensor_type)
        object.__setattr__(self, 'shape', normalize_shape(self.shape))

    @property
    def rank(self) -> int:
        return len(self.shape)

    @property
    def element_count(self) -> int:
        result = 1
        for dim in self.shape:
            result *= dim
        return result

    @property
    def byte_size(self) -> ByteSize:
        return ByteSize(self.element_count * self.tensor_type.byte_width)

    def with_name(self, name: Optional[str]) -> TensorInfo:
        return self.__class__(tensor_type=self.tensor_type, shape=self.shape, name=name)

    def __str__(self) -> str:
        label = f"{self.name}: " if self.name else ""
        return f"{label}{self.tensor_type.name}{list(self.shape)} ({self.byte_size} bytes)"
