"""
Enumeration types for nnstensors.

This module defines the closed set of tensor element types with their
fixed byte widths, and the byte orders a buffer can declare.
"""

from __future__ import annotations
import sys
from enum import Enum, IntEnum
from typing import Dict, Union

import numpy as np

from ..exceptions import InvalidArgument


class TensorType(IntEnum):
    """Scalar element types of a tensor."""
    INT32 = 0
    UINT32 = 1
    INT16 = 2
    UINT16 = 3
    INT8 = 4
    UINT8 = 5
    FLOAT64 = 6
    FLOAT32 = 7
    INT64 = 8
    UINT64 = 9
    UNKNOWN = 10

    @property
    def byte_width(self) -> int:
        try:
            return _BYTE_WIDTHS[self]
        except KeyError:
            raise InvalidArgument(f"Tensor type {self.name} has no element width") from None

    @property
    def numpy_dtype(self) -> np.dtype:
        try:
            return _NUMPY_DTYPES[self]
        except KeyError:
            raise InvalidArgument(f"Tensor type {self.name} has no numpy dtype") from None

    @classmethod
    def from_name(cls, name: str) -> TensorType:
        """Look up a tensor type by its exact name, e.g. ``"UINT8"``."""
        try:
            return _BY_NAME[name]
        except (KeyError, TypeError):
            raise InvalidArgument(f"Unknown tensor type name: {name!r}") from None

    @classmethod
    def from_numpy_dtype(cls, dtype) -> TensorType:
        # Byte order is not part of the lookup; validation rejects non-native arrays separately.
        key = np.dtype(dtype).newbyteorder('=')
        for tensor_type, np_dtype in _NUMPY_DTYPES.items():
            if np_dtype == key:
                return tensor_type
        raise InvalidArgument(f"No tensor type for numpy dtype {dtype}")

    @classmethod
    def coerce(cls, value: Union[TensorType, str]) -> TensorType:
        if isinstance(value, TensorType):
            return value
        if isinstance(value, str):
            return cls.from_name(value)
        raise InvalidArgument(f"Expected TensorType or type name, got {type(value).__name__}")


class ByteOrder(Enum):
    """Byte order declared by a buffer."""
    LITTLE = 'little'
    BIG = 'big'

    @classmethod
    def native(cls) -> ByteOrder:
        return cls(sys.byteorder)

    @property
    def is_native(self) -> bool:
        return self.value == sys.byteorder


_BYTE_WIDTHS: Dict[TensorType, int] = {
    TensorType.INT32: 4,
    TensorType.UINT32: 4,
    TensorType.INT16: 2,
    TensorType.UINT16: 2,
    TensorType.INT8: 1,
    TensorType.UINT8: 1,
    TensorType.FLOAT64: 8,
    TensorType.FLOAT32: 4,
    TensorType.INT64: 8,
    TensorType.UINT64: 8,
}

_NUMPY_DTYPES: Dict[TensorType, np.dtype] = {
    TensorType.INT32: np.dtype(np.int32),
    TensorType.UINT32: np.dtype(np.uint32),
    TensorType.INT16: np.dtype(np.int16),
    TensorType.UINT16: np.dtype(np.uint16),
    TensorType.INT8: np.dtype(np.int8),
    TensorType.UINT8: np.dtype(np.uint8),
    TensorType.FLOAT64: np.dtype(np.float64),
    TensorType.FLOAT32: np.dtype(np.float32),
    TensorType.INT64: np.dtype(np.int64),
    TensorType.UINT64: np.dtype(np.uint64),
}

_BY_NAME: Dict[str, TensorType] = {member.name: member for member in TensorType}
