"""
NumPy and PyTorch interoperability for nnstensors.

Views returned here share memory with the owned tensor buffers. Arrays and
tensors coming in are validated like any other external buffer: non-native
byte order or non-contiguous layouts are rejected rather than converted.
"""

from __future__ import annotations
from functools import lru_cache
from typing import Dict, Optional, Sequence

import numpy as np
import torch

from .core.data import TensorsData
from .core.info import TensorsInfo
from .config import TensorLimits
from .types.enums import TensorType
from .exceptions import InvalidArgument


@lru_cache(maxsize=1)
def _torch_dtypes() -> Dict[TensorType, torch.dtype]:
    mapping = {
        TensorType.INT8: torch.int8,
        TensorType.UINT8: torch.uint8,
        TensorType.INT16: torch.int16,
        TensorType.INT32: torch.int32,
        TensorType.INT64: torch.int64,
        TensorType.FLOAT32: torch.float32,
        TensorType.FLOAT64: torch.float64,
    }
    # Unsigned 16/32/64-bit dtypes only exist in recent PyTorch releases.
    for tensor_type, name in ((TensorType.UINT16, 'uint16'),
                              (TensorType.UINT32, 'uint32'),
                              (TensorType.UINT64, 'uint64')):
        dtype = getattr(torch, name, None)
        if dtype is not None:
            mapping[tensor_type] = dtype
    return mapping


def torch_dtype_for(tensor_type: TensorType) -> torch.dtype:
    try:
        return _torch_dtypes()[tensor_type]
    except KeyError:
        raise InvalidArgument(f"No torch dtype for tensor type {tensor_type.name}") from None


def tensor_type_for_torch(dtype: torch.dtype) -> TensorType:
    for tensor_type, torch_dtype in _torch_dtypes().items():
        if torch_dtype == dtype:
            return tensor_type
    raise InvalidArgument(f"No tensor type for torch dtype {dtype}")


def as_array(data: TensorsData, index: int) -> np.ndarray:
    """Shaped, typed NumPy view over the tensor at ``index``."""
    entry = data.get_tensors_info().get_tensor_info(index)
    buffer = data.get_tensor_data(index)
    return np.frombuffer(buffer.view(), dtype=entry.tensor_type.numpy_dtype).reshape(entry.shape)


def as_tensor(data: TensorsData, index: int) -> torch.Tensor:
    """CPU torch tensor sharing memory with the tensor at ``index``."""
    entry = data.get_tensors_info().get_tensor_info(index)
    torch_dtype_for(entry.tensor_type)
    return torch.from_numpy(as_array(data, index))


def tensors_info_from_arrays(arrays: Sequence[np.ndarray],
                             limits: Optional[TensorLimits] = None) -> TensorsInfo:
    info = TensorsInfo(limits=limits)
    for array in arrays:
        if not isinstance(array, np.ndarray):
            raise InvalidArgument(f"Expected numpy array, got {type(array).__name__}")
        info.add_tensor_info(TensorType.from_numpy_dtype(array.dtype), array.shape)
    return info


def tensors_data_from_arrays(arrays: Sequence[np.ndarray],
                             limits: Optional[TensorLimits] = None) -> TensorsData:
    """Allocate tensors data shaped like ``arrays`` and copy their contents in."""
    info = tensors_info_from_arrays(arrays, limits=limits)
    data = TensorsData.allocate(info)
    try:
        for index, array in enumerate(arrays):
            data.set_tensor_data(index, array)
    except Exception:
        data.close()
        raise
    return data


def tensors_data_from_tensors(tensors: Sequence[torch.Tensor],
                              limits: Optional[TensorLimits] = None) -> TensorsData:
    arrays = []
    for tensor in tensors:
        if not isinstance(tensor, torch.Tensor):
            raise InvalidArgument(f"Expected torch.Tensor, got {type(tensor).__name__}")
        if tensor.device.type != 'cpu':
            raise InvalidArgument(f"Only host tensors can be exchanged, got device {tensor.device}")
        tensor_type_for_torch(tensor.dtype)
        arrays.append(tensor.detach().numpy())
    return tensors_data_from_arrays(arrays, limits=limits)
