"""
nnstensors - Tensor layout and buffer exchange

Describes groups of typed, shaped tensors and allocates the host memory
backing them, so that producers and consumers of tensor data agree on
the layout byte for byte.

Key Features:
- Ordered tensor schemas with fixed element widths and bounded rank
- Zero-filled, aligned, native byte order buffers per tensor
- Strict validation of externally supplied memory
- Zero-copy NumPy and PyTorch views
"""

from __future__ import annotations

__version__ = "1.0.0"
__license__ = "MIT"

# Core components
from .core.info import TensorsInfo, TensorsSchema
from .core.data import TensorsData

# Memory
from .memory.buffer import TensorBuffer
from .memory.validation import is_valid_buffer, validate_buffer

# Configuration
from .config import MAX_TENSORS, MAX_RANK, TensorLimits, get_default_limits

# Types and descriptors
from .types.descriptors import TensorInfo
from .types.enums import TensorType, ByteOrder
from .types.protocols import ITensorsInfo, ITensorBuffer

# Interop and ingestion
from .interop import (
    as_array,
    as_tensor,
    tensors_info_from_arrays,
    tensors_data_from_arrays,
    tensors_data_from_tensors,
)
from .ingest import read_raw_data, write_raw_data

# Exceptions
from .exceptions import (
    NNSTensorsError,
    InvalidArgument,
    OutOfRange,
    IncompatibleBuffer,
    NullBuffer,
    BufferNotDirect,
    ByteOrderMismatch,
    BufferCapacityMismatch,
    SchemaMismatch,
    AllocationFailure,
    BufferReleased,
)

# Public API
__all__ = [
    # Core components
    "TensorsInfo",
    "TensorsSchema",
    "TensorsData",

    # Memory
    "TensorBuffer",
    "is_valid_buffer",
    "validate_buffer",

    # Configuration
    "MAX_TENSORS",
    "MAX_RANK",
    "TensorLimits",
    "get_default_limits",

    # Types
    "TensorInfo",
    "TensorType",
    "ByteOrder",
    "ITensorsInfo",
    "ITensorBuffer",

    # Interop and ingestion
    "as_array",
    "as_tensor",
    "tensors_info_from_arrays",
    "tensors_data_from_arrays",
    "tensors_data_from_tensors",
    "read_raw_data",
    "write_raw_data",

    # Exceptions
    "NNSTensorsError",
    "InvalidArgument",
    "OutOfRange",
    "IncompatibleBuffer",
    "NullBuffer",
    "BufferNotDirect",
    "ByteOrderMismatch",
    "BufferCapacityMismatch",
    "SchemaMismatch",
    "AllocationFailure",
    "BufferReleased",
]

VERSION_INFO = tuple(map(int, __version__.split('.')))


def get_version() -> str:
    """Get the current version string."""
    return __version__
