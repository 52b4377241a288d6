"""
Type definitions and protocols for nnstensors.

This module provides the element type enumeration, the single-tensor
descriptor and the protocols shared by the core and memory layers.
"""

from .descriptors import TensorInfo, normalize_shape
from .enums import TensorType, ByteOrder
from .protocols import ITensorsInfo, ITensorBuffer
from .aliases import ByteSize, TensorIndex, Shape

__all__ = [
    # Descriptors
    "TensorInfo",
    "normalize_shape",

    # Enums
    "TensorType",
    "ByteOrder",

    # Protocols
    "ITensorsInfo",
    "ITensorBuffer",

    # Type aliases
    "ByteSize",
    "TensorIndex",
    "Shape",
]
