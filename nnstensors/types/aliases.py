"""
Type aliases for nnstensors.

This module defines type aliases used throughout the library
for better type safety and code clarity.
"""

from typing import NewType, Tuple

ByteSize = NewType('ByteSize', int)
TensorIndex = NewType('TensorIndex', int)
Shape = Tuple[int, ...]
