"""
Memory components for nnstensors.

This module provides the owned tensor buffer type and the validation
applied to any memory handed across the tensor boundary.
"""

from .validation import check_capacity, validate_buffer, is_valid_buffer
from .buffer import TensorBuffer, check_byte_size

__all__ = [
    "TensorBuffer",
    "check_byte_size",
    "check_capacity",
    "validate_buffer",
    "is_valid_buffer",
]
