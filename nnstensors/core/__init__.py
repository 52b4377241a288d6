"""
Core components of nnstensors.

This module contains the tensor schema builder, its frozen descriptor,
and the buffer collection allocated from them.
"""

from .info import TensorsInfo, TensorsSchema, check_index
from .data import TensorsData

__all__ = [
    "TensorsInfo",
    "TensorsSchema",
    "TensorsData",
    "check_index",
]
