"""
Limits and layout constants for nnstensors.
"""

from __future__ import annotations
from dataclasses import dataclass
from functools import lru_cache

from .exceptions import InvalidArgument

MAX_TENSORS = 16  #: Maximum number of tensors in one TensorsInfo
MAX_RANK = 4  #: Maximum number of dimensions per tensor
BUFFER_ALIGNMENT = 64  #: Start address alignment of owned tensor buffers


@dataclass(frozen=True)
class TensorLimits:
    max_tensors: int = MAX_TENSORS
    max_rank: int = MAX_RANK

    def __post_init__(self):
        if self.max_tensors <= 0:
            raise InvalidArgument(f"max_tensors must be positive: {self.max_tensors}")
        if self.max_rank <= 0:
            raise InvalidArgument(f"max_rank must be positive: {self.max_rank}")


@lru_cache(maxsize=1)
def get_default_limits() -> TensorLimits:
    return TensorLimits()
