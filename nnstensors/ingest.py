"""
Raw tensor payload files.

A raw file holds exactly one tensor's bytes in host order, with no header.
Its length must equal the tensor's byte size; anything else is rejected.
"""

from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Union

from .core.data import TensorsData
from .core.info import check_index
from .memory.validation import check_capacity
from .types.protocols import ITensorsInfo
from .exceptions import InvalidArgument

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def read_raw_data(path: PathLike, target: Union[ITensorsInfo, TensorsData],
                  index: int = 0) -> TensorsData:
    """Fill tensor ``index`` from the raw file at ``path``.

    ``target`` is either an existing ``TensorsData`` (filled in place) or a
    tensors info, in which case new data is allocated from it.
    """
    path = Path(path)
    if not path.is_file():
        raise InvalidArgument(f"Raw data file not found: {path}")

    if isinstance(target, TensorsData):
        data = target
        owned = False
    else:
        data = TensorsData.allocate(target)
        owned = True

    try:
        index = check_index(index, data.get_tensor_count())
        check_capacity(path.stat().st_size, data.get_tensor_data(index).size)
        content = path.read_bytes()
        logger.debug("Read %d bytes from %s for tensor %d", len(content), path, index)
        data.set_tensor_data(index, content)
    except Exception:
        if owned:
            data.close()
        raise

    return data


def write_raw_data(path: PathLike, data: TensorsData, index: int = 0) -> int:
    """Write tensor ``index`` to ``path`` and return the number of bytes written."""
    payload = data.get_tensor_data(index).tobytes()
    Path(path).write_bytes(payload)
    logger.debug("Wrote %d bytes of tensor %d to %s", len(payload), index, path)
    return len(payload)
