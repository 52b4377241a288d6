"""
Buffer validation for tensor exchange.

Memory that crosses into a TensorsData must be directly addressable,
contiguous, in host byte order and exactly as large as the tensor it fills.
Each defect is reported with its own exception type and never repaired.
"""

from __future__ import annotations
from typing import Optional

import numpy as np

from ..types.enums import ByteOrder
from ..types.protocols import ITensorBuffer
from ..exceptions import (
    BufferCapacityMismatch,
    BufferNotDirect,
    ByteOrderMismatch,
    IncompatibleBuffer,
    InvalidArgument,
    NullBuffer,
)

_FORMAT_ORDERS = {
    '<': ByteOrder.LITTLE,
    '>': ByteOrder.BIG,
    '!': ByteOrder.BIG,
}


def _declared_order(buffer, view: memoryview) -> Optional[ByteOrder]:
    order = getattr(buffer, 'order', None)
    if isinstance(order, ByteOrder):
        return order

    if isinstance(buffer, np.ndarray) and not buffer.dtype.isnative:
        return ByteOrder.BIG if ByteOrder.native() == ByteOrder.LITTLE else ByteOrder.LITTLE

    fmt = view.format
    if fmt and fmt[0] in _FORMAT_ORDERS:
        return _FORMAT_ORDERS[fmt[0]]

    return None


def _direct_view(buffer) -> memoryview:
    if isinstance(buffer, ITensorBuffer):
        if not buffer.is_direct:
            raise BufferNotDirect("Tensor buffer has been released")
        return buffer.view()

    try:
        return memoryview(buffer)
    except TypeError:
        raise BufferNotDirect(
            f"{type(buffer).__name__} does not expose directly addressable memory"
        ) from None


def check_capacity(actual: int, expected: int) -> None:
    """Raise BufferCapacityMismatch unless ``actual`` bytes is exactly ``expected``."""
    if actual != expected:
        raise BufferCapacityMismatch(
            f"Buffer capacity {actual} does not match expected size {expected}",
            expected_size=expected,
            actual_size=actual,
        )


def validate_buffer(buffer, expected: int) -> memoryview:
    """Check ``buffer`` for exchange and return a flat byte view over it.

    Raises:
        NullBuffer: ``buffer`` is None.
        BufferNotDirect: no buffer protocol, indirect (suboffsets) or not C-contiguous.
        ByteOrderMismatch: declared byte order differs from the host's.
        BufferCapacityMismatch: byte length differs from ``expected``.
    """
    if isinstance(expected, bool) or not isinstance(expected, int) or expected <= 0:
        raise InvalidArgument(f"Expected buffer size must be a positive integer: {expected!r}")

    if buffer is None:
        raise NullBuffer("Buffer is None", expected_size=expected)

    view = _direct_view(buffer)

    if view.suboffsets:
        raise BufferNotDirect("Buffer uses indirect (suboffset) addressing", expected_size=expected)

    if not view.c_contiguous:
        raise BufferNotDirect("Buffer memory is not contiguous", expected_size=expected)

    order = _declared_order(buffer, view)
    if order is not None and not order.is_native:
        raise ByteOrderMismatch(
            f"Buffer byte order {order.value} does not match native order {ByteOrder.native().value}",
            expected_size=expected,
        )

    check_capacity(view.nbytes, expected)

    return view.cast('B')


def is_valid_buffer(buffer, expected: int) -> bool:
    try:
        validate_buffer(buffer, expected)
    except IncompatibleBuffer:
        return False
    return True
