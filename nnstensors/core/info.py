"""
Tensor schema descriptors for nnstensors.

``TensorsInfo`` is the append-only builder a producer fills in, one tensor
at a time. ``TensorsSchema`` is the immutable descriptor frozen from it and
is what a ``TensorsData`` keeps as its layout.
"""

from __future__ import annotations
import operator
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from ..config import TensorLimits, get_default_limits
from ..types.aliases import ByteSize, Shape, TensorIndex
from ..types.descriptors import TensorInfo
from ..types.enums import TensorType
from ..types.protocols import ITensorsInfo
from ..exceptions import InvalidArgument, OutOfRange, SchemaMismatch


class _TensorsInfoQueries:
    """Read-side operations shared by the builder and the frozen schema."""

    __slots__ = ()

    def _entries(self) -> Sequence[TensorInfo]:
        raise NotImplementedError

    @property
    def limits(self) -> TensorLimits:
        raise NotImplementedError

    def _check_index(self, index: int) -> TensorIndex:
        return check_index(index, len(self._entries()))

    def get_tensor_count(self) -> int:
        return len(self._entries())

    def get_tensor_info(self, index: int) -> TensorInfo:
        return self._entries()[self._check_index(index)]

    def get_tensor_type(self, index: int) -> TensorType:
        return self.get_tensor_info(index).tensor_type

    def get_tensor_shape(self, index: int) -> Shape:
        return self.get_tensor_info(index).shape

    def get_tensor_name(self, index: int) -> Optional[str]:
        return self.get_tensor_info(index).name

    def get_tensor_size(self, index: int) -> ByteSize:
        return self.get_tensor_info(index).byte_size

    def total_byte_size(self) -> ByteSize:
        return ByteSize(sum(entry.byte_size for entry in self._entries()))

    def equals(self, other) -> bool:
        """Order-sensitive comparison of tensor count, types and shapes."""
        if not isinstance(other, ITensorsInfo):
            return False
        if self.get_tensor_count() != other.get_tensor_count():
            return False
        return all(mine == theirs for mine, theirs in zip(self, other))

    def check_compatible(self, other: ITensorsInfo) -> None:
        if not isinstance(other, ITensorsInfo):
            raise InvalidArgument(f"Expected tensors info, got {type(other).__name__}")

        if self.get_tensor_count() != other.get_tensor_count():
            raise SchemaMismatch(
                f"Tensor count differs: {self.get_tensor_count()} != {other.get_tensor_count()}"
            )

        for index, (mine, theirs) in enumerate(zip(self, other)):
            if mine != theirs:
                raise SchemaMismatch(
                    f"Tensor {index} differs: expected {mine.tensor_type.name}{list(mine.shape)}, "
                    f"got {theirs.tensor_type.name}{list(theirs.shape)}",
                    index=index,
                )

    def __eq__(self, other) -> bool:
        if not isinstance(other, ITensorsInfo):
            return NotImplemented
        return self.equals(other)

    def __len__(self) -> int:
        return len(self._entries())

    def __iter__(self) -> Iterator[TensorInfo]:
        return iter(tuple(self._entries()))

    def __getitem__(self, index: int) -> TensorInfo:
        return self.get_tensor_info(index)


class TensorsSchema(_TensorsInfoQueries):
    """Immutable, ordered description of a group of tensors."""

    __slots__ = ('_infos', '_limits')

    def __init__(self, entries: Sequence[TensorInfo] = (), limits: Optional[TensorLimits] = None):
        self._limits = limits or get_default_limits()
        infos = tuple(entries)
        _check_entries(infos, self._limits)
        self._infos: Tuple[TensorInfo, ...] = infos

    def _entries(self) -> Tuple[TensorInfo, ...]:
        return self._infos

    @property
    def limits(self) -> TensorLimits:
        return self._limits

    @property
    def entries(self) -> Tuple[TensorInfo, ...]:
        return self._infos

    def to_builder(self) -> TensorsInfo:
        builder = TensorsInfo(limits=self._limits)
        for entry in self._infos:
            builder.append(entry)
        return builder

    def __hash__(self) -> int:
        return hash(tuple((entry.tensor_type, entry.shape) for entry in self._infos))

    def __repr__(self) -> str:
        return f"TensorsSchema([{', '.join(str(entry) for entry in self._infos)}])"


class TensorsInfo(_TensorsInfoQueries):
    """Builder for an ordered group of tensor descriptors.

    Entries are appended with :meth:`add_tensor_info`; the returned index is the
    tensor's position everywhere else. Freezing produces a :class:`TensorsSchema`
    snapshot, so later edits never reach data already allocated from it.
    """

    __slots__ = ('_infos', '_limits')

    __hash__ = None

    def __init__(self, limits: Optional[TensorLimits] = None):
        self._limits = limits or get_default_limits()
        self._infos: List[TensorInfo] = []

    def _entries(self) -> List[TensorInfo]:
        return self._infos

    @property
    def limits(self) -> TensorLimits:
        return self._limits

    def _make_entry(self, tensor_type: Union[TensorType, str], shape: Sequence[int],
                    name: Optional[str]) -> TensorInfo:
        entry = TensorInfo(tensor_type=tensor_type, shape=shape, name=name)
        _check_rank(entry, self._limits)
        return entry

    def append(self, entry: TensorInfo) -> TensorIndex:
        if not isinstance(entry, TensorInfo):
            raise InvalidArgument(f"Expected TensorInfo, got {type(entry).__name__}")
        _check_rank(entry, self._limits)

        if len(self._infos) >= self._limits.max_tensors:
            raise InvalidArgument(
                f"Cannot add more than {self._limits.max_tensors} tensors"
            )

        self._infos.append(entry)
        return TensorIndex(len(self._infos) - 1)

    def add_tensor_info(self, tensor_type: Union[TensorType, str], shape: Sequence[int],
                        name: Optional[str] = None) -> TensorIndex:
        """Append a tensor and return its index."""
        return self.append(self._make_entry(tensor_type, shape, name))

    def set_tensor_info(self, index: int, tensor_type: Union[TensorType, str],
                        shape: Sequence[int], name: Optional[str] = None) -> None:
        index = self._check_index(index)
        self._infos[index] = self._make_entry(tensor_type, shape, name)

    def set_tensor_name(self, index: int, name: Optional[str]) -> None:
        index = self._check_index(index)
        self._infos[index] = self._infos[index].with_name(name)

    def clear(self) -> None:
        self._infos.clear()

    def copy(self) -> TensorsInfo:
        duplicate = TensorsInfo(limits=self._limits)
        duplicate._infos = list(self._infos)
        return duplicate

    def freeze(self) -> TensorsSchema:
        return TensorsSchema(self._infos, limits=self._limits)

    def __repr__(self) -> str:
        return f"TensorsInfo([{', '.join(str(entry) for entry in self._infos)}])"


def check_index(index: int, count: int) -> TensorIndex:
    """Return ``index`` if it addresses one of ``count`` populated tensors."""
    try:
        value = None if isinstance(index, bool) else operator.index(index)
    except TypeError:
        value = None

    if value is None or not 0 <= value < count:
        raise OutOfRange(
            f"Tensor index {index!r} out of range for {count} tensor(s)",
            index=value,
            count=count,
        )
    return TensorIndex(value)


def _check_rank(entry: TensorInfo, limits: TensorLimits) -> None:
    if entry.rank > limits.max_rank:
        raise InvalidArgument(
            f"Tensor rank {entry.rank} exceeds the maximum of {limits.max_rank}"
        )


def _check_entries(entries: Sequence[TensorInfo], limits: TensorLimits) -> None:
    if len(entries) > limits.max_tensors:
        raise InvalidArgument(f"Cannot hold more than {limits.max_tensors} tensors")
    for entry in entries:
        if not isinstance(entry, TensorInfo):
            raise InvalidArgument(f"Expected TensorInfo, got {type(entry).__name__}")
        _check_rank(entry, limits)
