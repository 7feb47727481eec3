"""Pools of values addressed by stable handles."""

from __future__ import annotations

import copy
from typing import Any, Generic, Iterator, List, TypeVar

from pulsar.utils.id import Id

T = TypeVar("T")
M = TypeVar("M")

_UNSET: Any = object()


class Handle(Generic[T]):
    """A reference to a slot in a :class:`Pool`.

    Equality, hashing and formatting come from the referenced value; copying a
    handle copies the reference. Assigning to :attr:`value` replaces the value
    in the slot, which every handle to that slot then sees.
    """

    __slots__ = ("_pool", "_index")

    def __init__(self, pool: "Pool[T, Any]", index: Id) -> None:
        self._pool = pool
        self._index = index

    def id(self) -> Id:
        """The index of this handle's slot in its pool."""
        return self._index

    @property
    def value(self) -> T:
        return self._pool._values[self._index]

    @value.setter
    def value(self, new_value: T) -> None:
        self._pool._values[self._index] = new_value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Handle):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return repr(self.value)


class Pool(Generic[T, M]):
    """Stores values in insertion order, each optionally paired with metadata."""

    def __init__(self) -> None:
        self._values: List[T] = []
        self._metadata: List[Any] = []

    def add(self, value: T) -> Handle[T]:
        """Stores ``value`` with no metadata and returns its handle."""
        index = len(self._values)
        self._values.append(value)
        self._metadata.append(_UNSET)
        return Handle(self, index)

    def from_id(self, id: Id) -> Handle[T]:
        """The handle for the slot numbered ``id``."""
        if not 0 <= id < len(self._values):
            raise IndexError("invalid id access in pool")
        return Handle(self, id)

    def _index_of(self, handle: Handle[T]) -> Id:
        if handle._pool is not self:
            raise ValueError("handle belongs to a different pool")
        return handle._index

    def get_metadata(self, handle: Handle[T]) -> M:
        """The metadata last set for ``handle``."""
        metadata = self._metadata[self._index_of(handle)]
        if metadata is _UNSET:
            raise LookupError(f"no metadata has been set for handle {handle.id()}")
        return metadata

    def set_metadata(self, handle: Handle[T], metadata: M) -> None:
        self._metadata[self._index_of(handle)] = metadata

    def duplicate(self, handle: Handle[T]) -> Handle[T]:
        """Stores a copy of the value and metadata behind ``handle`` in a new slot."""
        index = self._index_of(handle)
        result = self.add(copy.copy(self._values[index]))
        metadata = self._metadata[index]
        if metadata is not _UNSET:
            self._metadata[result._index] = copy.copy(metadata)
        return result

    def __iter__(self) -> Iterator[Handle[T]]:
        return (Handle(self, index) for index in range(len(self._values)))

    def __len__(self) -> int:
        return len(self._values)