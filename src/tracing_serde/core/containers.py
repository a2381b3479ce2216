"""Owned containers with an optional fixed capacity.

In the default configuration both containers grow without limit. When
``TRACING_SERDE_BOUNDED`` is set they refuse to hold more than
``BOUNDED_CAPACITY`` entries and raise CapacityError instead, leaving the
existing contents untouched.
"""

from collections.abc import Iterable, Iterator, MutableMapping, MutableSequence
from typing import Generic, TypeVar, overload

from tracing_serde.config import SETTINGS
from tracing_serde.core.errors import CapacityError

K = TypeVar("K")
V = TypeVar("V")
T = TypeVar("T")

DEFAULT_CAPACITY = object()


def _resolve_capacity(capacity: object) -> int | None:
    if capacity is DEFAULT_CAPACITY:
        return SETTINGS.capacity
    if capacity is not None and (not isinstance(capacity, int) or capacity < 0):
        raise ValueError(f"capacity must be a non-negative int or None, got {capacity!r}")
    return capacity  # type: ignore[return-value]


class TracingVec(MutableSequence[T], Generic[T]):
    """An ordered sequence, growable or fixed-capacity."""

    def __init__(self, items: Iterable[T] = (), capacity: object = DEFAULT_CAPACITY) -> None:
        self._capacity = _resolve_capacity(capacity)
        self._items: list[T] = []
        for item in items:
            self.append(item)

    @property
    def capacity(self) -> int | None:
        return self._capacity

    def _check_room(self) -> None:
        if self._capacity is not None and len(self._items) >= self._capacity:
            raise CapacityError(self._capacity)

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> list[T]: ...

    def __getitem__(self, index):  # type: ignore[no-untyped-def]
        return self._items[index]

    def __setitem__(self, index, value):  # type: ignore[no-untyped-def]
        self._items[index] = value

    def __delitem__(self, index):  # type: ignore[no-untyped-def]
        del self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def insert(self, index: int, value: T) -> None:
        self._check_room()
        self._items.insert(index, value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TracingVec):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TracingVec({self._items!r})"


class TracingMap(MutableMapping[K, V], Generic[K, V]):
    """An insertion-ordered mapping, growable or fixed-capacity.

    Replacing the value of an existing key never counts against the
    capacity.
    """

    def __init__(
        self,
        items: Iterable[tuple[K, V]] = (),
        capacity: object = DEFAULT_CAPACITY,
    ) -> None:
        self._capacity = _resolve_capacity(capacity)
        self._data: dict[K, V] = {}
        for key, value in items:
            self[key] = value

    @property
    def capacity(self) -> int | None:
        return self._capacity

    def __getitem__(self, key: K) -> V:
        return self._data[key]

    def __setitem__(self, key: K, value: V) -> None:
        if (
            self._capacity is not None
            and key not in self._data
            and len(self._data) >= self._capacity
        ):
            raise CapacityError(self._capacity)
        self._data[key] = value

    def __delitem__(self, key: K) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[K]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TracingMap):
            return list(self._data.items()) == list(other._data.items())
        if isinstance(other, dict):
            return self._data == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TracingMap({self._data!r})"
