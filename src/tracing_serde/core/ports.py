"""Port interfaces for the instrumentation framework.

These abstract classes describe the objects an instrumentation framework
hands to its subscribers during a callback. The adapter depends only on
these interfaces; ``tracing_serde.adapters.logging`` implements them on
top of the standard library's ``logging`` module.

The storage protocol at the bottom is the contract for adapters that keep
materialized events for later serialization.
"""

import enum
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tracing_serde.core.models import SerializeEvent


class Level(enum.Enum):
    """Verbosity of a span or event, as the framework reports it."""

    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


@dataclass(frozen=True)
class Id:
    """Identifier the framework assigns to a span.

    Attributes:
        value: Nonzero unsigned 64-bit integer.
    """

    value: int

    def __post_init__(self) -> None:
        if not 0 < self.value < 2**64:
            raise ValueError(f"span id must be a nonzero u64, got {self.value}")

    def into_u64(self) -> int:
        return self.value


class Field(ABC):
    """A named field declared by a callsite."""

    @property
    @abstractmethod
    def name(self) -> str: ...


class FieldSet(ABC):
    """The fields a callsite declares, in declaration order."""

    @abstractmethod
    def __iter__(self) -> Iterator[Field]: ...

    @abstractmethod
    def __len__(self) -> int: ...


class Visit(ABC):
    """Callbacks the framework invokes once per recorded field.

    Only ``record_debug`` is required; every typed callback falls back to
    it by default.
    """

    def record_value(self, field: Field, value: Any) -> None:
        """Record a structured value (mappings, sequences, scalars)."""
        self.record_debug(field, value)

    def record_bool(self, field: Field, value: bool) -> None:
        self.record_debug(field, value)

    def record_i64(self, field: Field, value: int) -> None:
        self.record_debug(field, value)

    def record_u64(self, field: Field, value: int) -> None:
        self.record_debug(field, value)

    def record_f64(self, field: Field, value: float) -> None:
        self.record_debug(field, value)

    def record_str(self, field: Field, value: str) -> None:
        self.record_debug(field, value)

    @abstractmethod
    def record_debug(self, field: Field, value: object) -> None: ...


def visit_value(visitor: Visit, field: Field, value: object) -> None:
    """Dispatch a plain Python value to the matching typed callback.

    Anything that is not a scalar, containers included, goes to
    ``record_debug``. Sources that want structured output call
    ``record_value`` themselves.
    """
    if isinstance(value, bool):
        visitor.record_bool(field, value)
    elif isinstance(value, int) and -(2**63) <= value < 0:
        visitor.record_i64(field, value)
    elif isinstance(value, int) and 0 <= value < 2**64:
        visitor.record_u64(field, value)
    elif isinstance(value, float):
        visitor.record_f64(field, value)
    elif isinstance(value, str):
        visitor.record_str(field, value)
    else:
        visitor.record_debug(field, value)


class Metadata(ABC):
    """Static description of a callsite."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def target(self) -> str: ...

    @property
    @abstractmethod
    def level(self) -> Level: ...

    @property
    def module_path(self) -> str | None:
        return None

    @property
    def file(self) -> str | None:
        return None

    @property
    def line(self) -> int | None:
        return None

    @property
    @abstractmethod
    def fields(self) -> FieldSet: ...

    @property
    @abstractmethod
    def is_span(self) -> bool: ...

    @property
    def is_event(self) -> bool:
        return not self.is_span


class ValueSet(ABC):
    """The field values a span was created with."""

    @abstractmethod
    def record(self, visitor: Visit) -> None:
        """Invoke one visitor callback per field that has a value."""

    @abstractmethod
    def __len__(self) -> int: ...


class Event(ABC):
    """A point-in-time record."""

    @property
    @abstractmethod
    def metadata(self) -> Metadata: ...

    @property
    def parent(self) -> Id | None:
        return None

    def fields(self) -> Iterator[Field]:
        return iter(self.metadata.fields)

    @abstractmethod
    def record(self, visitor: Visit) -> None:
        """Invoke one visitor callback per recorded field."""


class Attributes(ABC):
    """The attributes of a newly created span."""

    @property
    @abstractmethod
    def metadata(self) -> Metadata: ...

    @property
    def parent(self) -> Id | None:
        return None

    @property
    def is_root(self) -> bool:
        return False

    @property
    @abstractmethod
    def values(self) -> ValueSet: ...


class Record(ABC):
    """Values recorded on an existing span after it was created."""

    @abstractmethod
    def record(self, visitor: Visit) -> None:
        """Invoke one visitor callback per recorded field."""

    @abstractmethod
    def __len__(self) -> int: ...


@runtime_checkable
class EventStoragePort(Protocol):
    """Port for buffering materialized events.

    Adapters implementing this protocol hold events after the callback that
    produced them has returned. Examples: InMemoryEventStorage,
    RingBufferEventStorage.
    """

    def write(self, event: "SerializeEvent") -> None:
        """Store a materialized event.

        Raises:
            ValueError: If the event is still live.
        """
        ...

    def read(self) -> Iterable["SerializeEvent"]:
        """Return stored events, oldest first."""
        ...
