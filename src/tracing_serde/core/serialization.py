"""Port interfaces for downstream serializers.

The adapter only ever talks to a serializer through these two
capabilities: writing one value of known shape, and writing a map or a
sequence entry by entry. Concrete formats (JSON text, plain Python values)
live in ``tracing_serde.core.encoding``.
"""

import math
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from tracing_serde.core.errors import SerializationError

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1
U64_MAX = 2**64 - 1


@runtime_checkable
class Serialize(Protocol):
    """Anything that knows how to write itself to a Serializer."""

    def serialize(self, serializer: "Serializer") -> Any:
        ...


class SerializeMap(ABC):
    """An open map on a serializer."""

    @abstractmethod
    def serialize_entry(self, key: Any, value: Any) -> None:
        """Write one key/value pair.

        Raises:
            SerializationError: If the key or the value cannot be written.
        """

    @abstractmethod
    def end(self) -> Any:
        """Close the map and return the serializer's result."""


class SerializeSeq(ABC):
    """An open sequence on a serializer."""

    @abstractmethod
    def serialize_element(self, value: Any) -> None:
        """Write one element."""

    @abstractmethod
    def end(self) -> Any:
        """Close the sequence and return the serializer's result."""


class Serializer(ABC):
    """A format-agnostic sink for values of known shape."""

    @abstractmethod
    def serialize_bool(self, value: bool) -> Any: ...

    @abstractmethod
    def serialize_i64(self, value: int) -> Any: ...

    @abstractmethod
    def serialize_u64(self, value: int) -> Any: ...

    @abstractmethod
    def serialize_f64(self, value: float) -> Any: ...

    @abstractmethod
    def serialize_str(self, value: str) -> Any: ...

    @abstractmethod
    def serialize_none(self) -> Any: ...

    @abstractmethod
    def serialize_seq(self, length: int | None) -> SerializeSeq:
        """Open a sequence; ``length`` is None when unknown."""

    @abstractmethod
    def serialize_map(self, length: int | None) -> SerializeMap:
        """Open a map; ``length`` is None when unknown."""


def serialize_value(value: Any, serializer: Serializer) -> Any:
    """Write a Serialize object or a plain Python value.

    Plain values are bool, int, float, str, None, mappings, lists and
    tuples. Negative ints go out as i64, the rest as u64.

    Raises:
        SerializationError: For unsupported types or out-of-range ints.
    """
    if isinstance(value, Serialize) and not isinstance(value, type):
        return value.serialize(serializer)
    if value is None:
        return serializer.serialize_none()
    if isinstance(value, bool):
        return serializer.serialize_bool(value)
    if isinstance(value, int):
        if I64_MIN <= value < 0:
            return serializer.serialize_i64(value)
        if 0 <= value <= U64_MAX:
            return serializer.serialize_u64(value)
        raise SerializationError(f"integer {value} does not fit in 64 bits")
    if isinstance(value, float):
        return serializer.serialize_f64(value)
    if isinstance(value, str):
        return serializer.serialize_str(value)
    if isinstance(value, Mapping):
        map_ser = serializer.serialize_map(len(value))
        for key, item in value.items():
            map_ser.serialize_entry(key, item)
        return map_ser.end()
    if isinstance(value, list | tuple):
        seq = serializer.serialize_seq(len(value))
        for item in value:
            seq.serialize_element(item)
        return seq.end()
    raise SerializationError(f"cannot serialize value of type {type(value).__name__}")


def key_to_str(key: Any) -> str:
    """Return a map key as text, accepting str and StringRef-like keys."""
    if isinstance(key, str):
        return key
    as_str = getattr(key, "as_str", None)
    if callable(as_str):
        return as_str()
    raise SerializationError(f"map keys must be strings, got {type(key).__name__}")


def check_finite(value: float) -> float:
    """Reject NaN and infinities for formats that cannot represent them."""
    if not math.isfinite(value):
        raise SerializationError(f"cannot serialize non-finite float {value!r}")
    return value
