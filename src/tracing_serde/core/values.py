"""Recorded field values."""

import enum
import pickle
from typing import Any

from tracing_serde.core.errors import DeserializationError
from tracing_serde.core.serialization import I64_MAX, I64_MIN, U64_MAX, Serializer
from tracing_serde.core.strings import StringRef


class ValueKind(enum.Enum):
    """The kinds of value a field can be recorded as."""

    BOOL = "bool"
    I64 = "i64"
    U64 = "u64"
    F64 = "f64"
    STR = "str"
    DEBUG = "debug"


class DebugRecord:
    """A value recorded through ``record_debug``.

    A live record keeps the original object and formats it with ``repr()``
    when serialized, which must happen while the callback that produced it
    is still running. A materialized record keeps the formatted text.
    """

    __slots__ = ("_source", "_text")

    def __init__(self, source: object = None, text: StringRef | None = None) -> None:
        self._source = source
        self._text = text

    @classmethod
    def live(cls, value: object) -> "DebugRecord":
        return cls(source=value)

    @classmethod
    def materialized(cls, text: StringRef | str) -> "DebugRecord":
        if isinstance(text, str):
            text = StringRef.owned(text)
        return cls(text=text)

    @property
    def is_live(self) -> bool:
        return self._text is None

    def as_str(self) -> str:
        if self._text is None:
            return repr(self._source)
        return self._text.as_str()

    def serialize(self, serializer: Serializer) -> Any:
        return serializer.serialize_str(self.as_str())

    def to_owned(self) -> "DebugRecord":
        if self._text is None:
            return DebugRecord.materialized(StringRef.owned(repr(self._source)))
        return DebugRecord.materialized(self._text.to_owned())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DebugRecord):
            return NotImplemented
        if self.is_live or other.is_live:
            return self is other
        return self._text == other._text

    def __hash__(self) -> int:
        return hash(self.as_str())

    def __reduce__(self) -> Any:
        if self.is_live:
            raise pickle.PicklingError("live DebugRecord cannot leave its callback; call to_owned()")
        return (DebugRecord.materialized, (self.as_str(),))

    def __repr__(self) -> str:
        state = "live" if self.is_live else "materialized"
        return f"DebugRecord.{state}({self.as_str()!r})"


class FieldValue:
    """One recorded field value, tagged with its ValueKind.

    Serialization is untagged: the value is written with the serializer's
    matching scalar method, and debug values are written as their
    formatted text. Deserialization infers the kind from the Python type.
    """

    __slots__ = ("kind", "value")

    def __init__(self, kind: ValueKind, value: Any) -> None:
        self.kind = kind
        self.value = value

    @classmethod
    def bool_(cls, value: bool) -> "FieldValue":
        return cls(ValueKind.BOOL, bool(value))

    @classmethod
    def i64(cls, value: int) -> "FieldValue":
        if not I64_MIN <= value <= I64_MAX:
            raise ValueError(f"{value} is out of range for i64")
        return cls(ValueKind.I64, int(value))

    @classmethod
    def u64(cls, value: int) -> "FieldValue":
        if not 0 <= value <= U64_MAX:
            raise ValueError(f"{value} is out of range for u64")
        return cls(ValueKind.U64, int(value))

    @classmethod
    def f64(cls, value: float) -> "FieldValue":
        return cls(ValueKind.F64, float(value))

    @classmethod
    def str_(cls, value: StringRef | str) -> "FieldValue":
        if isinstance(value, str):
            value = StringRef.borrowed(value)
        return cls(ValueKind.STR, value)

    @classmethod
    def debug(cls, record: DebugRecord) -> "FieldValue":
        return cls(ValueKind.DEBUG, record)

    @property
    def is_live(self) -> bool:
        return self.kind is ValueKind.DEBUG and self.value.is_live

    def serialize(self, serializer: Serializer) -> Any:
        kind = self.kind
        if kind is ValueKind.BOOL:
            return serializer.serialize_bool(self.value)
        if kind is ValueKind.I64:
            return serializer.serialize_i64(self.value)
        if kind is ValueKind.U64:
            return serializer.serialize_u64(self.value)
        if kind is ValueKind.F64:
            return serializer.serialize_f64(self.value)
        return self.value.serialize(serializer)

    def to_owned(self) -> "FieldValue":
        """Return a copy whose string content is owned."""
        if self.kind in (ValueKind.STR, ValueKind.DEBUG):
            return FieldValue(self.kind, self.value.to_owned())
        return self

    @classmethod
    def deserialize(cls, data: object) -> "FieldValue":
        if isinstance(data, bool):
            return cls.bool_(data)
        if isinstance(data, int):
            try:
                return cls.i64(data) if data < 0 else cls.u64(data)
            except ValueError as exc:
                raise DeserializationError(str(exc)) from exc
        if isinstance(data, float):
            return cls.f64(data)
        if isinstance(data, str):
            return cls.str_(StringRef.owned(data))
        raise DeserializationError(
            f"expected bool, int, float or str field value, got {type(data).__name__}"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldValue):
            return NotImplemented
        return self.kind is other.kind and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.kind, self.value))

    def __reduce__(self) -> Any:
        return (FieldValue, (self.kind, self.value))

    def __repr__(self) -> str:
        return f"FieldValue({self.kind.name}, {self.value!r})"
