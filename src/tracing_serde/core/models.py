"""Serializable views of instrumentation records.

Most wrappers come in two representations:

- live: wraps the framework object handed over during a callback and
  reads its fields only when serialized;
- materialized: owns a snapshot and can be buffered, pickled or passed to
  another thread.

``to_owned()`` is the only way from the first to the second.
``deserialize()`` always builds the materialized form.
"""

import enum
import pickle
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from tracing_serde.core.containers import TracingMap, TracingVec
from tracing_serde.core.errors import DeserializationError
from tracing_serde.core.ports import Attributes, Event, FieldSet, Record, ValueSet
from tracing_serde.core.serialization import Serializer
from tracing_serde.core.strings import StringRef
from tracing_serde.core.values import FieldValue
from tracing_serde.core.visitor import OwnedMapVisitor, SerdeMapVisitor

RecordMap = TracingMap[StringRef, FieldValue]

U32_MAX = 2**32 - 1


def _serialize_struct(serializer: Serializer, entries: list[tuple[str, Any]]) -> Any:
    map_ser = serializer.serialize_map(len(entries))
    for key, value in entries:
        map_ser.serialize_entry(key, value)
    return map_ser.end()


def _expect_mapping(data: object, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise DeserializationError(f"{what} must be a mapping, got {type(data).__name__}")
    return data


def _require(data: Mapping[str, Any], key: str, what: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise DeserializationError(f"{what} is missing {key!r}") from None


def _optional_str(data: object) -> StringRef | None:
    return None if data is None else StringRef.deserialize(data)


def _expect_bool(data: object, what: str) -> bool:
    if not isinstance(data, bool):
        raise DeserializationError(f"{what} must be a bool, got {type(data).__name__}")
    return data


class SerializeLevel(enum.IntEnum):
    """Severity of a span or event, ordered from least to most severe.

    Serialized as the upper-case member name, e.g. ``"WARN"``.
    """

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4

    def serialize(self, serializer: Serializer) -> Any:
        return serializer.serialize_str(self.name)

    def to_owned(self) -> "SerializeLevel":
        return self

    @classmethod
    def deserialize(cls, data: object) -> "SerializeLevel":
        if isinstance(data, str):
            try:
                return cls[data]
            except KeyError:
                pass
        raise DeserializationError(f"unknown level {data!r}")


@dataclass(frozen=True)
class SerializeId:
    """A span id.

    Attributes:
        id: Nonzero unsigned 64-bit integer assigned by the framework.
    """

    id: int

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            raise TypeError(f"span id must be an int, got {type(self.id).__name__}")
        if not 0 < self.id < 2**64:
            raise ValueError(f"span id must be a nonzero u64, got {self.id}")

    def serialize(self, serializer: Serializer) -> Any:
        return _serialize_struct(serializer, [("id", self.id)])

    def to_owned(self) -> "SerializeId":
        return self

    @classmethod
    def deserialize(cls, data: object) -> "SerializeId":
        raw = _require(_expect_mapping(data, "id"), "id", "id")
        try:
            return cls(raw)
        except (TypeError, ValueError) as exc:
            raise DeserializationError(str(exc)) from exc


def _optional_id(data: object) -> SerializeId | None:
    return None if data is None else SerializeId.deserialize(data)


class SerializeFieldSet:
    """The field names a callsite declares, in declaration order."""

    __slots__ = ("_source", "_names")

    def __init__(
        self,
        source: FieldSet | None = None,
        names: TracingVec[StringRef] | None = None,
    ) -> None:
        self._source = source
        self._names = names

    @classmethod
    def live(cls, field_set: FieldSet) -> "SerializeFieldSet":
        return cls(source=field_set)

    @classmethod
    def materialized(cls, names: Iterable[StringRef | str]) -> "SerializeFieldSet":
        return cls(
            names=TracingVec(
                name if isinstance(name, StringRef) else StringRef.owned(name)
                for name in names
            )
        )

    @property
    def is_live(self) -> bool:
        return self._names is None

    def names(self) -> list[StringRef]:
        if self._names is None:
            return [StringRef.borrowed(field.name) for field in self._source]  # type: ignore[union-attr]
        return list(self._names)

    def __len__(self) -> int:
        if self._names is None:
            return len(self._source)  # type: ignore[arg-type]
        return len(self._names)

    def serialize(self, serializer: Serializer) -> Any:
        seq = serializer.serialize_seq(len(self))
        if self._names is None:
            for field in self._source:  # type: ignore[union-attr]
                seq.serialize_element(field.name)
        else:
            for name in self._names:
                seq.serialize_element(name)
        return seq.end()

    def to_owned(self) -> "SerializeFieldSet":
        return SerializeFieldSet.materialized(name.to_owned() for name in self.names())

    @classmethod
    def deserialize(cls, data: object) -> "SerializeFieldSet":
        if not isinstance(data, list | tuple):
            raise DeserializationError(
                f"field set must be a sequence, got {type(data).__name__}"
            )
        return cls.materialized(StringRef.deserialize(name) for name in data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SerializeFieldSet):
            return NotImplemented
        if self.is_live or other.is_live:
            return self is other
        return self._names == other._names

    __hash__ = None  # type: ignore[assignment]

    def __reduce__(self) -> Any:
        if self.is_live:
            raise pickle.PicklingError("live field set cannot leave its callback; call to_owned()")
        return (SerializeFieldSet.materialized, (list(self.names()),))

    def __repr__(self) -> str:
        state = "live" if self.is_live else "materialized"
        return f"SerializeFieldSet.{state}({[str(n) for n in self.names()]!r})"


@dataclass(frozen=True)
class SerializeMetadata:
    """Static description of a callsite.

    Attributes:
        name: Span or event name.
        target: Usually the module path of the callsite.
        level: Severity.
        module_path: Module that contains the callsite, if known.
        file: Source file, if known.
        line: Source line, if known.
        fields: Names of the fields the callsite declares.
        is_span: Whether the callsite creates spans.
        is_event: Whether the callsite emits events.
    """

    name: StringRef
    target: StringRef
    level: SerializeLevel
    module_path: StringRef | None
    file: StringRef | None
    line: int | None
    fields: SerializeFieldSet
    is_span: bool
    is_event: bool

    @property
    def is_live(self) -> bool:
        return self.fields.is_live

    def serialize(self, serializer: Serializer) -> Any:
        return _serialize_struct(
            serializer,
            [
                ("name", self.name),
                ("target", self.target),
                ("level", self.level),
                ("module_path", self.module_path),
                ("file", self.file),
                ("line", self.line),
                ("fields", self.fields),
                ("is_span", self.is_span),
                ("is_event", self.is_event),
            ],
        )

    def to_owned(self) -> "SerializeMetadata":
        return SerializeMetadata(
            name=self.name.to_owned(),
            target=self.target.to_owned(),
            level=self.level,
            module_path=None if self.module_path is None else self.module_path.to_owned(),
            file=None if self.file is None else self.file.to_owned(),
            line=self.line,
            fields=self.fields.to_owned(),
            is_span=self.is_span,
            is_event=self.is_event,
        )

    @classmethod
    def deserialize(cls, data: object) -> "SerializeMetadata":
        data = _expect_mapping(data, "metadata")
        line = data.get("line")
        if line is not None and (
            isinstance(line, bool) or not isinstance(line, int) or not 0 <= line <= U32_MAX
        ):
            raise DeserializationError(f"metadata line must be a u32, got {line!r}")
        return cls(
            name=StringRef.deserialize(_require(data, "name", "metadata")),
            target=StringRef.deserialize(_require(data, "target", "metadata")),
            level=SerializeLevel.deserialize(_require(data, "level", "metadata")),
            module_path=_optional_str(data.get("module_path")),
            file=_optional_str(data.get("file")),
            line=line,
            fields=SerializeFieldSet.deserialize(_require(data, "fields", "metadata")),
            is_span=_expect_bool(_require(data, "is_span", "metadata"), "is_span"),
            is_event=_expect_bool(_require(data, "is_event", "metadata"), "is_event"),
        )


class _DualFields:
    """Field values that are either read from a live source or owned.

    Subclasses name the live source (an event, a span's value set, a
    record) and know how many fields it will visit.
    """

    __slots__ = ("_source", "_map")

    def __init__(self, source: Any = None, record_map: RecordMap | None = None) -> None:
        self._source = source
        self._map = record_map

    @classmethod
    def materialized(cls, record_map: Mapping[Any, FieldValue]) -> Any:
        if not isinstance(record_map, TracingMap):
            record_map = TracingMap(
                (key if isinstance(key, StringRef) else StringRef.owned(key), value)
                for key, value in record_map.items()
            )
        return cls(record_map=record_map)

    @property
    def is_live(self) -> bool:
        return self._map is None

    @property
    def record_map(self) -> RecordMap | None:
        """The owned snapshot, or None for a live wrapper."""
        return self._map

    def _live_len(self) -> int:
        return len(self._source)

    def serialize(self, serializer: Serializer) -> Any:
        if self._map is not None:
            map_ser = serializer.serialize_map(len(self._map))
            for key, value in self._map.items():
                map_ser.serialize_entry(key, value)
            return map_ser.end()
        visitor = SerdeMapVisitor(serializer.serialize_map(self._live_len()))
        self._source.record(visitor)
        return visitor.finish()

    def to_owned(self) -> Any:
        """Return a materialized copy that owns all of its strings.

        Raises:
            CapacityError: In bounded mode, if there are too many fields.
        """
        if self._map is None:
            visitor = OwnedMapVisitor()
            self._source.record(visitor)
            return type(self)(record_map=visitor.finish())
        return type(self)(
            record_map=TracingMap(
                (key.to_owned(), value.to_owned()) for key, value in self._map.items()
            )
        )

    @classmethod
    def deserialize(cls, data: object) -> Any:
        data = _expect_mapping(data, "fields")
        return cls(
            record_map=TracingMap(
                (StringRef.deserialize(key), FieldValue.deserialize(value))
                for key, value in data.items()
            )
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _DualFields) or type(self) is not type(other):
            return NotImplemented
        if self.is_live or other.is_live:
            return self is other
        return self._map == other._map

    __hash__ = None  # type: ignore[assignment]

    def __reduce__(self) -> Any:
        if self.is_live:
            raise pickle.PicklingError(
                f"live {type(self).__name__} cannot leave its callback; call to_owned()"
            )
        return (type(self).materialized, (dict(self._map),))  # type: ignore[arg-type]

    def __repr__(self) -> str:
        if self.is_live:
            return f"{type(self).__name__}.live({self._source!r})"
        return f"{type(self).__name__}.materialized({dict(self._map)!r})"  # type: ignore[arg-type]


class SerializeRecordFields(_DualFields):
    """The fields of an event."""

    __slots__ = ()

    @classmethod
    def live(cls, event: Event) -> "SerializeRecordFields":
        return cls(source=event)

    def _live_len(self) -> int:
        return sum(1 for _ in self._source.fields())


class SerializeSpanFields(_DualFields):
    """The fields a span was created with."""

    __slots__ = ()

    @classmethod
    def live(cls, values: ValueSet) -> "SerializeSpanFields":
        return cls(source=values)


class SerializeRecord(_DualFields):
    """Values recorded on a span after creation."""

    __slots__ = ()

    @classmethod
    def live(cls, record: Record) -> "SerializeRecord":
        return cls(source=record)


@dataclass(frozen=True)
class SerializeEvent:
    """An event with its fields, callsite metadata and parent span."""

    fields: SerializeRecordFields
    metadata: SerializeMetadata
    parent: SerializeId | None = None

    @property
    def is_live(self) -> bool:
        return self.fields.is_live or self.metadata.is_live

    def serialize(self, serializer: Serializer) -> Any:
        return _serialize_struct(
            serializer,
            [("fields", self.fields), ("metadata", self.metadata), ("parent", self.parent)],
        )

    def to_owned(self) -> "SerializeEvent":
        return SerializeEvent(
            fields=self.fields.to_owned(),
            metadata=self.metadata.to_owned(),
            parent=self.parent,
        )

    @classmethod
    def deserialize(cls, data: object) -> "SerializeEvent":
        data = _expect_mapping(data, "event")
        return cls(
            fields=SerializeRecordFields.deserialize(_require(data, "fields", "event")),
            metadata=SerializeMetadata.deserialize(_require(data, "metadata", "event")),
            parent=_optional_id(data.get("parent")),
        )


@dataclass(frozen=True)
class SerializeAttributes:
    """A newly created span: metadata, parent, root flag and initial fields."""

    metadata: SerializeMetadata
    parent: SerializeId | None
    is_root: bool
    fields: SerializeSpanFields

    @property
    def is_live(self) -> bool:
        return self.fields.is_live or self.metadata.is_live

    def serialize(self, serializer: Serializer) -> Any:
        return _serialize_struct(
            serializer,
            [
                ("metadata", self.metadata),
                ("parent", self.parent),
                ("is_root", self.is_root),
                ("fields", self.fields),
            ],
        )

    def to_owned(self) -> "SerializeAttributes":
        return SerializeAttributes(
            metadata=self.metadata.to_owned(),
            parent=self.parent,
            is_root=self.is_root,
            fields=self.fields.to_owned(),
        )

    @classmethod
    def deserialize(cls, data: object) -> "SerializeAttributes":
        data = _expect_mapping(data, "attributes")
        return cls(
            metadata=SerializeMetadata.deserialize(_require(data, "metadata", "attributes")),
            parent=_optional_id(data.get("parent")),
            is_root=_expect_bool(_require(data, "is_root", "attributes"), "is_root"),
            fields=SerializeSpanFields.deserialize(_require(data, "fields", "attributes")),
        )
