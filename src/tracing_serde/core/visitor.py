"""Visitors that turn field callbacks into map entries.

The framework pushes fields one at a time and offers no way for a visitor
to stop the dispatch early. Both visitors therefore keep the first
SerializationError they hit, ignore every later field, and surface the
error once the caller finishes the map.
"""

import logging
from abc import abstractmethod
from collections.abc import Callable
from typing import Any

from tracing_serde.core.containers import DEFAULT_CAPACITY, TracingMap
from tracing_serde.core.errors import SerializationError
from tracing_serde.core.ports import Field, Visit
from tracing_serde.core.serialization import SerializeMap, serialize_value
from tracing_serde.core.strings import StringRef
from tracing_serde.core.values import DebugRecord, FieldValue

logger = logging.getLogger(__name__)


def _borrowed_str(value: str) -> FieldValue:
    return FieldValue.str_(StringRef.borrowed(value))


def _owned_str(value: str) -> FieldValue:
    return FieldValue.str_(StringRef.owned(value))


def _live_debug(value: object) -> FieldValue:
    return FieldValue.debug(DebugRecord.live(value))


def _debug_snapshot(value: object) -> FieldValue:
    return FieldValue.debug(DebugRecord.materialized(repr(value)))


class _StickyVisitor(Visit):
    """Common state machine: ok until the first error, then skip."""

    def __init__(self) -> None:
        self._error: SerializationError | None = None
        self._skipped = 0

    @property
    def error(self) -> SerializationError | None:
        """The first error recorded, if any."""
        return self._error

    def _push(self, field: Field, make: Callable[[Any], Any], raw: Any) -> None:
        """Build a value from ``raw`` and write it, unless an error was already seen."""
        if self._error is not None:
            self._skipped += 1
            return
        try:
            try:
                value = make(raw)
            except ValueError as exc:
                raise SerializationError(f"field {field.name!r}: {exc}") from exc
            self._entry(field, value)
        except SerializationError as exc:
            logger.debug("Field %r failed to serialize, skipping the rest: %s", field.name, exc)
            self._error = exc

    @abstractmethod
    def _entry(self, field: Field, value: Any) -> None: ...

    def _raise_if_failed(self) -> None:
        if self._error is not None:
            if self._skipped:
                logger.debug("%d field(s) skipped after the first error", self._skipped)
            raise self._error


class SerdeMapVisitor(_StickyVisitor):
    """Writes each visited field as one entry of an open map.

    Example:
        ```python
        map_ser = serializer.serialize_map(len(record))
        visitor = SerdeMapVisitor(map_ser)
        record.record(visitor)
        result = visitor.finish()
        ```
    """

    def __init__(self, serializer: SerializeMap) -> None:
        super().__init__()
        self._serializer = serializer

    def _entry(self, field: Field, value: Any) -> None:
        self._serializer.serialize_entry(field.name, value)

    def record_bool(self, field: Field, value: bool) -> None:
        self._push(field, FieldValue.bool_, value)

    def record_i64(self, field: Field, value: int) -> None:
        self._push(field, FieldValue.i64, value)

    def record_u64(self, field: Field, value: int) -> None:
        self._push(field, FieldValue.u64, value)

    def record_f64(self, field: Field, value: float) -> None:
        self._push(field, FieldValue.f64, value)

    def record_str(self, field: Field, value: str) -> None:
        self._push(field, _borrowed_str, value)

    def record_debug(self, field: Field, value: object) -> None:
        self._push(field, _live_debug, value)

    def record_value(self, field: Field, value: Any) -> None:
        self._push(field, _Structured, value)

    def finish(self) -> Any:
        """Close the map and return its result.

        Raises:
            SerializationError: The first error recorded while visiting.
        """
        self._raise_if_failed()
        return self._serializer.end()

    def take_serializer(self) -> SerializeMap:
        """Return the still-open map so more entries can be appended.

        Raises:
            SerializationError: The first error recorded while visiting.
        """
        self._raise_if_failed()
        return self._serializer


class _Structured:
    """Defers a structured value to the generic value serializer."""

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def serialize(self, serializer: Any) -> Any:
        return serialize_value(self.value, serializer)


class OwnedMapVisitor(_StickyVisitor):
    """Collects visited fields into a fresh RecordMap of owned values.

    Debug values are formatted immediately, since the original object is
    only guaranteed to exist during the callback.
    """

    def __init__(self, capacity: object = DEFAULT_CAPACITY) -> None:
        super().__init__()
        self._map: TracingMap[StringRef, FieldValue] = TracingMap(capacity=capacity)

    def _entry(self, field: Field, value: FieldValue) -> None:
        self._map[StringRef.owned(field.name)] = value

    def record_bool(self, field: Field, value: bool) -> None:
        self._push(field, FieldValue.bool_, value)

    def record_i64(self, field: Field, value: int) -> None:
        self._push(field, FieldValue.i64, value)

    def record_u64(self, field: Field, value: int) -> None:
        self._push(field, FieldValue.u64, value)

    def record_f64(self, field: Field, value: float) -> None:
        self._push(field, FieldValue.f64, value)

    def record_str(self, field: Field, value: str) -> None:
        self._push(field, _owned_str, value)

    def record_debug(self, field: Field, value: object) -> None:
        self._push(field, _debug_snapshot, value)

    def finish(self) -> TracingMap[StringRef, FieldValue]:
        """Return the collected map.

        Raises:
            SerializationError: The first error recorded while visiting.
        """
        self._raise_if_failed()
        return self._map
