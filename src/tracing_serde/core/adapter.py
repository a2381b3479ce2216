"""Entry point that turns framework objects into serializable views."""

from functools import singledispatch
from typing import Any

from tracing_serde.core.models import (
    SerializeAttributes,
    SerializeEvent,
    SerializeFieldSet,
    SerializeId,
    SerializeLevel,
    SerializeMetadata,
    SerializeRecord,
    SerializeRecordFields,
    SerializeSpanFields,
)
from tracing_serde.core.ports import Attributes, Event, Id, Level, Metadata, Record
from tracing_serde.core.strings import StringRef

_LEVELS = {
    Level.TRACE: SerializeLevel.TRACE,
    Level.DEBUG: SerializeLevel.DEBUG,
    Level.INFO: SerializeLevel.INFO,
    Level.WARN: SerializeLevel.WARN,
    Level.ERROR: SerializeLevel.ERROR,
}


@singledispatch
def _as_serde(entity: object) -> Any:
    raise TypeError(f"as_serde does not support {type(entity).__name__}")


@_as_serde.register
def _(entity: Level) -> SerializeLevel:
    return _LEVELS[entity]


@_as_serde.register
def _(entity: Id) -> SerializeId:
    return SerializeId(entity.into_u64())


@_as_serde.register
def _(entity: Metadata) -> SerializeMetadata:
    module_path = entity.module_path
    file = entity.file
    return SerializeMetadata(
        name=StringRef.borrowed(entity.name),
        target=StringRef.borrowed(entity.target),
        level=_LEVELS[entity.level],
        module_path=None if module_path is None else StringRef.borrowed(module_path),
        file=None if file is None else StringRef.borrowed(file),
        line=entity.line,
        fields=SerializeFieldSet.live(entity.fields),
        is_span=entity.is_span,
        is_event=entity.is_event,
    )


def _parent(parent: Id | None) -> SerializeId | None:
    return None if parent is None else SerializeId(parent.into_u64())


@_as_serde.register
def _(entity: Event) -> SerializeEvent:
    return SerializeEvent(
        fields=SerializeRecordFields.live(entity),
        metadata=_as_serde(entity.metadata),
        parent=_parent(entity.parent),
    )


@_as_serde.register
def _(entity: Attributes) -> SerializeAttributes:
    return SerializeAttributes(
        metadata=_as_serde(entity.metadata),
        parent=_parent(entity.parent),
        is_root=entity.is_root,
        fields=SerializeSpanFields.live(entity.values),
    )


@_as_serde.register
def _(entity: Record) -> SerializeRecord:
    return SerializeRecord.live(entity)


def as_serde(entity: Any) -> Any:
    """Wrap a framework object for serialization.

    Supported inputs and their results:

    ======================  =======================
    ``ports.Metadata``      ``SerializeMetadata``
    ``ports.Event``         ``SerializeEvent``
    ``ports.Attributes``    ``SerializeAttributes``
    ``ports.Record``        ``SerializeRecord``
    ``ports.Id``            ``SerializeId``
    ``ports.Level``         ``SerializeLevel``
    ======================  =======================

    Metadata, events, attributes and records come back live: serialize
    them, or call ``to_owned()``, before the callback returns.

    Raises:
        TypeError: For any other type.
    """
    return _as_serde(entity)
