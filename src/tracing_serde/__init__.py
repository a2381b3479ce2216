"""Structured serialization for instrumentation records.

Wrap a framework object with ``as_serde`` during a callback, then either
serialize it right away or call ``to_owned()`` to keep it for later.

Example:
    ```python
    from tracing_serde import JsonSerializer, as_serde

    def on_event(event):
        as_serde(event).serialize(JsonSerializer(sys.stdout))
    ```
"""

from tracing_serde.adapters.logging import LogRecordEvent
from tracing_serde.adapters.storage import InMemoryEventStorage, RingBufferEventStorage
from tracing_serde.config import BOUNDED_CAPACITY, SETTINGS, Settings
from tracing_serde.core.adapter import as_serde
from tracing_serde.core.containers import TracingMap, TracingVec
from tracing_serde.core.encoding import (
    JsonSerializer,
    PythonSerializer,
    decode_events,
    encode_events,
    to_json,
    to_python,
)
from tracing_serde.core.errors import CapacityError, DeserializationError, SerializationError
from tracing_serde.core.models import (
    RecordMap,
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
from tracing_serde.core.ports import EventStoragePort
from tracing_serde.core.serialization import (
    Serialize,
    SerializeMap,
    SerializeSeq,
    Serializer,
    serialize_value,
)
from tracing_serde.core.strings import StringRef
from tracing_serde.core.values import DebugRecord, FieldValue, ValueKind
from tracing_serde.core.visitor import OwnedMapVisitor, SerdeMapVisitor

__all__ = [
    "BOUNDED_CAPACITY",
    "SETTINGS",
    "CapacityError",
    "DebugRecord",
    "DeserializationError",
    "EventStoragePort",
    "FieldValue",
    "InMemoryEventStorage",
    "JsonSerializer",
    "LogRecordEvent",
    "OwnedMapVisitor",
    "PythonSerializer",
    "RecordMap",
    "RingBufferEventStorage",
    "SerdeMapVisitor",
    "Serialize",
    "SerializeAttributes",
    "SerializeEvent",
    "SerializeFieldSet",
    "SerializeId",
    "SerializeLevel",
    "SerializeMap",
    "SerializeMetadata",
    "SerializeRecord",
    "SerializeRecordFields",
    "SerializeSeq",
    "SerializeSpanFields",
    "SerializationError",
    "Serializer",
    "Settings",
    "StringRef",
    "TracingMap",
    "TracingVec",
    "ValueKind",
    "as_serde",
    "decode_events",
    "encode_events",
    "serialize_value",
    "to_json",
    "to_python",
]
