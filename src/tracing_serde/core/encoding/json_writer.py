"""Streaming JSON serializer.

Writes compact JSON text straight to a text stream as values arrive, so a
live record's fields go out while the framework is still visiting them.
Nothing is buffered: if a value fails halfway through a map, whatever was
written before it stays in the stream.
"""

import io
import json
from typing import Any, TextIO

from tracing_serde.core.errors import SerializationError
from tracing_serde.core.serialization import (
    SerializeMap,
    SerializeSeq,
    Serializer,
    check_finite,
    key_to_str,
    serialize_value,
)


class _JsonMap(SerializeMap):
    def __init__(self, ser: "JsonSerializer") -> None:
        self._ser = ser
        self._first = True
        ser._write("{")

    def serialize_entry(self, key: Any, value: Any) -> None:
        text = json.dumps(key_to_str(key), ensure_ascii=False)
        self._ser._write(text if self._first else "," + text)
        self._first = False
        self._ser._write(":")
        serialize_value(value, self._ser)

    def end(self) -> None:
        self._ser._write("}")


class _JsonSeq(SerializeSeq):
    def __init__(self, ser: "JsonSerializer") -> None:
        self._ser = ser
        self._first = True
        ser._write("[")

    def serialize_element(self, value: Any) -> None:
        if not self._first:
            self._ser._write(",")
        self._first = False
        serialize_value(value, self._ser)

    def end(self) -> None:
        self._ser._write("]")


class JsonSerializer(Serializer):
    """Serializer that writes JSON text to ``stream``.

    Example:
        ```python
        buf = io.StringIO()
        as_serde(event).serialize(JsonSerializer(buf))
        ```
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def _write(self, text: str) -> None:
        try:
            self._stream.write(text)
        except OSError as exc:
            raise SerializationError(f"failed to write JSON: {exc}") from exc

    def serialize_bool(self, value: bool) -> None:
        self._write("true" if value else "false")

    def serialize_i64(self, value: int) -> None:
        self._write(str(int(value)))

    def serialize_u64(self, value: int) -> None:
        self._write(str(int(value)))

    def serialize_f64(self, value: float) -> None:
        self._write(json.dumps(check_finite(float(value))))

    def serialize_str(self, value: str) -> None:
        self._write(json.dumps(value, ensure_ascii=False))

    def serialize_none(self) -> None:
        self._write("null")

    def serialize_seq(self, length: int | None) -> SerializeSeq:
        return _JsonSeq(self)

    def serialize_map(self, length: int | None) -> SerializeMap:
        return _JsonMap(self)


def to_json(value: Any) -> str:
    """Serialize ``value`` to a JSON string."""
    buf = io.StringIO()
    serialize_value(value, JsonSerializer(buf))
    return buf.getvalue()
