"""Serializer that builds plain Python values."""

from typing import Any

from tracing_serde.core.serialization import (
    SerializeMap,
    SerializeSeq,
    Serializer,
    key_to_str,
    serialize_value,
)


class _DictMap(SerializeMap):
    def __init__(self, ser: "PythonSerializer") -> None:
        self._ser = ser
        self._data: dict[str, Any] = {}

    def serialize_entry(self, key: Any, value: Any) -> None:
        self._data[key_to_str(key)] = serialize_value(value, self._ser)

    def end(self) -> dict[str, Any]:
        return self._data


class _ListSeq(SerializeSeq):
    def __init__(self, ser: "PythonSerializer") -> None:
        self._ser = ser
        self._items: list[Any] = []

    def serialize_element(self, value: Any) -> None:
        self._items.append(serialize_value(value, self._ser))

    def end(self) -> list[Any]:
        return self._items


class PythonSerializer(Serializer):
    """Produces dicts, lists and scalars, the shape ``json.loads`` returns."""

    def serialize_bool(self, value: bool) -> bool:
        return bool(value)

    def serialize_i64(self, value: int) -> int:
        return int(value)

    def serialize_u64(self, value: int) -> int:
        return int(value)

    def serialize_f64(self, value: float) -> float:
        return float(value)

    def serialize_str(self, value: str) -> str:
        return str(value)

    def serialize_none(self) -> None:
        return None

    def serialize_seq(self, length: int | None) -> SerializeSeq:
        return _ListSeq(self)

    def serialize_map(self, length: int | None) -> SerializeMap:
        return _DictMap(self)


def to_python(value: Any) -> Any:
    """Serialize ``value`` into plain Python data."""
    return serialize_value(value, PythonSerializer())
