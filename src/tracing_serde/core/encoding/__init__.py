"""Concrete serializers for trace records."""

from tracing_serde.core.encoding.json_writer import JsonSerializer, to_json
from tracing_serde.core.encoding.ndjson import decode_events, encode_events
from tracing_serde.core.encoding.pyvalue import PythonSerializer, to_python

__all__ = [
    "JsonSerializer",
    "PythonSerializer",
    "decode_events",
    "encode_events",
    "to_json",
    "to_python",
]
