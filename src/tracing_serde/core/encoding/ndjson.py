"""NDJSON encoding for buffered events."""

import io
import json
from collections.abc import Iterable

from tracing_serde.core.encoding.json_writer import JsonSerializer
from tracing_serde.core.errors import DeserializationError
from tracing_serde.core.models import SerializeEvent


def encode_events(events: Iterable[SerializeEvent]) -> str:
    """Encode events to newline-delimited JSON.

    Args:
        events: An iterable of SerializeEvent objects, live or materialized.

    Returns:
        NDJSON string with one JSON object per line.
        Empty string if no events.
    """
    buf = io.StringIO()
    serializer = JsonSerializer(buf)
    for event in events:
        event.serialize(serializer)
        buf.write("\n")
    return buf.getvalue()


def decode_events(text: str) -> list[SerializeEvent]:
    """Decode newline-delimited JSON into materialized events.

    Blank lines are ignored.

    Raises:
        DeserializationError: If a line is not valid JSON or not an event.
    """
    events = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            data = json.loads(line)
        except json.JSONDecodeError as exc:
            raise DeserializationError(f"line {lineno}: {exc}") from exc
        events.append(SerializeEvent.deserialize(data))
    return events
