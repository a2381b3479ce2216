"""Tests for NDJSON event encoding."""

import json

import pytest
from tests.fakes import FakeEvent

from tracing_serde.core.adapter import as_serde
from tracing_serde.core.encoding.ndjson import decode_events, encode_events
from tracing_serde.core.errors import DeserializationError


class TestNdjsonEncoder:
    """Tests for NDJSON encoding of events."""

    @pytest.mark.encoding
    def test_encode_single_event(self, event: FakeEvent) -> None:
        """Single event encodes to one JSON line."""
        result = encode_events([as_serde(event)])

        parsed = json.loads(result.strip())
        assert parsed["fields"] == {"code": 404, "msg": "not found"}
        assert parsed["metadata"]["level"] == "WARN"

    @pytest.mark.encoding
    def test_encode_multiple_events(self) -> None:
        """Multiple events are newline-delimited."""
        events = [
            as_serde(FakeEvent({"message": "First"})).to_owned(),
            as_serde(FakeEvent({"message": "Second"})).to_owned(),
        ]

        result = encode_events(events)

        lines = result.strip().split("\n")
        assert len(lines) == 2
        assert json.loads(lines[0])["fields"]["message"] == "First"
        assert json.loads(lines[1])["fields"]["message"] == "Second"

    @pytest.mark.encoding
    def test_encode_empty_iterable(self) -> None:
        """Empty input returns empty string."""
        assert encode_events([]) == ""

    @pytest.mark.encoding
    def test_output_ends_with_newline(self, event: FakeEvent) -> None:
        assert encode_events([as_serde(event)]).endswith("\n")

    @pytest.mark.encoding
    def test_decode_round_trip(self, mixed_event: FakeEvent) -> None:
        """Decoding then re-encoding reproduces the text."""
        text = encode_events([as_serde(mixed_event), as_serde(FakeEvent({"n": 1}))])

        decoded = decode_events(text + "\n")

        assert len(decoded) == 2
        assert all(not e.is_live for e in decoded)
        assert encode_events(decoded) == text

    @pytest.mark.encoding
    def test_decode_reports_bad_lines(self, event: FakeEvent) -> None:
        text = encode_events([as_serde(event)]) + "{not json\n"

        with pytest.raises(DeserializationError, match="line 2"):
            decode_events(text)

    @pytest.mark.encoding
    def test_decode_rejects_non_event_lines(self) -> None:
        with pytest.raises(DeserializationError, match="event is missing .fields."):
            decode_events('{"metadata": {}}\n')
