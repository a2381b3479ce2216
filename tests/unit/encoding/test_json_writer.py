"""Tests for the streaming JSON serializer."""

import io
import json

import pytest
from tests.fakes import FakeEvent

from tracing_serde.core.adapter import as_serde
from tracing_serde.core.encoding.json_writer import JsonSerializer, to_json
from tracing_serde.core.errors import SerializationError
from tracing_serde.core.strings import StringRef

EXPECTED_404 = (
    '{"fields":{"code":404,"msg":"not found"},'
    '"metadata":{"name":"request","target":"svc","level":"WARN",'
    '"module_path":null,"file":null,"line":88,"fields":["code","msg"],'
    '"is_span":false,"is_event":true},"parent":null}'
)


class TestJsonSerializer:
    """Tests for JsonSerializer."""

    @pytest.mark.encoding
    def test_scalars(self) -> None:
        assert to_json(True) == "true"
        assert to_json(-5) == "-5"
        assert to_json(2**64 - 1) == "18446744073709551615"
        assert to_json(0.1) == "0.1"
        assert to_json(None) == "null"
        assert to_json("café") == '"café"'

    @pytest.mark.encoding
    def test_nested_containers(self) -> None:
        assert to_json({"a": [1, {"b": None}]}) == '{"a":[1,{"b":null}]}'

    @pytest.mark.encoding
    def test_string_ref_keys(self) -> None:
        assert to_json({StringRef.borrowed("k"): 1}) == '{"k":1}'

    @pytest.mark.encoding
    def test_rejects_non_string_keys(self) -> None:
        with pytest.raises(SerializationError, match="map keys must be strings"):
            to_json({1: "a"})

    @pytest.mark.encoding
    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_rejects_non_finite_floats(self, value: float) -> None:
        with pytest.raises(SerializationError, match="non-finite"):
            to_json(value)

    @pytest.mark.encoding
    def test_event_scenario(self, event: FakeEvent) -> None:
        """The 404 event serializes to the documented record."""
        assert to_json(as_serde(event)) == EXPECTED_404
        assert to_json(as_serde(event).to_owned()) == EXPECTED_404

    @pytest.mark.encoding
    def test_failure_leaves_earlier_fields_in_the_stream(self) -> None:
        """Entries before the failing field are already written; later ones are not."""
        event = FakeEvent([("a", 1), ("b", "x"), ("c", float("nan")), ("d", 2)])
        buf = io.StringIO()

        with pytest.raises(SerializationError, match="non-finite"):
            as_serde(event).serialize(JsonSerializer(buf))

        assert buf.getvalue().startswith('{"fields":{"a":1,"b":"x"')
        assert '"d"' not in buf.getvalue()

    @pytest.mark.encoding
    def test_io_errors_become_serialization_errors(self) -> None:
        class ClosedStream(io.StringIO):
            def write(self, s: str) -> int:
                raise OSError("disk full")

        with pytest.raises(SerializationError, match="disk full"):
            JsonSerializer(ClosedStream()).serialize_str("x")

    @pytest.mark.encoding
    def test_output_is_valid_json(self, mixed_event: FakeEvent) -> None:
        parsed = json.loads(to_json(as_serde(mixed_event)))
        assert parsed["fields"]["point"] == "Point { x: 1, y: 2 }"
        assert parsed["parent"] == {"id": 42}
