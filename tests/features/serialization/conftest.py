"""BDD step definitions for serialization features."""

import io
import json
from dataclasses import dataclass, field
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when
from tests.fakes import FakeEvent, FakeMetadata

from tracing_serde.adapters.storage import InMemoryEventStorage
from tracing_serde.core.adapter import as_serde
from tracing_serde.core.encoding import JsonSerializer, to_json
from tracing_serde.core.errors import SerializationError
from tracing_serde.core.models import SerializeLevel
from tracing_serde.core.ports import Level


@dataclass
class SerializationContext:
    """State shared between the steps of one scenario."""

    event: FakeEvent | None = None
    storage: InMemoryEventStorage = field(default_factory=InMemoryEventStorage)
    live_json: str = ""
    stored_json: str = ""
    error: SerializationError | None = None


@pytest.fixture
def ctx() -> SerializationContext:
    """Fresh scenario context for each test."""
    return SerializationContext()


def _parsed(ctx: SerializationContext) -> Any:
    return json.loads(ctx.live_json)


@given(
    parsers.parse(
        'an event "{name}" at level {level} with fields code={code:d} and msg="{msg}"'
    )
)
def given_request_event(
    ctx: SerializationContext, name: str, level: str, code: int, msg: str
) -> None:
    metadata = FakeMetadata(name=name, level=Level[level], field_names=["code", "msg"])
    ctx.event = FakeEvent({"code": code, "msg": msg}, metadata=metadata)


@given("an event with fields a=1, b=NaN and c=2")
def given_failing_event(ctx: SerializationContext) -> None:
    ctx.event = FakeEvent([("a", 1), ("b", float("nan")), ("c", 2)])


@when("the event is serialized to JSON during the callback")
def when_serialized_live(ctx: SerializationContext) -> None:
    assert ctx.event is not None
    buf = io.StringIO()
    try:
        as_serde(ctx.event).serialize(JsonSerializer(buf))
    except SerializationError as exc:
        ctx.error = exc
    ctx.live_json = buf.getvalue()


@when("the event is materialized into storage")
def when_materialized(ctx: SerializationContext) -> None:
    assert ctx.event is not None
    ctx.storage.write(as_serde(ctx.event).to_owned())


@when("the stored event is serialized to JSON after the callback")
def when_serialized_stored(ctx: SerializationContext) -> None:
    (stored,) = ctx.storage.read()
    ctx.stored_json = to_json(stored)


@then(parsers.parse("the JSON fields are {expected}"))
def then_fields_are(ctx: SerializationContext, expected: str) -> None:
    assert _parsed(ctx)["fields"] == json.loads(expected)


@then(parsers.parse('the JSON metadata level is "{level}"'))
def then_metadata_level(ctx: SerializationContext, level: str) -> None:
    assert _parsed(ctx)["metadata"]["level"] == level


@then("the JSON parent is null")
def then_parent_null(ctx: SerializationContext) -> None:
    assert _parsed(ctx)["parent"] is None


@then("both JSON documents are identical")
def then_identical(ctx: SerializationContext) -> None:
    assert ctx.live_json
    assert ctx.live_json == ctx.stored_json


@then(parsers.parse('serialization fails with "{message}"'))
def then_fails(ctx: SerializationContext, message: str) -> None:
    assert ctx.error is not None
    assert message in str(ctx.error)


@then(parsers.parse('field "{name}" was not written'))
def then_field_not_written(ctx: SerializationContext, name: str) -> None:
    assert ctx.live_json.startswith('{"fields":{"a":1,"b":')
    assert f'"{name}"' not in ctx.live_json


@then(parsers.parse("level {lower} sorts before level {higher}"))
def then_level_order(lower: str, higher: str) -> None:
    assert SerializeLevel[lower] < SerializeLevel[higher]
