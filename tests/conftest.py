"""Shared test fixtures for all test modules."""

import pytest
from tests.fakes import FakeEvent, Point, request_event

from tracing_serde.core.ports import Id


@pytest.fixture
def event() -> FakeEvent:
    """The 404 request event: code=404 (u64), msg="not found" (str)."""
    return request_event()


@pytest.fixture
def mixed_event() -> FakeEvent:
    """An event recording one field of every value kind, with a parent."""
    return FakeEvent(
        [
            ("ok", True),
            ("delta", -7),
            ("count", 2**64 - 1),
            ("ratio", 0.25),
            ("msg", "hello"),
            ("point", Point(1, 2)),
        ],
        parent=Id(42),
    )
