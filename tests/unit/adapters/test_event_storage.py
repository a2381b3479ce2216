"""Tests for event storage adapters."""

import logging

import pytest
from tests.fakes import FakeEvent

from tracing_serde.adapters.storage import InMemoryEventStorage, RingBufferEventStorage
from tracing_serde.core.adapter import as_serde
from tracing_serde.core.encoding import to_python
from tracing_serde.core.models import SerializeEvent
from tracing_serde.core.ports import EventStoragePort


def _owned(n: int) -> SerializeEvent:
    return as_serde(FakeEvent({"n": n})).to_owned()


class TestInMemoryEventStorage:
    """Tests for InMemoryEventStorage adapter."""

    @pytest.mark.storage
    def test_implements_event_storage_port(self) -> None:
        """InMemoryEventStorage must satisfy EventStoragePort protocol."""
        assert isinstance(InMemoryEventStorage(), EventStoragePort)

    @pytest.mark.storage
    def test_write_and_read_single_event(self) -> None:
        storage = InMemoryEventStorage()
        event = _owned(1)

        storage.write(event)

        assert list(storage.read()) == [event]
        assert len(storage) == 1

    @pytest.mark.storage
    def test_read_returns_empty_when_no_events(self) -> None:
        assert list(InMemoryEventStorage().read()) == []

    @pytest.mark.storage
    def test_rejects_live_events(self, event: FakeEvent) -> None:
        """A live wrapper cannot outlive its callback, so storage refuses it."""
        storage = InMemoryEventStorage()

        with pytest.raises(ValueError, match="to_owned"):
            storage.write(as_serde(event))

        assert len(storage) == 0

    @pytest.mark.storage
    def test_stored_events_serialize_after_callback(self, event: FakeEvent) -> None:
        storage = InMemoryEventStorage()
        storage.write(as_serde(event).to_owned())
        visits = event.visits

        (stored,) = storage.read()

        assert to_python(stored)["fields"] == {"code": 404, "msg": "not found"}
        assert event.visits == visits

    @pytest.mark.storage
    def test_clear(self) -> None:
        storage = InMemoryEventStorage()
        storage.write(_owned(1))

        storage.clear()

        assert list(storage.read()) == []

    @pytest.mark.storage
    def test_read_is_a_snapshot(self) -> None:
        """Writing while iterating does not disturb the reader."""
        storage = InMemoryEventStorage()
        storage.write(_owned(1))

        reader = storage.read()
        first = next(reader)
        storage.write(_owned(2))

        assert to_python(first)["fields"] == {"n": 1}
        assert list(reader) == []


class TestRingBufferEventStorage:
    """Tests for RingBufferEventStorage adapter."""

    @pytest.mark.storage
    def test_implements_event_storage_port(self) -> None:
        assert isinstance(RingBufferEventStorage(max_size=2), EventStoragePort)

    @pytest.mark.storage
    @pytest.mark.parametrize("max_size", [0, -1])
    def test_rejects_non_positive_size(self, max_size: int) -> None:
        with pytest.raises(ValueError, match="max_size must be positive"):
            RingBufferEventStorage(max_size=max_size)

    @pytest.mark.storage
    def test_evicts_oldest_when_full(self) -> None:
        storage = RingBufferEventStorage(max_size=2)

        for n in range(3):
            storage.write(_owned(n))

        assert [to_python(e)["fields"]["n"] for e in storage.read()] == [1, 2]
        assert storage.evicted == 1
        assert len(storage) == 2

    @pytest.mark.storage
    def test_logs_eviction(self, caplog: pytest.LogCaptureFixture) -> None:
        storage = RingBufferEventStorage(max_size=1)
        storage.write(_owned(0))

        with caplog.at_level(logging.DEBUG, logger="tracing_serde.adapters.storage.ring_buffer"):
            storage.write(_owned(1))

        assert "evicting oldest event" in caplog.text

    @pytest.mark.storage
    def test_rejects_live_events(self, event: FakeEvent) -> None:
        storage = RingBufferEventStorage(max_size=2)

        with pytest.raises(ValueError, match="live events cannot be stored"):
            storage.write(as_serde(event))
