"""Tests for growable and fixed-capacity containers."""

import pytest

from tracing_serde.config import BOUNDED_CAPACITY, Settings
from tracing_serde.core import containers
from tracing_serde.core.containers import TracingMap, TracingVec
from tracing_serde.core.errors import CapacityError, SerializationError


@pytest.mark.core
class TestTracingMap:
    """Tests for TracingMap."""

    @pytest.mark.tier(0)
    def test_preserves_insertion_order(self) -> None:
        data = TracingMap([("z", 1), ("a", 2), ("m", 3)], capacity=None)
        assert list(data) == ["z", "a", "m"]

    @pytest.mark.tier(0)
    def test_full_map_rejects_new_key_and_keeps_entries(self) -> None:
        """Inserting entry N+1 into an N-entry map fails, leaving N intact."""
        data = TracingMap(
            ((f"f{i}", i) for i in range(BOUNDED_CAPACITY)), capacity=BOUNDED_CAPACITY
        )

        with pytest.raises(CapacityError) as excinfo:
            data["one_too_many"] = -1

        assert excinfo.value.capacity == BOUNDED_CAPACITY
        assert len(data) == BOUNDED_CAPACITY
        assert "one_too_many" not in data
        assert data["f0"] == 0
        assert data[f"f{BOUNDED_CAPACITY - 1}"] == BOUNDED_CAPACITY - 1

    @pytest.mark.tier(0)
    def test_full_map_allows_replacing_existing_key(self) -> None:
        data = TracingMap([("a", 1)], capacity=1)
        data["a"] = 2
        assert data["a"] == 2

    @pytest.mark.tier(0)
    def test_capacity_error_is_a_serialization_error(self) -> None:
        with pytest.raises(SerializationError):
            TracingMap([("a", 1), ("b", 2)], capacity=1)

    @pytest.mark.tier(0)
    def test_equality_is_order_sensitive(self) -> None:
        first = TracingMap([("a", 1), ("b", 2)], capacity=None)
        second = TracingMap([("b", 2), ("a", 1)], capacity=None)
        assert first != second
        assert first == {"b": 2, "a": 1}

    @pytest.mark.tier(0)
    def test_rejects_negative_capacity(self) -> None:
        with pytest.raises(ValueError, match="capacity"):
            TracingMap(capacity=-1)


@pytest.mark.core
class TestTracingVec:
    """Tests for TracingVec."""

    @pytest.mark.tier(0)
    def test_full_vec_rejects_append_and_keeps_items(self) -> None:
        names = TracingVec(["a", "b"], capacity=2)
        with pytest.raises(CapacityError):
            names.append("c")
        assert names == ["a", "b"]

    @pytest.mark.tier(0)
    def test_growable_vec_has_no_capacity(self) -> None:
        names = TracingVec(range(100), capacity=None)
        assert names.capacity is None
        assert len(names) == 100


@pytest.mark.core
@pytest.mark.tier(1)
def test_default_capacity_follows_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Containers built without an explicit capacity use the configured bound."""
    monkeypatch.setattr(containers, "SETTINGS", Settings(bounded=True))
    assert TracingMap().capacity == BOUNDED_CAPACITY
    assert TracingVec().capacity == BOUNDED_CAPACITY

    monkeypatch.setattr(containers, "SETTINGS", Settings(bounded=False))
    assert TracingMap().capacity is None
