"""In-memory storage adapter for materialized events."""

from collections.abc import Iterable

from tracing_serde.core.models import SerializeEvent


def _require_owned(event: SerializeEvent) -> None:
    if event.is_live:
        raise ValueError("live events cannot be stored; call to_owned() first")


class InMemoryEventStorage:
    """In-memory implementation of EventStoragePort.

    Stores events in a list. Suitable for testing and
    low-volume applications where persistence is not required.
    """

    def __init__(self) -> None:
        self._events: list[SerializeEvent] = []

    def write(self, event: SerializeEvent) -> None:
        """Write a materialized event to storage."""
        _require_owned(event)
        self._events.append(event)

    def read(self) -> Iterable[SerializeEvent]:
        """Read stored events in the order they were written."""
        yield from list(self._events)

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)
