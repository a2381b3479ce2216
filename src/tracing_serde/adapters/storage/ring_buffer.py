"""Ring buffer storage adapter for materialized events.

Provides bounded in-memory storage that automatically evicts oldest
events when the buffer is full. Useful for services that need
predictable memory usage while holding trace data for later export.
"""

import logging
from collections import deque
from collections.abc import Iterable

from tracing_serde.adapters.storage.in_memory import _require_owned
from tracing_serde.core.models import SerializeEvent

logger = logging.getLogger(__name__)


class RingBufferEventStorage:
    """Ring buffer implementation of EventStoragePort.

    Stores events in a fixed-size circular buffer. When the buffer
    is full, the oldest event is automatically evicted to make room for
    new events.

    Args:
        max_size: Maximum number of events to store.
    """

    def __init__(self, max_size: int) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self._buffer: deque[SerializeEvent] = deque(maxlen=max_size)
        self._evicted = 0

    @property
    def evicted(self) -> int:
        """Number of events dropped to make room for newer ones."""
        return self._evicted

    def write(self, event: SerializeEvent) -> None:
        """Write a materialized event to storage."""
        _require_owned(event)
        if len(self._buffer) == self._buffer.maxlen:
            self._evicted += 1
            logger.debug("Ring buffer full (%d), evicting oldest event", self._buffer.maxlen)
        self._buffer.append(event)

    def read(self) -> Iterable[SerializeEvent]:
        """Read stored events, oldest first."""
        yield from list(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)
