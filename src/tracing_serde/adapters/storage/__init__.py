"""Storage adapters implementing EventStoragePort."""

from tracing_serde.adapters.storage.in_memory import InMemoryEventStorage
from tracing_serde.adapters.storage.ring_buffer import RingBufferEventStorage

__all__ = [
    "InMemoryEventStorage",
    "RingBufferEventStorage",
]
