"""Exceptions raised while serializing and deserializing trace data."""


class SerializationError(Exception):
    """A downstream serializer could not write a value.

    This is the only failure kind that travels through the adapter. The
    field collectors absorb the first one they see and re-raise it when
    the map is finished.
    """


class CapacityError(SerializationError):
    """A fixed-capacity container has no room for another entry."""

    def __init__(self, capacity: int) -> None:
        super().__init__(f"container is full (capacity {capacity})")
        self.capacity = capacity


class DeserializationError(SerializationError):
    """Plain data does not have the shape of the requested record."""
