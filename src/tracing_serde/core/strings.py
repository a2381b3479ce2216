"""Borrowed-or-owned string used for field names and string values."""

from functools import total_ordering
from typing import Any

from tracing_serde.core.errors import DeserializationError


@total_ordering
class StringRef:
    """A string that either borrows the framework's text or owns a copy.

    Borrowed strings point at the exact object handed over by the
    instrumentation framework during a callback; owned strings hold a
    private copy. Equality, ordering and hashing only look at the text, so
    a borrowed and an owned StringRef with the same content are
    interchangeable as mapping keys.

    Example:
        ```python
        name = StringRef.borrowed(field.name)
        assert name == StringRef.owned(field.name)
        kept = name.to_owned()
        ```
    """

    __slots__ = ("_value", "_owned")

    def __init__(self, value: str, owned: bool = False) -> None:
        if not isinstance(value, str):
            raise TypeError(f"StringRef requires str, got {type(value).__name__}")
        self._value = value
        self._owned = owned

    @classmethod
    def borrowed(cls, value: str) -> "StringRef":
        """Wrap the caller's string without copying it."""
        return cls(value, owned=False)

    @classmethod
    def owned(cls, value: str) -> "StringRef":
        """Wrap a private copy of the given string."""
        return cls(str(value), owned=True)

    @property
    def is_owned(self) -> bool:
        return self._owned

    def as_str(self) -> str:
        return self._value

    def to_owned(self) -> "StringRef":
        """Return an owned StringRef, copying only when this one is borrowed."""
        if self._owned:
            return self
        return StringRef.owned(self._value)

    def serialize(self, serializer: Any) -> Any:
        return serializer.serialize_str(self._value)

    @classmethod
    def deserialize(cls, data: object) -> "StringRef":
        if isinstance(data, StringRef):
            return data.to_owned()
        if not isinstance(data, str):
            raise DeserializationError(
                f"expected a string, got {type(data).__name__}"
            )
        return cls.owned(data)

    def _content(self, other: object) -> str | None:
        if isinstance(other, StringRef):
            return other._value
        if isinstance(other, str):
            return other
        return None

    def __eq__(self, other: object) -> bool:
        content = self._content(other)
        if content is None:
            return NotImplemented
        return self._value == content

    def __lt__(self, other: object) -> bool:
        content = self._content(other)
        if content is None:
            return NotImplemented
        return self._value < content

    def __hash__(self) -> int:
        return hash(self._value)

    def __len__(self) -> int:
        return len(self._value)

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        kind = "owned" if self._owned else "borrowed"
        return f"StringRef.{kind}({self._value!r})"
