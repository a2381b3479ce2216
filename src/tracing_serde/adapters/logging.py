"""Python logging adapter for tracing_serde.

This adapter presents a standard library ``logging.LogRecord`` as an
instrumentation Event, so records emitted through ``logging`` can be
wrapped with ``as_serde`` and serialized like any other event.

Example:
    ```python
    class BufferingHandler(logging.Handler):
        def emit(self, record):
            event = as_serde(LogRecordEvent(record))
            storage.write(event.to_owned())
    ```
"""

import logging
import traceback
from collections.abc import Iterator

from tracing_serde.core.ports import Event, Field, FieldSet, Level, Metadata, Visit, visit_value

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


def level_from_levelno(levelno: int) -> Level:
    """Map a ``logging`` level number onto the five framework levels."""
    if levelno >= logging.ERROR:
        return Level.ERROR
    if levelno >= logging.WARNING:
        return Level.WARN
    if levelno >= logging.INFO:
        return Level.INFO
    if levelno >= logging.DEBUG:
        return Level.DEBUG
    return Level.TRACE


class LogRecordField(Field):
    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"LogRecordField({self._name!r})"


class LogRecordFieldSet(FieldSet):
    def __init__(self, names: list[str]) -> None:
        self._fields = [LogRecordField(name) for name in names]

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)


class LogRecordMetadata(Metadata):
    """Callsite metadata derived from a LogRecord."""

    def __init__(self, record: logging.LogRecord, field_names: list[str]) -> None:
        self._record = record
        self._fields = LogRecordFieldSet(field_names)

    @property
    def name(self) -> str:
        return f"event {self._record.pathname}:{self._record.lineno}"

    @property
    def target(self) -> str:
        return self._record.name

    @property
    def level(self) -> Level:
        return level_from_levelno(self._record.levelno)

    @property
    def module_path(self) -> str | None:
        return self._record.module or None

    @property
    def file(self) -> str | None:
        return self._record.pathname or None

    @property
    def line(self) -> int | None:
        return self._record.lineno or None

    @property
    def fields(self) -> FieldSet:
        return self._fields

    @property
    def is_span(self) -> bool:
        return False


class LogRecordEvent(Event):
    """An Event whose fields are a LogRecord's message and extras.

    Fields, in order: ``message``, every attribute passed through
    ``extra=``, then ``exc_type``, ``exc_message`` and ``exc_traceback``
    when the record carries exception info.
    """

    def __init__(self, record: logging.LogRecord) -> None:
        self._record = record

        values: dict[str, object] = {"message": record.getMessage()}
        for key, value in record.__dict__.items():
            if key not in _STANDARD_LOGRECORD_ATTRS and not key.startswith("_"):
                values[key] = value

        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            if exc_type is not None:
                values["exc_type"] = exc_type.__name__
            if exc_value is not None:
                values["exc_message"] = str(exc_value)
            if exc_tb is not None:
                values["exc_traceback"] = "".join(
                    traceback.format_exception(exc_type, exc_value, exc_tb)
                )

        self._metadata = LogRecordMetadata(record, list(values))
        self._values: list[tuple[Field, object]] = list(
            zip(self._metadata.fields, values.values(), strict=True)
        )

    @property
    def metadata(self) -> Metadata:
        return self._metadata

    def record(self, visitor: Visit) -> None:
        for field, value in self._values:
            visit_value(visitor, field, value)
