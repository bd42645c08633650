"""In-memory storage adapter for logs."""

from collections.abc import Iterable
from typing import Any

from chlog.core.errors import WriteError
from chlog.core.fields import Fields
from chlog.core.logs import make_event
from chlog.core.models import LogEvent


class InMemoryLogWriter:
    """In-memory implementation of LogWriterPort.

    Stores log events in a list. Suitable for testing and for running
    without a database. Setting ``fail_with`` makes every write raise
    WriteError chained to that exception.
    """

    def __init__(self, resource_id: str = "") -> None:
        self.resource_id = resource_id
        self.events: list[LogEvent] = []
        self.fail_with: Exception | None = None
        self.closed = False

    def write(self, level: Any, args: Iterable[Any], fields: Fields | None) -> None:
        """Record a log event."""
        if self.closed:
            raise WriteError("writer is closed")
        if self.fail_with is not None:
            cause = self.fail_with
            raise WriteError(f"cannot store log event: {cause}") from cause
        try:
            event = make_event(level, args, fields, self.resource_id)
        except Exception as exc:
            raise WriteError(f"cannot build log event: {exc}") from exc
        self.events.append(event)

    def close(self) -> None:
        """Mark the writer closed."""
        self.closed = True
