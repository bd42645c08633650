"""Port interfaces for log writers and loggers.

These protocols define the contracts that adapters must implement.
The core domain depends only on these interfaces, not concrete implementations.
"""

from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable

from chlog.core.fields import Fields


@runtime_checkable
class LogWriterPort(Protocol):
    """Port for persisting log calls.

    Examples: ClickHouseLogWriter, InMemoryLogWriter.
    """

    def write(self, level: Any, args: Iterable[Any], fields: Fields | None) -> None:
        """Persist one log call.

        Raises:
            WriteError: If the entry could not be stored.
        """
        ...

    def close(self) -> None:
        """Release the underlying resources."""
        ...


@runtime_checkable
class LoggerPort(Protocol):
    """Port for the generic structured logging interface."""

    def log(self, level: Any, *args: Any) -> None:
        """Log the arguments at the given level."""
        ...

    def with_fields(self, fields: Fields) -> "LoggerPort":
        """Return a logger carrying exactly the given fields."""
        ...

    def with_additional_fields(self, fields: Fields) -> "LoggerPort":
        """Return a logger carrying the current fields updated with ``fields``."""
        ...

    def logger(self) -> "LoggerPort":
        """Return a logger without fields that shares the same writer."""
        ...
