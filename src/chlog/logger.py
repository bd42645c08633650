"""Structured logger backed by a log writer.

A Logger pairs a shared writer with its own immutable set of fields.
Deriving loggers with ``with_fields``, ``with_additional_fields`` or
``logger`` never copies the writer, so a whole tree of loggers writes
through one connection.
"""

import sys
from collections.abc import Callable
from types import MappingProxyType, TracebackType
from typing import Any

from chlog.adapters.storage.clickhouse import ClickHouseLogWriter
from chlog.core.dsn import DEFAULT_DIAL_TIMEOUT
from chlog.core.errors import LoggerPanic, WriteError
from chlog.core.fields import Fields, format_message, merge_fields
from chlog.core.levels import Level
from chlog.core.ports import LogWriterPort

ErrorCallback = Callable[[WriteError], None]


class Logger:
    """Logger writing every call as one row through a LogWriterPort.

    Write failures never reach the caller of ``log``: they are passed to
    ``on_error`` when one is given and dropped otherwise. FATAL exits the
    process and PANIC raises LoggerPanic, whether or not the write worked.

    Example:
        ```python
        from chlog import Level, new_logger

        with new_logger("clickhouse://user:pw@localhost:9000/app", "billing") as log:
            request_log = log.with_fields({"request_id": "abc123"})
            request_log.log(Level.INFO, "charged", 42, "EUR")
        ```
    """

    def __init__(
        self,
        writer: LogWriterPort,
        fields: Fields | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        """Initialize the logger.

        Args:
            writer: Writer shared with every derived logger.
            fields: Fields attached to every entry. The mapping is copied.
            on_error: Called with the WriteError when a write fails.
        """
        self._writer = writer
        self._fields: dict[str, Any] = dict(fields or {})
        self._on_error = on_error

    @property
    def writer(self) -> LogWriterPort:
        """The writer shared by this logger tree."""
        return self._writer

    @property
    def fields(self) -> Fields:
        """Read-only view of the fields attached to this logger."""
        return MappingProxyType(self._fields)

    def log(self, level: Any, *args: Any) -> None:
        """Write one entry, then exit on FATAL or raise on PANIC.

        Args:
            level: Level of the entry.
            *args: Message parts, joined with single spaces.

        Raises:
            LoggerPanic: If level is PANIC.
            SystemExit: If level is FATAL.
        """
        try:
            self._writer.write(level, args, self._fields)
        except WriteError as exc:
            self._report(exc)
        except Exception as exc:
            # writers outside this package may raise anything
            error = WriteError(f"cannot write log entry: {exc}")
            error.__cause__ = exc
            self._report(error)
        finally:
            if level == Level.FATAL:
                sys.exit(1)
            if level == Level.PANIC:
                raise LoggerPanic(format_message(args))

    def _report(self, error: WriteError) -> None:
        if self._on_error is not None:
            self._on_error(error)

    def trace(self, *args: Any) -> None:
        self.log(Level.TRACE, *args)

    def debug(self, *args: Any) -> None:
        self.log(Level.DEBUG, *args)

    def info(self, *args: Any) -> None:
        self.log(Level.INFO, *args)

    def warn(self, *args: Any) -> None:
        self.log(Level.WARN, *args)

    def error(self, *args: Any) -> None:
        self.log(Level.ERROR, *args)

    def fatal(self, *args: Any) -> None:
        self.log(Level.FATAL, *args)

    def panic(self, *args: Any) -> None:
        self.log(Level.PANIC, *args)

    def with_fields(self, fields: Fields) -> "Logger":
        """Return a logger carrying exactly ``fields``."""
        return Logger(self._writer, fields, self._on_error)

    def with_additional_fields(self, fields: Fields) -> "Logger":
        """Return a logger carrying the current fields updated with ``fields``.

        Values in ``fields`` replace current values for the same key. The
        given mapping is not modified.
        """
        return self.with_fields(merge_fields(self._fields, fields))

    def logger(self) -> "Logger":
        """Return a logger without fields that shares this writer."""
        return Logger(self._writer, on_error=self._on_error)

    def close(self) -> None:
        """Close the shared writer, for every logger in the tree."""
        self._writer.close()

    def __enter__(self) -> "Logger":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def new_logger(
    connection_string: str,
    resource_id: str,
    *,
    dial_timeout: float = DEFAULT_DIAL_TIMEOUT,
    on_error: ErrorCallback | None = None,
) -> Logger:
    """Connect to ClickHouse and return a root logger without fields.

    Args:
        connection_string: ``scheme://[user[:password]@]host[:port][/database]``.
        resource_id: Identifier stored with every row of this logger tree.
        dial_timeout: Seconds to wait for the connection to open.
        on_error: Called with the WriteError when a write fails.

    Raises:
        SinkConnectionError: If the connection string is invalid or the
            server cannot be reached.
        SchemaError: If creating the logs table fails.
    """
    writer = ClickHouseLogWriter.open(connection_string, resource_id, dial_timeout)
    return Logger(writer, on_error=on_error)
