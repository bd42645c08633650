"""Python logging handler adapter for chlog.

This adapter bridges Python's standard library logging module to a
LogWriterPort, so records from existing ``logging`` calls end up in the
ClickHouse logs table next to the ones written through Logger.
"""

import logging
import traceback
from typing import Any

from chlog.core.guard import in_write, writing
from chlog.core.levels import Level
from chlog.core.ports import LogWriterPort

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

# Default attributes to extract from LogRecord
_DEFAULT_INCLUDE_ATTRS = ["module", "funcName", "lineno", "pathname"]

# Loggers that report on the sink itself; their records are never written back
_SINK_LOGGER_PREFIXES = ("chlog", "clickhouse_driver")


def _level_for_record(levelno: int) -> Level:
    """Map a stdlib level number to the closest Level."""
    if levelno >= logging.CRITICAL:
        return Level.FATAL
    if levelno >= logging.ERROR:
        return Level.ERROR
    if levelno >= logging.WARNING:
        return Level.WARN
    if levelno >= logging.INFO:
        return Level.INFO
    if levelno >= logging.DEBUG:
        return Level.DEBUG
    return Level.TRACE


def _is_sink_record(record: logging.LogRecord) -> bool:
    return any(
        record.name == prefix or record.name.startswith(prefix + ".")
        for prefix in _SINK_LOGGER_PREFIXES
    )


class ClickHouseHandler(logging.Handler):
    """Logging handler that writes log records through a LogWriterPort.

    CRITICAL records are stored at the fatal level but, unlike
    Logger.fatal, never stop the process.

    Example:
        ```python
        from chlog import ClickHouseHandler, new_writer

        writer = new_writer("clickhouse://localhost:9000/app", "billing")
        logging.getLogger().addHandler(ClickHouseHandler(writer))
        ```
    """

    def __init__(
        self,
        writer: LogWriterPort,
        include_attrs: list[str] | None = None,
        level: int = logging.NOTSET,
    ) -> None:
        """Initialize the handler with a log writer.

        Args:
            writer: Writer implementing LogWriterPort.
            include_attrs: List of LogRecord attributes to include. Defaults to
                ["module", "funcName", "lineno", "pathname"].
            level: Minimum level handled.
        """
        super().__init__(level)
        self._writer = writer
        self._include_attrs = (
            include_attrs if include_attrs is not None else _DEFAULT_INCLUDE_ATTRS
        )

    def _fields_for_record(self, record: logging.LogRecord) -> dict[str, Any]:
        # Map of attribute names to their values from LogRecord
        attr_mapping: dict[str, Any] = {
            "module": record.module,
            "funcName": record.funcName or "",
            "lineno": record.lineno,
            "pathname": record.pathname,
        }
        fields: dict[str, Any] = {
            key: attr_mapping[key] for key in self._include_attrs if key in attr_mapping
        }

        # Add any extra attributes passed via logging call
        for key, value in record.__dict__.items():
            if key not in _STANDARD_LOGRECORD_ATTRS:
                fields[key] = value

        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            if exc_type is not None:
                fields["exc_type"] = exc_type.__name__
            if exc_value is not None:
                fields["exc_message"] = str(exc_value)
            if exc_tb is not None:
                fields["exc_traceback"] = "".join(
                    traceback.format_exception(exc_type, exc_value, exc_tb)
                )
        return fields

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record to the writer.

        Args:
            record: The log record to emit.
        """
        # records emitted while this thread is writing would re-enter the writer
        if in_write() or _is_sink_record(record):
            return
        try:
            with writing():
                self._writer.write(
                    _level_for_record(record.levelno),
                    (record.getMessage(),),
                    self._fields_for_record(record),
                )
        except Exception:
            self.handleError(record)
