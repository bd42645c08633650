"""Structured logging into a ClickHouse table."""

from chlog.adapters.logging import ClickHouseHandler
from chlog.adapters.storage import ClickHouseLogWriter, InMemoryLogWriter, new_writer
from chlog.core.dsn import ConnectionSettings, parse_connection_string
from chlog.core.errors import (
    LoggerPanic,
    LogSinkError,
    SchemaError,
    SinkConnectionError,
    WriteError,
)
from chlog.core.fields import stringify_fields
from chlog.core.levels import LEVEL_NAMES, Level, level_name
from chlog.core.models import LogEvent
from chlog.core.ports import LoggerPort, LogWriterPort
from chlog.logger import Logger, new_logger

__all__ = [
    "LEVEL_NAMES",
    "ClickHouseHandler",
    "ClickHouseLogWriter",
    "ConnectionSettings",
    "InMemoryLogWriter",
    "Level",
    "LogEvent",
    "LogSinkError",
    "LogWriterPort",
    "Logger",
    "LoggerPanic",
    "LoggerPort",
    "SchemaError",
    "SinkConnectionError",
    "WriteError",
    "level_name",
    "new_logger",
    "new_writer",
    "parse_connection_string",
    "stringify_fields",
]
