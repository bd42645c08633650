"""Exceptions raised by the ClickHouse log sink."""


class LogSinkError(Exception):
    """Base class for log sink failures."""


class SinkConnectionError(LogSinkError):
    """Connection string is malformed or the client could not connect."""


class SchemaError(LogSinkError):
    """The statement creating the logs table failed."""


class WriteError(LogSinkError):
    """Inserting a log row failed."""


class LoggerPanic(Exception):
    """Raised by Logger.log after writing an entry at PANIC level.

    Attributes:
        message: The formatted log message.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
