"""ClickHouse storage adapter for logs."""

import logging
import threading
from collections.abc import Iterable
from types import TracebackType
from typing import Any

from clickhouse_driver import Client, errors

from chlog.core.dsn import (
    DEFAULT_DIAL_TIMEOUT,
    ConnectionSettings,
    parse_connection_string,
)
from chlog.core.errors import SchemaError, SinkConnectionError, WriteError
from chlog.core.fields import Fields
from chlog.core.guard import writing
from chlog.core.logs import make_event

logger = logging.getLogger(__name__)

_LOGS_SCHEMA = """
CREATE TABLE IF NOT EXISTS logs (
    timestamp DateTime64(9),
    level String,
    message String,
    fields String,
    resource_id String
) ENGINE = MergeTree()
ORDER BY timestamp
"""

_INSERT_LOG = """
INSERT INTO logs (timestamp, level, message, fields, resource_id) VALUES
"""

# Failures that mean the server could not be reached at all
_NETWORK_ERRORS = (errors.NetworkError, OSError, EOFError)
_CLIENT_ERRORS = (errors.Error, OSError, EOFError)


def _create_client(settings: ConnectionSettings) -> Client:
    """Create a native protocol client for the given settings."""
    return Client(
        host=settings.host,
        port=settings.port,
        database=settings.database,
        user=settings.username,
        password=settings.password,
        connect_timeout=settings.dial_timeout,
    )


class ClickHouseLogWriter:
    """ClickHouse implementation of LogWriterPort.

    Each write is one synchronous INSERT into the ``logs`` table; nothing
    is buffered or retried. The native client is not safe for concurrent
    use, so statements are serialized with a lock shared by every logger
    holding this writer.

    Use ``ClickHouseLogWriter.open`` to connect and create the table, and
    ``close`` (or a ``with`` block) to disconnect.
    """

    def __init__(self, client: Client, resource_id: str) -> None:
        self._client = client
        self._resource_id = resource_id
        self._lock = threading.Lock()
        self._closed = False

    @classmethod
    def open(
        cls,
        connection_string: str,
        resource_id: str,
        dial_timeout: float = DEFAULT_DIAL_TIMEOUT,
    ) -> "ClickHouseLogWriter":
        """Connect to ClickHouse and make sure the logs table exists.

        Args:
            connection_string: ``scheme://[user[:password]@]host[:port][/database]``.
            resource_id: Identifier stored with every row.
            dial_timeout: Seconds to wait for the connection to open.

        Returns:
            A writer holding the open client.

        Raises:
            SinkConnectionError: If the connection string is invalid or the
                server cannot be reached.
            SchemaError: If creating the logs table fails.
        """
        settings = parse_connection_string(connection_string, dial_timeout)
        try:
            client = _create_client(settings)
        except _CLIENT_ERRORS as exc:
            raise SinkConnectionError(
                f"cannot open client for {settings.host}:{settings.port}: {exc}"
            ) from exc

        try:
            client.execute(_LOGS_SCHEMA)
        except _NETWORK_ERRORS as exc:
            client.disconnect()
            raise SinkConnectionError(
                f"cannot connect to {settings.host}:{settings.port}: {exc}"
            ) from exc
        except errors.Error as exc:
            client.disconnect()
            raise SchemaError(f"cannot create logs table: {exc}") from exc

        logger.debug(
            "Connected to %s:%s, logs table ready", settings.host, settings.port
        )
        return cls(client, resource_id)

    @property
    def resource_id(self) -> str:
        """Identifier stored with every row."""
        return self._resource_id

    @property
    def closed(self) -> bool:
        """Return True once close() has been called."""
        return self._closed

    def write(self, level: Any, args: Iterable[Any], fields: Fields | None) -> None:
        """Insert one log row.

        Args:
            level: Level of the log call.
            args: Log call arguments, joined into the message.
            fields: Structured fields attached to the call.

        Raises:
            WriteError: If the writer is closed or the insert fails.
        """
        try:
            event = make_event(level, args, fields, self._resource_id)
        except Exception as exc:
            raise WriteError(f"cannot build log row: {exc}") from exc
        with self._lock, writing():
            if self._closed:
                raise WriteError("writer is closed")
            try:
                self._client.execute(_INSERT_LOG, [event.as_row()])
            except Exception as exc:
                # also covers String column encoding errors (lone surrogates)
                raise WriteError(f"cannot insert log row: {exc}") from exc

    def close(self) -> None:
        """Disconnect the client. Calling close more than once is a no-op."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._client.disconnect()
        logger.debug("Disconnected log writer for %r", self._resource_id)

    def __enter__(self) -> "ClickHouseLogWriter":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def new_writer(
    connection_string: str,
    resource_id: str,
    dial_timeout: float = DEFAULT_DIAL_TIMEOUT,
) -> ClickHouseLogWriter:
    """Open a ClickHouseLogWriter (see ClickHouseLogWriter.open)."""
    return ClickHouseLogWriter.open(connection_string, resource_id, dial_timeout)
