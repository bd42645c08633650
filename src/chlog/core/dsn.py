"""Connection string parsing for the ClickHouse native protocol."""

from dataclasses import dataclass, field
from urllib.parse import unquote, urlsplit

from chlog.core.errors import SinkConnectionError

DEFAULT_PORT = 9000
DEFAULT_DIAL_TIMEOUT = 5.0


@dataclass(frozen=True)
class ConnectionSettings:
    """Parameters used to open a ClickHouse client.

    Attributes:
        host: Server host name or address.
        port: Native protocol port.
        username: User name, "" when the connection string has none.
        password: Password, "" when the connection string has none.
        database: Database name, "" for the server default.
        dial_timeout: Seconds to wait for the connection to open.
    """

    host: str
    port: int = DEFAULT_PORT
    username: str = ""
    password: str = field(default="", repr=False)
    database: str = ""
    dial_timeout: float = DEFAULT_DIAL_TIMEOUT


def parse_connection_string(
    connection_string: str,
    dial_timeout: float = DEFAULT_DIAL_TIMEOUT,
) -> ConnectionSettings:
    """Parse ``scheme://[user[:password]@]host[:port][/database]``.

    Args:
        connection_string: URL describing the server to connect to.
        dial_timeout: Connect timeout in seconds.

    Returns:
        ConnectionSettings for the single host in the URL.

    Raises:
        SinkConnectionError: If the string is not a URL with a scheme and host,
            or its port is invalid.
    """
    try:
        url = urlsplit(connection_string)
        port = url.port
    except (TypeError, ValueError, AttributeError) as exc:
        raise SinkConnectionError(
            f"invalid connection string: {exc}"
        ) from exc

    if not url.scheme:
        raise SinkConnectionError("invalid connection string: missing scheme")
    if not url.hostname:
        raise SinkConnectionError("invalid connection string: missing host")

    return ConnectionSettings(
        host=url.hostname,
        port=port if port is not None else DEFAULT_PORT,
        username=unquote(url.username) if url.username else "",
        password=unquote(url.password) if url.password else "",
        database=url.path.removeprefix("/"),
        dial_timeout=dial_timeout,
    )
