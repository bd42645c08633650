"""Example service logging into ClickHouse.

Run with a local server listening on the native port:
    docker run -d -p 9000:9000 clickhouse/clickhouse-server
    python examples/clickhouse_example.py clickhouse://default@localhost:9000/default

Rows end up in the ``logs`` table:
    SELECT timestamp, level, message, fields FROM logs ORDER BY timestamp
"""

import logging
import sys

from chlog import ClickHouseHandler, Level, WriteError, new_logger


def report_failure(error: WriteError) -> None:
    """Print write failures instead of dropping them."""
    print(f"log write failed: {error}", file=sys.stderr)


def main(connection_string: str) -> None:
    with new_logger(connection_string, "example-service", on_error=report_failure) as log:
        log.log(Level.INFO, "service started")

        request_log = log.with_fields({"request_id": "abc123", "path": "/orders"})
        request_log.log(Level.DEBUG, "loading order", 42)
        request_log.with_additional_fields({"status": 404}).warn("order not found")

        # Route records from the logging module to the same table
        stdlib_logger = logging.getLogger("example")
        handler = ClickHouseHandler(log.writer)
        stdlib_logger.addHandler(handler)
        stdlib_logger.setLevel(logging.INFO)
        try:
            stdlib_logger.info("hello from logging", extra={"component": "worker"})
        finally:
            # the writer closes with this block
            stdlib_logger.removeHandler(handler)


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "clickhouse://default@localhost:9000/default")
