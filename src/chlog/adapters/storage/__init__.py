"""Storage adapters implementing LogWriterPort."""

from chlog.adapters.storage.clickhouse import ClickHouseLogWriter, new_writer
from chlog.adapters.storage.in_memory import InMemoryLogWriter

__all__ = [
    "ClickHouseLogWriter",
    "InMemoryLogWriter",
    "new_writer",
]
