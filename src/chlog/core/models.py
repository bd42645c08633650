"""Core domain models for log events."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class LogEvent:
    """A log row as it is inserted into the logs table.

    Attributes:
        timestamp: Capture time of the log call (timezone-aware, UTC).
        level: Level name (e.g., info, error), or "" for unknown levels.
        message: The log message.
        fields: Serialized structured fields.
        resource_id: Identifier of the service or tenant that logged.
    """

    timestamp: datetime
    level: str
    message: str
    fields: str
    resource_id: str

    def as_row(self) -> tuple[datetime, str, str, str, str]:
        """Return the values in insert column order."""
        return (self.timestamp, self.level, self.message, self.fields, self.resource_id)
