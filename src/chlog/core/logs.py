"""Helper for creating LogEvent objects."""

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from chlog.core.fields import Fields, format_message, stringify_fields
from chlog.core.levels import level_name
from chlog.core.models import LogEvent


def make_event(
    level: Any,
    args: Iterable[Any],
    fields: Fields | None,
    resource_id: str,
) -> LogEvent:
    """Create a log event stamped with the current time.

    Args:
        level: Level of the log call. Unknown levels are stored as "".
        args: Log call arguments, joined into the message.
        fields: Structured fields attached to the call.
        resource_id: Identifier of the logging service or tenant.

    Returns:
        LogEvent ready to be inserted.
    """
    return LogEvent(
        timestamp=datetime.now(timezone.utc),
        level=level_name(level),
        message=format_message(args),
        fields=stringify_fields(fields),
        resource_id=resource_id,
    )
