"""Log levels and their persisted names."""

from enum import IntEnum
from types import MappingProxyType
from typing import Any


class Level(IntEnum):
    """Severity of a log call, from most to least verbose."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5
    PANIC = 6


# Values stored in the "level" column
LEVEL_NAMES = MappingProxyType(
    {
        Level.TRACE: "trace",
        Level.DEBUG: "debug",
        Level.INFO: "info",
        Level.WARN: "warn",
        Level.ERROR: "error",
        Level.FATAL: "fatal",
        Level.PANIC: "panic",
    }
)


def level_name(level: Any) -> str:
    """Return the stored name of a level.

    Args:
        level: A Level member (or its integer value).

    Returns:
        The lowercase level name, or "" for values outside the enumeration.
    """
    try:
        return LEVEL_NAMES.get(level, "")
    except TypeError:
        # unhashable values are never levels
        return ""
