"""Helpers for structured fields and messages."""

from collections.abc import Iterable, Mapping
from typing import Any

Fields = Mapping[str, Any]


def safe_str(value: Any) -> str:
    """Return str(value), or a placeholder when the value cannot be printed."""
    try:
        return str(value)
    except Exception:
        return f"<unprintable {type(value).__name__}>"


def stringify_fields(fields: Fields | None) -> str:
    """Serialize fields to newline-terminated ``key=value`` lines.

    Keys are written in sorted order so identical field sets always
    produce identical output.

    Args:
        fields: Mapping of field names to values. None is treated as empty.

    Returns:
        One ``key=value\\n`` line per entry, or "" when there are no fields.
    """
    if not fields:
        return ""
    lines = []
    for key in sorted(fields, key=safe_str):
        lines.append(f"{safe_str(key)}={safe_str(fields[key])}\n")
    return "".join(lines)


def merge_fields(current: Fields | None, additional: Fields | None) -> dict[str, Any]:
    """Merge two field sets into a new dict.

    Values from ``additional`` win when both contain the same key.
    Neither argument is modified.
    """
    merged = dict(current or {})
    merged.update(additional or {})
    return merged


def format_message(args: Iterable[Any]) -> str:
    """Join log call arguments into a message, separated by single spaces."""
    return " ".join(safe_str(arg) for arg in args)
