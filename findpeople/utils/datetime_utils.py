"""
Datetime helpers for directory payloads.

Directory rows carry ISO 8601 timestamps, sometimes with a 'Z' suffix and
sometimes with the space separator Postgres emits for text casts.
"""

from datetime import datetime, timezone
from typing import Optional, Union


def utc_now() -> datetime:
    """Current UTC time with timezone awareness."""
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Current UTC time as an ISO format string, e.g. "2024-01-15T10:30:00+00:00"."""
    return utc_now().isoformat()


def parse_datetime(value: Union[str, datetime, None],
                   default: Optional[datetime] = None) -> Optional[datetime]:
    """
    Parse a datetime value from a directory row.

    Handles ISO 8601 strings (with or without timezone, 'Z' suffix or space
    separator) and already-parsed datetimes. Naive values are treated as UTC.

    Args:
        value: The value to parse (string, datetime, or None)
        default: Returned when value is None or unparseable

    Examples:
        >>> parse_datetime("2024-01-15T10:30:00Z")
        datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc)
    """
    if value is None:
        return default

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        normalized = value.strip()
        if normalized.endswith("Z"):
            normalized = normalized[:-1] + "+00:00"
        if " " in normalized and "T" not in normalized:
            normalized = normalized.replace(" ", "T", 1)
        try:
            dt = datetime.fromisoformat(normalized)
        except ValueError:
            return default
    else:
        return default

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


_RELATIVE_UNITS = (
    (2592000, "month"),
    (604800, "week"),
    (86400, "day"),
    (3600, "hour"),
    (60, "minute"),
)


def format_relative_time(dt: Union[str, datetime, None]) -> str:
    """Describe a timestamp relative to now, like "3 days ago" or "just now".

    Unparseable or missing values render as "N/A".
    """
    parsed = parse_datetime(dt)
    if parsed is None:
        return "N/A"

    seconds = int((utc_now() - parsed).total_seconds())
    if seconds < 0:
        return "in the future"

    for size, unit in _RELATIVE_UNITS:
        if seconds >= size:
            count = seconds // size
            return f"{count} {unit}{'s' if count != 1 else ''} ago"
    return "just now"
