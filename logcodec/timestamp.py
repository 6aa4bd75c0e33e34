"""Canonical timestamp formatting for log entries."""

from datetime import datetime, timezone

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def format_timestamp(value: datetime | float | int | str) -> str:
    """Format *value* as a UTC ISO 8601 string with microseconds.

    Accepts a datetime (naive values are taken as UTC), epoch seconds as
    found on ``logging.LogRecord.created``, or an already formatted string,
    which is passed through untouched.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        dt = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        dt = datetime.fromtimestamp(value, tz=timezone.utc)
    else:
        raise TypeError(f"Cannot format timestamp of type {type(value).__name__}")
    return dt.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)
