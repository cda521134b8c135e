"""
Time-related utilities for the application.

All timestamps are generated in UTC. Values read back from databases that
drop timezone information (SQLite) are treated as UTC.
"""

from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Return current UTC time in ISO-8601 format.

    Example:
        2024-01-15T10:42:31.123456+00:00
    """
    return utc_now().isoformat()


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def microseconds_since_epoch(value: datetime) -> int:
    """Return the exact number of microseconds between the epoch and `value`."""
    return (ensure_utc(value) - EPOCH) // timedelta(microseconds=1)
