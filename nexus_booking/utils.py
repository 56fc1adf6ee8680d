"""Shared parsing helpers used across the booking engine."""

from datetime import date, datetime, time, timezone
from typing import Union


def parse_civil_time(value: str) -> time:
    """Parse an ``HH:MM`` 24-hour wall-clock string.

    Examples:
        >>> parse_civil_time("09:30")
        datetime.time(9, 30)
    """
    try:
        return datetime.strptime(value.strip(), "%H:%M").time()
    except ValueError:
        raise ValueError(f"Invalid civil time {value!r}, expected HH:MM") from None


def parse_civil_date(value: Union[str, date]) -> date:
    """Parse a ``YYYY-MM-DD`` civil date string (dates pass through)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"Invalid civil date {value!r}, expected YYYY-MM-DD") from None


def ensure_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
