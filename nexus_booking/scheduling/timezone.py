"""
Timezone handling for the booking engine.

Rules:
- Weekly availability is stored as civil time in the system timezone
- Slots, bookings and external events are compared as UTC instants
- Viewers only change how an instant is displayed, never the instant
"""

import logging
import os
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union

import pytz

from nexus_booking.utils import ensure_utc, parse_civil_date, parse_civil_time

logger = logging.getLogger(__name__)

LOCALTIME_PATH = "/etc/localtime"
FALLBACK_TIMEZONE = "UTC"

# Offered in viewer timezone pickers alongside the detected zone
COMMON_TIMEZONES: list[str] = [
    "Asia/Ho_Chi_Minh",
    "Asia/Bangkok",
    "Asia/Singapore",
    "Asia/Tokyo",
    "Asia/Seoul",
    "Asia/Shanghai",
    "Asia/Kolkata",
    "Australia/Sydney",
    "Europe/London",
    "Europe/Paris",
    "Europe/Berlin",
    "America/New_York",
    "America/Chicago",
    "America/Los_Angeles",
    "UTC",
]


def get_timezone(tz_name: str) -> pytz.BaseTzInfo:
    """Resolve a zone name; unknown names raise ``pytz.UnknownTimeZoneError``."""
    return pytz.timezone(tz_name)


def system_civil_to_instant(
    date_civil: Union[str, date], time_civil: str, system_timezone: str
) -> datetime:
    """
    Anchor a wall-clock date and time in the system timezone to a UTC instant.

    Uses the zone rules valid on ``date_civil`` (not today), so DST
    transitions are honoured. An ambiguous wall time (fall back) resolves
    to its first occurrence; a wall time inside a spring-forward gap is
    moved forward by the length of the gap.

    Raises:
        ValueError: If the date or time string is malformed.
    """
    tz = get_timezone(system_timezone)
    naive_dt = datetime.combine(parse_civil_date(date_civil), parse_civil_time(time_civil))

    try:
        local_dt = tz.localize(naive_dt, is_dst=None)
    except pytz.exceptions.AmbiguousTimeError:
        local_dt = tz.localize(naive_dt, is_dst=True)
    except pytz.exceptions.NonExistentTimeError:
        # Standard offset applied to a skipped wall time lands past the gap
        local_dt = tz.normalize(tz.localize(naive_dt, is_dst=False))

    return local_dt.astimezone(timezone.utc)


def to_timezone(instant: datetime, tz_name: str) -> datetime:
    """Express an instant as wall-clock time in ``tz_name`` (naive taken as UTC)."""
    return ensure_utc(instant).astimezone(get_timezone(tz_name))


def format_instant_in_timezone(instant: datetime, pattern: str, tz_name: str) -> str:
    """Render an instant as civil time in ``tz_name`` using a strftime pattern."""
    return to_timezone(instant, tz_name).strftime(pattern)


def detect_viewer_timezone() -> str:
    """
    Best-effort guess of the viewer's zone from the environment.

    Checks ``TZ`` first, then the host's ``/etc/localtime`` link target.
    Falls back to UTC. Callers should let the viewer override the result.
    """
    tz_env = os.environ.get("TZ", "").lstrip(":")
    if tz_env in pytz.all_timezones_set:
        return tz_env

    if os.path.islink(LOCALTIME_PATH):
        target = os.path.realpath(LOCALTIME_PATH)
        marker = "zoneinfo" + os.sep
        if marker in target:
            candidate = target.split(marker, 1)[1]
            if candidate in pytz.all_timezones_set:
                return candidate

    logger.debug("Could not detect viewer timezone, using %s", FALLBACK_TIMEZONE)
    return FALLBACK_TIMEZONE


def is_different_timezone(candidate: str, system_timezone: str) -> bool:
    """True when the viewer needs a timezone annotation next to slot times."""
    return candidate != system_timezone


def _utc_offset(tz_name: str, at: Optional[datetime]) -> timedelta:
    moment = ensure_utc(at) if at is not None else datetime.now(timezone.utc)
    offset = to_timezone(moment, tz_name).utcoffset()
    return offset if offset is not None else timedelta(0)


def get_timezone_offset(
    viewer_timezone: str, system_timezone: str, at: Optional[datetime] = None
) -> float:
    """Hours the viewer's clock is ahead of the system clock at ``at`` (default now)."""
    diff = _utc_offset(viewer_timezone, at) - _utc_offset(system_timezone, at)
    return diff.total_seconds() / 3600


def get_timezone_display_name(tz_name: str, at: Optional[datetime] = None) -> str:
    """Short offset label such as ``GMT+7``, ``GMT-5`` or ``GMT+5:30``."""
    total_minutes = int(_utc_offset(tz_name, at).total_seconds() // 60)
    if total_minutes == 0:
        return "GMT"
    sign = "+" if total_minutes > 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    if minutes:
        return f"GMT{sign}{hours}:{minutes:02d}"
    return f"GMT{sign}{hours}"


def get_timezone_option_label(tz_name: str, at: Optional[datetime] = None) -> str:
    return f"{tz_name} ({get_timezone_display_name(tz_name, at)})"
