"""
Conflict checks for candidate slots.

A candidate [start, end) for one trainer is rejected if it overlaps a
non-cancelled internal booking (whose end is pushed out by the event
type's buffer) or an externally synced busy interval. Whole-day blocks
are checked once per trainer before any candidate is generated.
"""

from datetime import datetime, timedelta
from typing import Iterable

from nexus_booking.schemas.booking_schema import BlockedSlot, Booking, ExternalBooking
from nexus_booking.schemas.event_schema import EventType

# External events synced without an end time are treated as one hour long
DEFAULT_EXTERNAL_EVENT_MINUTES = 60


def overlaps(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    """Half-open interval overlap: [a, b) and [c, d) overlap iff a < d and c < b."""
    return start_a < end_b and start_b < end_a


def is_day_blocked(trainer_id: str, date_civil: str, blocked_slots: Iterable[BlockedSlot]) -> bool:
    return any(b.trainer_id == trainer_id and b.date == date_civil for b in blocked_slots)


def external_event_end(event: ExternalBooking) -> datetime:
    if event.end is not None:
        return event.end
    return event.start + timedelta(minutes=DEFAULT_EXTERNAL_EVENT_MINUTES)


def has_booking_conflict(
    trainer_id: str,
    start: datetime,
    end: datetime,
    bookings: Iterable[Booking],
    buffer_minutes: int = 0,
) -> bool:
    """Check the trainer's active bookings; the buffer extends only the booking end."""
    buffer = timedelta(minutes=buffer_minutes)
    for booking in bookings:
        if booking.trainer_id != trainer_id or booking.is_cancelled:
            continue
        if overlaps(start, end, booking.start_time, booking.end_time + buffer):
            return True
    return False


def has_external_conflict(
    trainer_id: str,
    start: datetime,
    end: datetime,
    external_bookings: Iterable[ExternalBooking],
) -> bool:
    for event in external_bookings:
        if event.trainer_id != trainer_id:
            continue
        if overlaps(start, end, event.start, external_event_end(event)):
            return True
    return False


def is_slot_available(
    trainer_id: str,
    start: datetime,
    end: datetime,
    event_type: EventType,
    bookings: Iterable[Booking],
    external_bookings: Iterable[ExternalBooking],
) -> bool:
    """Accept the candidate only if neither conflict source rejects it."""
    if has_booking_conflict(trainer_id, start, end, bookings, event_type.buffer_minutes):
        return False
    return not has_external_conflict(trainer_id, start, end, external_bookings)
