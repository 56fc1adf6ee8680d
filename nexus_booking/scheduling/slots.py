"""
Slot generation for the booking page.

For one civil date and one event type, walks every qualified trainer's
weekly availability in the system timezone and emits the candidate
windows that survive the conflict checks. Candidates start every
SLOT_STEP_MINUTES regardless of session length, so a 90-minute session
may begin on any half hour of a window.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Optional, Sequence, Union

from nexus_booking.config import settings
from nexus_booking.scheduling.conflicts import is_day_blocked, is_slot_available
from nexus_booking.scheduling.timezone import system_civil_to_instant, to_timezone
from nexus_booking.schemas.booking_schema import (
    BlockedSlot,
    Booking,
    DateAvailability,
    ExternalBooking,
    GeneratedTimeSlot,
)
from nexus_booking.schemas.event_schema import EventType
from nexus_booking.schemas.trainer_schema import TimeRange, Trainer, Weekday
from nexus_booking.utils import parse_civil_date

logger = logging.getLogger(__name__)

# Fixed candidate grid, independent of event duration
SLOT_STEP_MINUTES = 30

DateInput = Union[date, datetime, str]


def resolve_civil_date(value: DateInput, system_timezone: str) -> date:
    """Civil date in the system calendar. Aware datetimes are converted first."""
    if isinstance(value, datetime) and value.tzinfo is not None:
        return to_timezone(value, system_timezone).date()
    return parse_civil_date(value)


def qualified_trainers(
    trainers: Sequence[Trainer],
    event_type: EventType,
    specific_trainer_id: Optional[str] = None,
) -> list[Trainer]:
    """Trainers allowed to teach ``event_type``, optionally narrowed to one id."""
    qualified = [t for t in trainers if t.is_qualified_for(event_type.id)]
    if specific_trainer_id:
        qualified = [t for t in qualified if t.id == specific_trainer_id]
    return qualified


def _range_candidates(
    trainer: Trainer,
    date_civil: str,
    time_range: TimeRange,
    event_type: EventType,
    bookings: Sequence[Booking],
    external_bookings: Sequence[ExternalBooking],
    system_timezone: str,
) -> list[GeneratedTimeSlot]:
    range_start = system_civil_to_instant(date_civil, time_range.start, system_timezone)
    range_end = system_civil_to_instant(date_civil, time_range.end, system_timezone)
    duration = timedelta(minutes=event_type.duration_minutes)
    step = timedelta(minutes=SLOT_STEP_MINUTES)

    slots: list[GeneratedTimeSlot] = []
    candidate = range_start
    while candidate + duration <= range_end:
        candidate_end = candidate + duration
        if is_slot_available(
            trainer.id, candidate, candidate_end, event_type, bookings, external_bookings
        ):
            slots.append(
                GeneratedTimeSlot(start=candidate, end=candidate_end, trainer_id=trainer.id)
            )
        candidate += step
    return slots


def generate_available_slots(
    date: DateInput,
    event_type: EventType,
    trainers: Sequence[Trainer],
    bookings: Sequence[Booking],
    blocked_slots: Sequence[BlockedSlot] = (),
    external_bookings: Sequence[ExternalBooking] = (),
    specific_trainer_id: Optional[str] = None,
    system_timezone: Optional[str] = None,
) -> list[GeneratedTimeSlot]:
    """
    Compute the bookable slots for one date, sorted by start instant.

    Blocked, unavailable and unqualified trainers contribute nothing; an
    empty list is a normal result. Overlapping time ranges on the same
    day are not merged, so they can yield duplicate slots.

    Raises:
        ValueError: If a stored availability time is not ``HH:MM``.
    """
    system_timezone = system_timezone or settings.scheduling.system_timezone
    civil_date = resolve_civil_date(date, system_timezone)
    date_civil = civil_date.isoformat()
    day = Weekday.from_index(civil_date.weekday())

    trainer_pool = qualified_trainers(trainers, event_type, specific_trainer_id)
    logger.debug(
        "Generating %s slots on %s (%s) for %d qualified trainer(s)",
        event_type.name,
        date_civil,
        day.value,
        len(trainer_pool),
    )

    slots: list[GeneratedTimeSlot] = []
    for trainer in trainer_pool:
        if is_day_blocked(trainer.id, date_civil, blocked_slots):
            logger.debug("Day %s blocked for trainer %s", date_civil, trainer.display_name)
            continue

        availability = trainer.availability_for(day)
        if availability is None or not availability.is_open:
            logger.debug("No %s availability for trainer %s", day.value, trainer.display_name)
            continue

        for time_range in availability.time_slots:
            slots.extend(
                _range_candidates(
                    trainer,
                    date_civil,
                    time_range,
                    event_type,
                    bookings,
                    external_bookings,
                    system_timezone,
                )
            )

    slots.sort(key=lambda s: s.start)
    logger.info("Generated %d slot(s) for %s on %s", len(slots), event_type.name, date_civil)
    return slots


def get_available_dates(
    start_date: DateInput,
    event_type: EventType,
    trainers: Sequence[Trainer],
    bookings: Sequence[Booking],
    blocked_slots: Sequence[BlockedSlot] = (),
    external_bookings: Sequence[ExternalBooking] = (),
    specific_trainer_id: Optional[str] = None,
    days: Optional[int] = None,
    limit: Optional[int] = None,
    system_timezone: Optional[str] = None,
) -> list[DateAvailability]:
    """Scan consecutive dates from ``start_date`` and summarize those with slots."""
    system_timezone = system_timezone or settings.scheduling.system_timezone
    days = days if days is not None else settings.scheduling.booking_window_days
    first = resolve_civil_date(start_date, system_timezone)

    results: list[DateAvailability] = []
    for offset in range(days):
        current = first + timedelta(days=offset)
        slots = generate_available_slots(
            current,
            event_type,
            trainers,
            bookings,
            blocked_slots,
            external_bookings,
            specific_trainer_id,
            system_timezone,
        )
        if slots:
            results.append(
                {
                    "date": current.isoformat(),
                    "day_name": Weekday.from_index(current.weekday()).value.capitalize(),
                    "slot_count": len(slots),
                }
            )
        if limit is not None and len(results) >= limit:
            break
    return results


def group_slots_by_trainer(slots: Sequence[GeneratedTimeSlot]) -> dict[str, list[GeneratedTimeSlot]]:
    grouped: dict[str, list[GeneratedTimeSlot]] = {}
    for slot in slots:
        grouped.setdefault(slot.trainer_id, []).append(slot)
    return grouped
