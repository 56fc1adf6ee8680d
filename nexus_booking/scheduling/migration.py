"""
Load-time adapters for trainer availability records.

Older trainer documents stored one ``{start, end}`` window per weekday,
either as a ``{day: {start, end}}`` mapping or as a list of
``{day, active, start, end}`` entries. The slot generator only accepts
the ``timeSlots`` list shape, so records are migrated once when loaded.
"""

import logging
from typing import Any, Mapping

from nexus_booking.schemas.trainer_schema import AvailabilitySlot, TimeRange, Trainer, Weekday

logger = logging.getLogger(__name__)

DEFAULT_WORKDAY_RANGES: list[tuple[str, str]] = [("09:00", "12:00"), ("13:00", "17:00")]
DEFAULT_WORKDAYS = {
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
}


def _weekday(value: Any) -> Weekday:
    try:
        return Weekday(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown weekday in availability record: {value!r}") from None


def _migrate_entry(entry: Mapping[str, Any]) -> AvailabilitySlot:
    if "timeSlots" in entry or "time_slots" in entry:
        return AvailabilitySlot.model_validate(entry)

    day = _weekday(entry.get("day"))
    start, end = entry.get("start"), entry.get("end")
    ranges = [TimeRange(start=start, end=end)] if start and end else []
    return AvailabilitySlot(day=day, active=bool(entry.get("active", True)), time_slots=ranges)


def migrate_legacy_availability(record: Any) -> list[AvailabilitySlot]:
    """Convert any known availability shape into the canonical list shape."""
    if not record:
        return []

    if isinstance(record, Mapping):
        slots = []
        for day, window in record.items():
            window = window or {}
            slots.append(_migrate_entry({"day": day, **window}))
        return slots

    return [_migrate_entry(entry) for entry in record]


def migrate_trainer_record(record: Mapping[str, Any]) -> Trainer:
    """Validate a raw trainer document, migrating its availability first."""
    data = dict(record)
    if data.get("availability") is not None:
        data["availability"] = migrate_legacy_availability(data["availability"])
    return Trainer.model_validate(data)


def default_availability() -> list[AvailabilitySlot]:
    """Monday to Friday 09:00-12:00 and 13:00-17:00, weekends off."""
    return [
        AvailabilitySlot(
            day=day,
            active=day in DEFAULT_WORKDAYS,
            time_slots=(
                [TimeRange(start=s, end=e) for s, e in DEFAULT_WORKDAY_RANGES]
                if day in DEFAULT_WORKDAYS
                else []
            ),
        )
        for day in Weekday
    ]


def ensure_default_availability(trainer: Trainer) -> Trainer:
    """Give a trainer with no configured schedule the default working week."""
    if trainer.availability:
        return trainer
    logger.info("Adding default availability for trainer %s", trainer.display_name)
    return trainer.model_copy(update={"availability": default_availability()})
