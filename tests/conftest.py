"""Shared test fixtures and helpers."""

from datetime import datetime
from typing import Optional

import pytest

from nexus_booking.schemas.booking_schema import BlockedSlot, Booking, ExternalBooking
from nexus_booking.schemas.event_schema import EventType
from nexus_booking.schemas.trainer_schema import AvailabilitySlot, TimeRange, Trainer, Weekday

SYSTEM_TZ = "Asia/Ho_Chi_Minh"  # UTC+7, no DST
MONDAY = "2025-03-10"
TUESDAY = "2025-03-11"


@pytest.fixture
def event_type():
    return make_event_type()


@pytest.fixture
def trainer():
    return make_trainer()


def make_event_type(
    event_type_id: str = "ev-1",
    duration_minutes: int = 60,
    buffer_minutes: int = 0,
    name: str = "PTE Speaking",
) -> EventType:
    """Helper to create an EventType."""
    return EventType(
        id=event_type_id,
        name=name,
        duration_minutes=duration_minutes,
        buffer_minutes=buffer_minutes,
    )


def make_trainer(
    trainer_id: str = "tr-1",
    name: str = "Linh",
    ranges: Optional[list[tuple[str, str]]] = None,
    day: Weekday = Weekday.MONDAY,
    active: bool = True,
    event_types: Optional[list[str]] = None,
) -> Trainer:
    """Helper to create a Trainer available on one weekday."""
    if ranges is None:
        ranges = [("09:00", "12:00")]
    return Trainer(
        id=trainer_id,
        name=name,
        event_types=event_types,
        availability=[
            AvailabilitySlot(
                day=day,
                active=active,
                time_slots=[TimeRange(start=s, end=e) for s, e in ranges],
            )
        ],
    )


def make_booking(
    start: str,
    end: str,
    trainer_id: str = "tr-1",
    status: str = "confirmed",
    booking_id: str = "bk-1",
) -> Booking:
    """Helper to create a Booking from ISO-8601 instant strings."""
    return Booking(
        id=booking_id,
        trainer_id=trainer_id,
        start_time=datetime.fromisoformat(start),
        end_time=datetime.fromisoformat(end),
        status=status,
    )


def make_external(
    start: str, end: Optional[str] = None, trainer_id: str = "tr-1"
) -> ExternalBooking:
    return ExternalBooking(
        id="ext-1",
        trainer_id=trainer_id,
        start=datetime.fromisoformat(start),
        end=datetime.fromisoformat(end) if end else None,
    )


def make_block(date: str = MONDAY, trainer_id: str = "tr-1") -> BlockedSlot:
    return BlockedSlot(trainer_id=trainer_id, date=date)
