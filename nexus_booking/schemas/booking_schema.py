"""Booking, blocking and generated slot data models."""

from datetime import datetime
from enum import Enum
from typing import Optional, TypedDict

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from nexus_booking.utils import ensure_utc


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Booking(BaseModel):
    """An internal booking. Only non-cancelled bookings block slots."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    trainer_id: str
    event_type_id: Optional[str] = None
    start_time: datetime
    end_time: datetime
    status: str = BookingStatus.CONFIRMED.value
    student_name: Optional[str] = None
    student_email: Optional[str] = None
    student_phone: Optional[str] = None
    student_code: Optional[str] = None
    note: Optional[str] = None
    is_recurring: bool = False

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_times(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @property
    def is_cancelled(self) -> bool:
        return self.status == BookingStatus.CANCELLED.value


class BlockedSlot(BaseModel):
    """A whole-day exclusion for one trainer, civil date in the system timezone."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    trainer_id: str
    date: str


class ExternalBooking(BaseModel):
    """A busy interval synced from an external calendar."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    trainer_id: str
    start: datetime
    end: Optional[datetime] = None
    title: Optional[str] = None

    @field_validator("start", "end")
    @classmethod
    def normalize_bounds(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None


class GeneratedTimeSlot(BaseModel):
    """A bookable window produced by the slot generator."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    start: datetime
    end: datetime
    trainer_id: str


class DateAvailability(TypedDict):
    """Summary of availability for a single date."""

    date: str
    day_name: str
    slot_count: int
