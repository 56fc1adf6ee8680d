"""Trainer and weekly availability data models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Weekday(str, Enum):
    """Lowercase English weekday names, Monday first."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_index(cls, index: int) -> "Weekday":
        """Map ``date.weekday()`` (0 = Monday) to a Weekday."""
        return list(cls)[index]


class TimeRange(BaseModel):
    """A wall-clock window in the system timezone, ``HH:MM`` strings."""

    start: str
    end: str


class AvailabilitySlot(BaseModel):
    """Recurring availability for one weekday."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    day: Weekday
    active: bool = False
    time_slots: list[TimeRange] = Field(default_factory=list)

    @property
    def is_open(self) -> bool:
        return self.active and len(self.time_slots) > 0


class Trainer(BaseModel):
    """Trainer record (the subset of a user the scheduler reads)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: str = "trainer"
    slug: Optional[str] = None
    event_types: Optional[list[str]] = None
    availability: Optional[list[AvailabilitySlot]] = None

    def is_qualified_for(self, event_type_id: str) -> bool:
        """An empty or missing allow-list means the trainer teaches everything."""
        if not self.event_types:
            return True
        return event_type_id in self.event_types

    def availability_for(self, day: Weekday) -> Optional[AvailabilitySlot]:
        """Return the first active availability entry for ``day``, if any."""
        for entry in self.availability or []:
            if entry.day == day and entry.active:
                return entry
        return None

    @property
    def display_name(self) -> str:
        return self.name or self.email or self.id
