from nexus_booking.schemas.booking_schema import (
    BlockedSlot,
    Booking,
    BookingStatus,
    DateAvailability,
    ExternalBooking,
    GeneratedTimeSlot,
)
from nexus_booking.schemas.event_schema import EventType
from nexus_booking.schemas.trainer_schema import AvailabilitySlot, TimeRange, Trainer, Weekday

__all__ = [
    "AvailabilitySlot", "BlockedSlot", "Booking", "BookingStatus", "DateAvailability",
    "EventType", "ExternalBooking", "GeneratedTimeSlot", "TimeRange", "Trainer", "Weekday",
]
