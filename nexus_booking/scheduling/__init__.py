from nexus_booking.scheduling.conflicts import is_day_blocked, is_slot_available
from nexus_booking.scheduling.migration import (
    ensure_default_availability,
    migrate_legacy_availability,
    migrate_trainer_record,
)
from nexus_booking.scheduling.slots import (
    SLOT_STEP_MINUTES,
    generate_available_slots,
    get_available_dates,
    qualified_trainers,
)
from nexus_booking.scheduling.timezone import (
    detect_viewer_timezone,
    format_instant_in_timezone,
    is_different_timezone,
    system_civil_to_instant,
)

__all__ = [
    "generate_available_slots",
    "get_available_dates",
    "qualified_trainers",
    "SLOT_STEP_MINUTES",
    "is_day_blocked",
    "is_slot_available",
    "system_civil_to_instant",
    "format_instant_in_timezone",
    "detect_viewer_timezone",
    "is_different_timezone",
    "migrate_legacy_availability",
    "migrate_trainer_record",
    "ensure_default_availability",
]
