"""
Command-line entry point for the availability engine.

Loads a JSON snapshot of store records (event types, trainers, bookings,
blocked days, external calendar events) and prints the bookable slots for
one date in the viewer's timezone, or the next dates that have slots.

Usage:
    python main.py snapshot.json --event-type ev-1 --date 2025-03-10
    python main.py snapshot.json --event-type ev-1 --date 2025-03-10 --timezone Europe/London
    python main.py snapshot.json --event-type ev-1 --dates
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import pytz

from nexus_booking.config import settings
from nexus_booking.logging_context import new_request_id, request_scope
from nexus_booking.scheduling.migration import ensure_default_availability, migrate_trainer_record
from nexus_booking.scheduling.slots import (
    generate_available_slots,
    get_available_dates,
    group_slots_by_trainer,
)
from nexus_booking.scheduling.timezone import (
    detect_viewer_timezone,
    format_instant_in_timezone,
    get_timezone_display_name,
    is_different_timezone,
)
from nexus_booking.schemas.booking_schema import BlockedSlot, Booking, ExternalBooking
from nexus_booking.schemas.event_schema import EventType
from nexus_booking.utils import parse_civil_date

logger = logging.getLogger(__name__)

GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"


def load_snapshot(path: Path, fill_default_schedule: bool = False) -> dict[str, Any]:
    """
    Read a snapshot file and validate every record into its model.

    Trainer availability is migrated to the list shape. With
    ``fill_default_schedule`` trainers that have no schedule get the
    default working week.
    """
    raw = json.loads(path.read_text(encoding="utf-8"))
    trainers = [migrate_trainer_record(r) for r in raw.get("trainers", [])]
    if fill_default_schedule:
        trainers = [ensure_default_availability(t) for t in trainers]
    return {
        "event_types": [EventType.model_validate(r) for r in raw.get("eventTypes", [])],
        "trainers": trainers,
        "bookings": [Booking.model_validate(r) for r in raw.get("bookings", [])],
        "blocked_slots": [BlockedSlot.model_validate(r) for r in raw.get("blockedSlots", [])],
        "external_bookings": [
            ExternalBooking.model_validate(r) for r in raw.get("externalBookings", [])
        ],
    }


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Show bookable trainer slots.")
    parser.add_argument("snapshot", type=Path, help="JSON snapshot of store records")
    parser.add_argument("--event-type", required=True, help="Event type id")
    parser.add_argument(
        "--date",
        default=None,
        help="Civil date YYYY-MM-DD in the system timezone (default: today)",
    )
    parser.add_argument("--trainer", default=None, help="Only show this trainer id")
    parser.add_argument("--timezone", default=None, help="Viewer timezone for display")
    parser.add_argument(
        "--dates", action="store_true", help="List upcoming dates with availability"
    )
    parser.add_argument(
        "--default-schedule",
        action="store_true",
        help="Give trainers without a schedule the default Mon-Fri working hours",
    )
    return parser


def _viewer_timezone(requested: Optional[str]) -> str:
    return requested or settings.scheduling.default_viewer_timezone or detect_viewer_timezone()


def _fail(message: str) -> int:
    print(f"{RED}{message}{RESET}", file=sys.stderr)
    return 1


def run(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    with request_scope(new_request_id("CLI")):
        return _run(args)


def _run(args: argparse.Namespace) -> int:
    system_tz = settings.scheduling.system_timezone
    viewer_tz = _viewer_timezone(args.timezone)
    if viewer_tz not in pytz.all_timezones_set:
        return _fail(f"Unknown timezone: {viewer_tz}")
    if args.date is not None:
        try:
            parse_civil_date(args.date)
        except ValueError as exc:
            return _fail(str(exc))

    try:
        snapshot = load_snapshot(args.snapshot, fill_default_schedule=args.default_schedule)
    except FileNotFoundError:
        return _fail(f"Snapshot not found: {args.snapshot}")
    except ValueError as exc:
        return _fail(f"Invalid snapshot: {exc}")

    logger.info(
        "Loaded %d trainer(s) and %d booking(s) from %s",
        len(snapshot["trainers"]),
        len(snapshot["bookings"]),
        args.snapshot,
    )

    event_type = next((e for e in snapshot["event_types"] if e.id == args.event_type), None)
    if event_type is None:
        print(f"{RED}Unknown event type: {args.event_type}{RESET}", file=sys.stderr)
        return 2

    target = args.date or format_instant_in_timezone(
        datetime.now(timezone.utc), "%Y-%m-%d", system_tz
    )
    common = dict(
        event_type=event_type,
        trainers=snapshot["trainers"],
        bookings=snapshot["bookings"],
        blocked_slots=snapshot["blocked_slots"],
        external_bookings=snapshot["external_bookings"],
        specific_trainer_id=args.trainer,
        system_timezone=system_tz,
    )

    if args.dates:
        for row in get_available_dates(target, **common):
            print(f"{BOLD}{row['date']}{RESET} {row['day_name']}: {row['slot_count']} slot(s)")
        return 0

    slots = generate_available_slots(target, **common)
    print(f"{BOLD}{event_type.name}{RESET} on {target} ({event_type.duration_minutes} min)")
    if is_different_timezone(viewer_tz, system_tz):
        print(
            f"{YELLOW}Times shown in {viewer_tz} ({get_timezone_display_name(viewer_tz)}); "
            f"schedule is set in {system_tz} ({get_timezone_display_name(system_tz)}){RESET}"
        )
    if not slots:
        print(f"{DIM}No slots available.{RESET}")
        return 0

    names = {t.id: t.display_name for t in snapshot["trainers"]}
    for trainer_id, trainer_slots in group_slots_by_trainer(slots).items():
        print(f"{GREEN}{BOLD}{names.get(trainer_id, trainer_id)}{RESET}")
        for slot in trainer_slots:
            start = format_instant_in_timezone(slot.start, "%H:%M", viewer_tz)
            end = format_instant_in_timezone(slot.end, "%H:%M", viewer_tz)
            print(f"  {start} - {end}")
    return 0


if __name__ == "__main__":
    sys.exit(run())
