"""Tests for the command-line slot listing."""

import io
import json
import re

import pytest

from main import load_snapshot, run
from nexus_booking.config import settings
from nexus_booking.logging_context import configure_logging

SNAPSHOT = {
    "eventTypes": [
        {"id": "ev-1", "name": "Speaking Practice", "durationMinutes": 60, "color": "#fc5d01"}
    ],
    "trainers": [
        {
            "id": "tr-1",
            "name": "Linh",
            "availability": [
                {"day": "monday", "active": True, "timeSlots": [{"start": "09:00", "end": "11:00"}]}
            ],
        },
        {
            "id": "tr-2",
            "name": "Quan",
            "eventTypes": ["ev-1"],
            "availability": {"monday": {"start": "14:00", "end": "15:00"}},
        },
    ],
    "bookings": [
        {
            "id": "bk-1",
            "trainerId": "tr-1",
            "startTime": "2025-03-10T02:00:00.000Z",
            "endTime": "2025-03-10T03:00:00.000Z",
            "status": "confirmed",
        }
    ],
    "blockedSlots": [{"trainerId": "tr-2", "date": "2025-03-17"}],
    "externalBookings": [],
}


@pytest.fixture
def snapshot_path(tmp_path):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(SNAPSHOT), encoding="utf-8")
    return path


class TestLoadSnapshot:
    def test_records_are_validated(self, snapshot_path):
        snapshot = load_snapshot(snapshot_path)
        assert snapshot["event_types"][0].duration_minutes == 60
        assert len(snapshot["trainers"]) == 2
        assert snapshot["trainers"][1].availability[0].time_slots[0].start == "14:00"
        assert snapshot["bookings"][0].trainer_id == "tr-1"


class TestRun:
    def test_lists_slots_in_system_timezone(self, snapshot_path, capsys):
        code = run(
            [
                str(snapshot_path),
                "--event-type", "ev-1",
                "--date", "2025-03-10",
                "--timezone", "Asia/Ho_Chi_Minh",
            ]
        )
        out = capsys.readouterr().out
        assert code == 0
        assert "10:00 - 11:00" in out
        assert "09:00 - 10:00" not in out
        assert "14:00 - 15:00" in out
        assert "Quan" in out

    def test_viewer_timezone_shifts_display(self, snapshot_path, capsys):
        code = run(
            [
                str(snapshot_path),
                "--event-type", "ev-1",
                "--date", "2025-03-10",
                "--timezone", "Asia/Tokyo",
            ]
        )
        out = capsys.readouterr().out
        assert code == 0
        assert "12:00 - 13:00" in out
        assert "Asia/Tokyo" in out

    def test_single_trainer(self, snapshot_path, capsys):
        run(
            [
                str(snapshot_path),
                "--event-type", "ev-1",
                "--date", "2025-03-10",
                "--trainer", "tr-2",
                "--timezone", "Asia/Ho_Chi_Minh",
            ]
        )
        out = capsys.readouterr().out
        assert "Linh" not in out
        assert "14:00 - 15:00" in out

    def test_available_dates(self, snapshot_path, capsys):
        code = run([str(snapshot_path), "--event-type", "ev-1", "--date", "2025-03-10", "--dates"])
        out = capsys.readouterr().out
        assert code == 0
        assert "2025-03-10" in out
        assert "2025-03-17" in out
        assert "2025-03-11" not in out

    def test_unknown_event_type(self, snapshot_path, capsys):
        assert run([str(snapshot_path), "--event-type", "nope", "--date", "2025-03-10"]) == 2
        assert "Unknown event type" in capsys.readouterr().err

    def test_missing_snapshot(self, tmp_path, capsys):
        assert run([str(tmp_path / "missing.json"), "--event-type", "ev-1"]) == 1
        assert "Snapshot not found" in capsys.readouterr().err

    def test_invalid_snapshot(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        assert run([str(path), "--event-type", "ev-1"]) == 1
        assert "Invalid snapshot" in capsys.readouterr().err

    def test_unknown_timezone(self, snapshot_path, capsys):
        code = run(
            [
                str(snapshot_path),
                "--event-type", "ev-1",
                "--date", "2025-03-10",
                "--timezone", "Bogus/Zone",
            ]
        )
        assert code == 1
        assert "Unknown timezone: Bogus/Zone" in capsys.readouterr().err

    def test_malformed_date(self, snapshot_path, capsys):
        code = run([str(snapshot_path), "--event-type", "ev-1", "--date", "10/03/2025"])
        assert code == 1
        assert "expected YYYY-MM-DD" in capsys.readouterr().err


class TestRequestLogging:
    def test_cli_run_logs_under_one_request_id(self, snapshot_path):
        buffer = io.StringIO()
        configure_logging("INFO", stream=buffer)
        try:
            run(
                [
                    str(snapshot_path),
                    "--event-type", "ev-1",
                    "--date", "2025-03-10",
                    "--timezone", "Asia/Ho_Chi_Minh",
                ]
            )
        finally:
            configure_logging(settings.log_level)
        ids = set(re.findall(r"\[(CLI-[0-9A-F]{6})\]", buffer.getvalue()))
        assert len(ids) == 1
        assert "Loaded 2 trainer(s)" in buffer.getvalue()


class TestDefaultSchedule:
    def setup_method(self):
        self.snapshot = {
            "eventTypes": SNAPSHOT["eventTypes"],
            "trainers": [{"id": "tr-new", "name": "Tam"}],
        }

    def _write(self, tmp_path):
        path = tmp_path / "fresh.json"
        path.write_text(json.dumps(self.snapshot), encoding="utf-8")
        return path

    def test_trainer_without_schedule_has_no_slots_by_default(self, tmp_path, capsys):
        run([str(self._write(tmp_path)), "--event-type", "ev-1", "--date", "2025-03-10"])
        assert "No slots available." in capsys.readouterr().out

    def test_default_schedule_fills_working_week(self, tmp_path, capsys):
        code = run(
            [
                str(self._write(tmp_path)),
                "--event-type", "ev-1",
                "--date", "2025-03-10",
                "--timezone", "Asia/Ho_Chi_Minh",
                "--default-schedule",
            ]
        )
        out = capsys.readouterr().out
        assert code == 0
        assert "09:00 - 10:00" in out
        assert "16:00 - 17:00" in out
        assert "12:00 - 13:00" not in out

    def test_load_snapshot_keeps_existing_schedules(self, snapshot_path):
        snapshot = load_snapshot(snapshot_path, fill_default_schedule=True)
        linh = snapshot["trainers"][0]
        assert len(linh.availability) == 1
