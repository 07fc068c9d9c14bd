from datetime import date

from rosterline.models.staff import DayAvailability
from rosterline.services.analytics import (
    staff_metrics,
    coverage_report,
    scheduling_patterns,
    is_staff_available,
    shift_notification,
)
from .helpers import make_shift, MONDAY


def test_staff_metrics_reliability():
    history = [
        make_shift(status="completed"),
        make_shift(status="completed"),
        make_shift(status="no_show"),
        make_shift(status="cancelled"),
    ]
    metrics = staff_metrics(history)

    assert metrics["total_shifts"] == 4
    assert metrics["completed_shifts"] == 2
    assert metrics["no_show_count"] == 1
    assert metrics["cancellation_count"] == 1
    assert metrics["reliability_rate"] == 50


def test_staff_metrics_without_history():
    assert staff_metrics([])["reliability_rate"] == 0


def test_coverage_report_by_position():
    shifts = [
        make_shift(position="server", status="completed"),
        make_shift(position="server", status="no_show"),
        make_shift(position="chef", status="completed"),
    ]
    report = coverage_report(shifts)

    assert report["total_scheduled"] == 3
    assert report["completed"] == 2
    assert report["no_shows"] == 1
    assert report["coverage_rate"] == 66.67
    assert report["by_position"]["server"] == {"scheduled": 2, "completed": 1}
    assert report["by_position"]["chef"] == {"scheduled": 1, "completed": 1}


def test_scheduling_patterns():
    shifts = [
        make_shift("17:00", "23:00", staff="staff-1"),
        make_shift("17:00", "23:00", staff="staff-1", shift_date=date(2024, 1, 16)),
        make_shift("09:00", "15:00", staff="staff-2", position="host"),
        make_shift("17:00", "23:00", staff="staff-2", position="server"),
    ]
    patterns = scheduling_patterns(shifts, weeks=1)

    assert patterns["staff-1"]["consistent_schedule"]
    assert patterns["staff-1"]["preferred_start_time"] == "17:00"
    assert patterns["staff-1"]["weekly_frequency"] == 2
    assert not patterns["staff-2"]["consistent_schedule"]
    assert patterns["staff-2"]["preferred_start_time"] is None
    assert not patterns["staff-2"]["position_consistency"]


def test_staff_availability_lookup():
    availability = {
        "staff-1": {
            "monday": DayAvailability(available=True),
            "tuesday": {"available": False},
        }
    }
    assert is_staff_available(availability, make_shift(shift_date=MONDAY))
    assert not is_staff_available(availability, make_shift(shift_date=date(2024, 1, 16)))
    assert not is_staff_available(availability, make_shift(shift_date=date(2024, 1, 17)))
    assert not is_staff_available(availability, make_shift(staff="staff-9"))


def test_shift_notification():
    note = shift_notification(make_shift(), priority="high")
    assert note["recipient"] == "staff-1"
    assert note["urgency"] == "high"
    assert note["message"] == "New shift assigned - 2024-01-15 17:00-23:00"

    assert shift_notification(make_shift(notes="Cover patio"))["message"].startswith("Cover patio")
    assert shift_notification(make_shift())["urgency"] == "normal"
