from datetime import date

import pytest

from rosterline.models.constraints import Constraints
from rosterline.services.templates import generate_weekly_shifts, day_offset

WEEK_START = date(2024, 1, 15)  # Monday

TEMPLATE = {
    "monday": [
        {"position": "manager", "start_time": "08:00", "end_time": "16:00"},
        {"position": "server", "start_time": "11:00", "end_time": "19:00"},
        {"position": "chef", "start_time": "10:00", "end_time": "22:00"},
    ],
    "tuesday": [
        {"position": "server", "start_time": "17:00", "end_time": "23:00"},
        {"position": "bartender", "start_time": "16:00", "end_time": "00:00"},
    ],
}


def test_three_monday_and_two_tuesday_entries_give_five_drafts():
    drafts = generate_weekly_shifts(TEMPLATE, WEEK_START, "staff-1")

    assert len(drafts) == 5
    assert [d.shift_date for d in drafts[:3]] == [date(2024, 1, 15)] * 3
    assert [d.shift_date for d in drafts[3:]] == [date(2024, 1, 16)] * 2


def test_output_follows_template_order():
    drafts = generate_weekly_shifts(TEMPLATE, WEEK_START, "staff-1")
    assert [d.position for d in drafts] == ["manager", "server", "chef", "server", "bartender"]
    assert drafts[4].end_time == "00:00"


def test_drafts_are_scheduled_for_the_staff_member():
    drafts = generate_weekly_shifts(TEMPLATE, WEEK_START, "staff-9", Constraints(default_break_minutes=45))
    for draft in drafts:
        assert draft.staff_member == "staff-9"
        assert draft.status == "scheduled"
        assert draft.break_duration == 45
        assert draft.id is None


def test_sunday_is_six_days_after_week_start():
    drafts = generate_weekly_shifts(
        {"sunday": [{"position": "host", "start_time": "10:00", "end_time": "15:00"}]},
        WEEK_START,
        "staff-1",
    )
    assert drafts[0].shift_date == date(2024, 1, 21)


def test_day_names_are_case_insensitive():
    assert day_offset("Wednesday") == 2


def test_unknown_day_is_rejected():
    with pytest.raises(ValueError):
        generate_weekly_shifts({"funday": []}, WEEK_START, "staff-1")
