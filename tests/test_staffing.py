from rosterline.models.coverage import RequiredCoverage
from rosterline.services.staffing import (
    compute_staffing_levels,
    empty_levels,
    expand_required_coverage,
    find_coverage_gaps,
    total_shortage,
)
from rosterline.services.time_utils import shift_span
from .helpers import make_shift


def test_window_runs_from_six_to_two_next_day():
    levels = empty_levels()
    assert list(levels)[0] == "06:00"
    assert list(levels)[-1] == "02:00"
    assert len(levels) == 21
    assert all(v == {} for v in levels.values())


def test_levels_for_evening_service():
    shifts = [
        make_shift("17:00", "23:00", position="server"),
        make_shift("17:30", "23:30", position="server"),
        make_shift("18:00", "01:00", position="bartender"),
        make_shift("16:00", "00:00", position="chef"),
    ]
    levels = compute_staffing_levels(shifts)

    assert levels["18:00"] == {"server": 2, "bartender": 1, "chef": 1}
    assert levels["16:00"] == {"chef": 1}
    assert levels["00:00"] == {"bartender": 1}
    assert levels["01:00"] == {}


def test_partial_hour_counts_as_covered():
    levels = compute_staffing_levels([make_shift("17:00", "23:30")])
    assert levels["23:00"] == {"server": 1}


def test_cancelled_shifts_do_not_count():
    levels = compute_staffing_levels([make_shift(status="cancelled")])
    assert all(v == {} for v in levels.values())


def test_early_shift_outside_window_is_still_counted():
    levels = compute_staffing_levels([make_shift("04:00", "07:00", position="kitchen_prep")])
    assert levels["04:00"] == {"kitchen_prep": 1}
    assert levels["06:00"] == {"kitchen_prep": 1}


def test_slot_totals_never_exceed_overlapping_shifts():
    shifts = [
        make_shift("06:00", "14:00", position="chef"),
        make_shift("11:00", "19:00", position="server"),
        make_shift("17:00", "23:00", position="server"),
        make_shift("20:00", "02:00", position="bartender"),
        make_shift("22:00", "06:00", position="dishwasher"),
    ]
    levels = compute_staffing_levels(shifts)

    for slot, counts in levels.items():
        hour = int(slot[:2])
        overlapping = 0
        for s in shifts:
            start, end = shift_span(s.start_time, s.end_time)
            for h in (hour, hour + 24):
                if start < (h + 1) * 60 and end > h * 60:
                    overlapping += 1
                    break
        assert sum(counts.values()) <= overlapping, slot


def test_gap_reported_with_shortage():
    requirements = {"18:00": {"server": 2}}
    levels = {"18:00": {"server": 1, "bartender": 1}}
    gaps = find_coverage_gaps(requirements, levels)

    assert len(gaps) == 1
    assert gaps[0].hour == "18:00"
    assert gaps[0].position == "server"
    assert gaps[0].required == 2
    assert gaps[0].current == 1
    assert gaps[0].shortage == 1


def test_no_gap_when_requirement_met_or_exceeded():
    levels = {"18:00": {"server": 3}}
    assert find_coverage_gaps({"18:00": {"server": 2}}, levels) == []
    assert find_coverage_gaps({"18:00": {"server": 3}}, levels) == []


def test_missing_slot_or_position_counts_as_zero():
    gaps = find_coverage_gaps({"23:00": {"bartender": 1}}, {"18:00": {"server": 2}})
    assert gaps[0].current == 0
    assert gaps[0].shortage == 1


def test_shortage_is_monotonic():
    levels = {"20:00": {"server": 2}}
    shortages = []
    for required in range(0, 6):
        gaps = find_coverage_gaps({"20:00": {"server": required}}, levels)
        shortages.append(total_shortage(gaps))
    assert shortages == sorted(shortages)

    shortages = []
    for current in range(0, 6):
        gaps = find_coverage_gaps({"20:00": {"server": 4}}, {"20:00": {"server": current}})
        shortages.append(total_shortage(gaps))
    assert shortages == sorted(shortages, reverse=True)


def test_expand_per_position_coverage():
    required = {
        "server": RequiredCoverage(min=2, hours=["17:00", "18:00"]),
        "bartender": {"min": 1, "hours": ["18:00"]},
    }
    assert expand_required_coverage(required) == {
        "17:00": {"server": 2},
        "18:00": {"server": 2, "bartender": 1},
    }


def test_gaps_across_an_evening():
    required = expand_required_coverage({
        "server": {"min": 2, "hours": ["17:00", "18:00", "19:00", "20:00", "21:00", "22:00"]},
        "bartender": {"min": 1, "hours": ["18:00", "19:00", "20:00", "21:00", "22:00", "23:00"]},
    })
    current = {
        "17:00": {"server": 1, "bartender": 0},
        "18:00": {"server": 2, "bartender": 1},
        "19:00": {"server": 2, "bartender": 1},
        "20:00": {"server": 1, "bartender": 1},
        "21:00": {"server": 2, "bartender": 0},
        "22:00": {"server": 1, "bartender": 0},
    }
    found = {(g.hour, g.position) for g in find_coverage_gaps(required, current)}

    assert ("17:00", "server") in found
    assert ("20:00", "server") in found
    assert ("21:00", "bartender") in found
    assert ("23:00", "bartender") in found
    assert ("18:00", "server") not in found


def test_end_to_end_levels_to_gap():
    shifts = [
        make_shift("17:00", "23:00", position="server"),
        make_shift("17:30", "23:30", position="bartender"),
    ]
    levels = compute_staffing_levels(shifts)
    assert levels["18:00"] == {"server": 1, "bartender": 1}

    gaps = find_coverage_gaps({"18:00": {"server": 2}}, levels)
    assert len(gaps) == 1
    assert gaps[0].shortage == 1
