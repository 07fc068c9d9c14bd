from typing import Dict, Any, List, Optional
from rosterline.models.shift import Shift, ShiftStatus
from rosterline.models.staff import DayAvailability


def staff_metrics(shifts: List[Shift]) -> Dict[str, Any]:
    """Reliability figures for one staff member's shift history."""
    total = len(shifts)
    completed = sum(1 for s in shifts if s.status == ShiftStatus.COMPLETED)
    no_shows = sum(1 for s in shifts if s.status == ShiftStatus.NO_SHOW)
    cancellations = sum(1 for s in shifts if s.status == ShiftStatus.CANCELLED)

    return {
        "total_shifts": total,
        "completed_shifts": completed,
        "no_show_count": no_shows,
        "cancellation_count": cancellations,
        "reliability_rate": round(completed / total * 100) if total > 0 else 0,
    }


def coverage_report(shifts: List[Shift]) -> Dict[str, Any]:
    """How many scheduled shifts were actually worked, overall and per position."""
    total = len(shifts)
    completed = sum(1 for s in shifts if s.status == ShiftStatus.COMPLETED)
    no_shows = sum(1 for s in shifts if s.status == ShiftStatus.NO_SHOW)

    by_position: Dict[str, Dict[str, int]] = {}
    for shift in shifts:
        counts = by_position.setdefault(shift.position, {"scheduled": 0, "completed": 0})
        counts["scheduled"] += 1
        if shift.status == ShiftStatus.COMPLETED:
            counts["completed"] += 1

    return {
        "total_scheduled": total,
        "completed": completed,
        "no_shows": no_shows,
        "coverage_rate": round(completed / total * 100, 2) if total > 0 else 0,
        "by_position": by_position,
    }


def scheduling_patterns(shifts: List[Shift], weeks: int = 4) -> Dict[str, Dict[str, Any]]:
    """Per staff member start-time and position habits over ``weeks`` of history."""
    grouped: Dict[str, List[Shift]] = {}
    for shift in shifts:
        grouped.setdefault(shift.staff_member, []).append(shift)

    patterns = {}
    for staff_id, staff_shifts in grouped.items():
        start_times = list(dict.fromkeys(s.start_time for s in staff_shifts))
        positions = list(dict.fromkeys(s.position for s in staff_shifts))
        patterns[staff_id] = {
            "shift_count": len(staff_shifts),
            "start_times": start_times,
            "positions": positions,
            "consistent_schedule": len(start_times) == 1,
            "preferred_start_time": start_times[0] if len(start_times) == 1 else None,
            "weekly_frequency": round(len(staff_shifts) / weeks) if weeks > 0 else 0,
            "position_consistency": len(positions) == 1,
        }
    return patterns


def is_staff_available(
    availability: Dict[str, Dict[str, DayAvailability]],
    shift: Shift,
) -> bool:
    """Look up the shift's weekday in a staff id -> day -> window mapping."""
    staff_availability = availability.get(shift.staff_member)
    if not staff_availability:
        return False
    window = staff_availability.get(shift.day_name)
    if window is None:
        return False
    if isinstance(window, dict):
        window = DayAvailability(**window)
    return window.available


def shift_notification(shift: Shift, priority: Optional[str] = None) -> Dict[str, str]:
    return {
        "recipient": shift.staff_member,
        "urgency": priority or "normal",
        "message": f"{shift.notes or 'New shift assigned'} - {shift.shift_date} {shift.start_time}-{shift.end_time}",
        "type": "shift_assignment",
    }
