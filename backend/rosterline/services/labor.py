"""Worked hours, overtime and straight-time labor cost.

Overtime premiums are a separate step (``overtime_premium``) applied by the
caller to the hours ``overtime_hours`` identifies.
"""
from typing import Dict, List, Optional, Any
from rosterline.models.shift import Shift
from rosterline.models.constraints import Constraints
from .time_utils import span_minutes


def shift_hours(shift: Shift) -> float:
    """Hours worked, break excluded, rounded to 2 decimal places."""
    worked = span_minutes(shift.start_time, shift.end_time) - shift.break_duration
    return round(worked / 60, 2)


def weekly_hours(shifts: List[Shift]) -> float:
    """Total hours for a set of shifts (caller filters to one staff member and week)."""
    return round(sum(shift_hours(s) for s in shifts), 2)


def overtime_hours(total_hours: float, standard_hours: Optional[float] = None) -> float:
    if standard_hours is None:
        standard_hours = Constraints().standard_weekly_hours
    return round(max(0.0, total_hours - standard_hours), 2)


def overtime_premium(hours: float, hourly_rate: float, multiplier: Optional[float] = None) -> float:
    """Pay for overtime hours at the premium multiplier."""
    if multiplier is None:
        multiplier = Constraints().overtime_multiplier
    return round(hours * hourly_rate * multiplier, 2)


def is_valid_break_duration(
    break_minutes: int,
    hours: float,
    constraints: Optional[Constraints] = None,
) -> bool:
    """Check a break is plausible for a shift of ``hours`` gross length."""
    constraints = constraints or Constraints()
    if break_minutes < 0:
        return False
    if break_minutes >= hours * 60:
        return False
    if hours < constraints.short_shift_hours and break_minutes > constraints.short_shift_max_break_minutes:
        return False
    if hours >= constraints.long_shift_hours and break_minutes > constraints.long_shift_max_break_minutes:
        return False
    return True


def labor_cost(shifts: List[Shift], hourly_rates: Dict[str, float]) -> Dict[str, Any]:
    """Straight-time cost per position and overall."""
    by_position: Dict[str, float] = {}
    missing_rates = []
    total = 0.0

    for shift in shifts:
        rate = hourly_rates.get(shift.position)
        if rate is None:
            if shift.position not in missing_rates:
                missing_rates.append(shift.position)
            rate = 0.0
        cost = shift_hours(shift) * rate
        by_position[shift.position] = by_position.get(shift.position, 0.0) + cost
        total += cost

    return {
        "by_position": {position: round(cost, 2) for position, cost in by_position.items()},
        "total": round(total, 2),
        "missing_rates": missing_rates,
    }


def payroll_summary(
    shifts: List[Shift],
    hourly_rate: float,
    constraints: Optional[Constraints] = None,
) -> Dict[str, float]:
    """Compose weekly hours, overtime and pay for one staff member's week."""
    constraints = constraints or Constraints()

    total = weekly_hours(shifts)
    overtime = overtime_hours(total, constraints.standard_weekly_hours)
    straight = round(total - overtime, 2)

    straight_pay = round(straight * hourly_rate, 2)
    overtime_pay = overtime_premium(overtime, hourly_rate, constraints.overtime_multiplier)

    return {
        "weekly_hours": total,
        "straight_hours": straight,
        "overtime_hours": overtime,
        "straight_pay": straight_pay,
        "overtime_pay": overtime_pay,
        "total_pay": round(straight_pay + overtime_pay, 2),
    }
