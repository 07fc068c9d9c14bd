from datetime import date, timedelta
from typing import Dict, List, Optional, Union
from rosterline.models.shift import Shift, ShiftStatus, TemplateEntry, DAY_NAMES
from rosterline.models.constraints import Constraints


def day_offset(day_name: str) -> int:
    """Offset of a lowercase day name from Monday."""
    key = day_name.strip().lower()
    if key not in DAY_NAMES:
        raise ValueError(f"Unknown day '{day_name}' in schedule template")
    return DAY_NAMES.index(key)


def generate_weekly_shifts(
    template: Dict[str, List[Union[TemplateEntry, dict]]],
    week_start: date,
    staff_id: str,
    constraints: Optional[Constraints] = None,
) -> List[Shift]:
    """Expand a day-of-week template into dated draft shifts for one staff member.

    Output follows template order: days as iterated, then entries within a day.
    Drafts are not conflict checked.
    """
    constraints = constraints or Constraints()
    drafts = []

    for day_name, entries in template.items():
        shift_date = week_start + timedelta(days=day_offset(day_name))
        for entry in entries:
            if isinstance(entry, dict):
                entry = TemplateEntry(**entry)
            drafts.append(Shift(
                staff_member=staff_id,
                shift_date=shift_date,
                start_time=entry.start_time,
                end_time=entry.end_time,
                position=entry.position,
                status=ShiftStatus.SCHEDULED,
                break_duration=constraints.default_break_minutes,
            ))

    return drafts
