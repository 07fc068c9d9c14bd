from datetime import date

from rosterline.models.shift import Shift

MONDAY = date(2024, 1, 15)


def make_shift(start="17:00", end="23:00", position="server", shift_date=MONDAY,
               staff="staff-1", status="scheduled", break_duration=30, **extra) -> Shift:
    return Shift(
        staff_member=staff,
        shift_date=shift_date,
        start_time=start,
        end_time=end,
        position=position,
        status=status,
        break_duration=break_duration,
        **extra,
    )
