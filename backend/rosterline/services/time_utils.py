"""Minute-of-day arithmetic shared by conflict, staffing and labor logic."""
from datetime import time
from typing import Tuple, Union

MINUTES_PER_DAY = 24 * 60

TimeLike = Union[str, time]


def minutes_of_day(value: TimeLike) -> int:
    """Convert "HH:MM" (or a time) into minutes after midnight."""
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    try:
        hh, mm = str(value).split(":", 1)
        hours = int(hh)
        minutes = int(mm)
    except (TypeError, ValueError):
        raise ValueError(f"Malformed time string: {value!r}")
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise ValueError(f"Time out of range: {value!r}")
    return hours * 60 + minutes


def shift_span(start: TimeLike, end: TimeLike) -> Tuple[int, int]:
    """Return (start, end) minutes with an overnight end pushed past 1440."""
    start_minutes = minutes_of_day(start)
    end_minutes = minutes_of_day(end)
    if end_minutes <= start_minutes:
        end_minutes += MINUTES_PER_DAY
    return start_minutes, end_minutes


def span_minutes(start: TimeLike, end: TimeLike) -> int:
    start_minutes, end_minutes = shift_span(start, end)
    return end_minutes - start_minutes


def is_overnight(start: TimeLike, end: TimeLike) -> bool:
    return shift_span(start, end)[1] > MINUTES_PER_DAY


def slot_label(hour: int) -> str:
    """Label an hour slot, wrapping hours past midnight (26 -> "02:00")."""
    return f"{hour % 24:02d}:00"
