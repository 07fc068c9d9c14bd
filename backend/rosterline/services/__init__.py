from .time_utils import minutes_of_day, shift_span, span_minutes, slot_label
from .status import is_valid_transition, check_transition, apply_transition, VALID_TRANSITIONS
from .conflicts import has_conflict, find_conflicts, check_swap
from .staffing import compute_staffing_levels, find_coverage_gaps, expand_required_coverage
from .templates import generate_weekly_shifts
from .labor import (
    shift_hours,
    weekly_hours,
    overtime_hours,
    overtime_premium,
    labor_cost,
    payroll_summary,
    is_valid_break_duration,
)
from .optimizer import optimize_schedule
from .validation import validate_shift, parse_shift

__all__ = [
    'minutes_of_day', 'shift_span', 'span_minutes', 'slot_label',
    'is_valid_transition', 'check_transition', 'apply_transition', 'VALID_TRANSITIONS',
    'has_conflict', 'find_conflicts', 'check_swap',
    'compute_staffing_levels', 'find_coverage_gaps', 'expand_required_coverage',
    'generate_weekly_shifts',
    'shift_hours', 'weekly_hours', 'overtime_hours', 'overtime_premium',
    'labor_cost', 'payroll_summary', 'is_valid_break_duration',
    'optimize_schedule',
    'validate_shift', 'parse_shift'
]
