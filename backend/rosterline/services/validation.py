from datetime import date
from typing import Any, Dict, Optional, Tuple
from pydantic import ValidationError
from rosterline.models.shift import Shift
from rosterline.models.constraints import Constraints, ValidationResult, ConflictType
from .time_utils import span_minutes
from .labor import is_valid_break_duration


def _reasons_from_error(error: ValidationError) -> ValidationResult:
    result = ValidationResult(is_valid=False)
    for item in error.errors():
        field = ".".join(str(part) for part in item.get("loc", ())) or "shift"
        conflict_type = ConflictType.INVALID_FIELD
        if field in ("start_time", "end_time"):
            conflict_type = ConflictType.INVALID_TIME
        elif field == "break_duration":
            conflict_type = ConflictType.INVALID_BREAK
        result.reasons.append(f"{field}: {item.get('msg')}")
        result.conflict_types.append(conflict_type.value)
    return result


def check_shift(
    shift: Shift,
    constraints: Optional[Constraints] = None,
    reference_date: Optional[date] = None,
) -> ValidationResult:
    """Business rules on an already parsed shift."""
    constraints = constraints or Constraints()
    result = ValidationResult.ok()

    gross_hours = span_minutes(shift.start_time, shift.end_time) / 60
    if not is_valid_break_duration(shift.break_duration, gross_hours, constraints):
        result = result.merge(ValidationResult.reject(
            f"Break of {shift.break_duration} minutes is not plausible for a {gross_hours:g} hour shift",
            ConflictType.INVALID_BREAK,
        ))

    if len(shift.notes) > constraints.max_notes_length:
        result = result.merge(ValidationResult.reject(
            f"Notes exceed {constraints.max_notes_length} characters",
        ))

    # New shifts may not be placed in the past
    if reference_date is not None and shift.shift_date < reference_date:
        result = result.merge(ValidationResult.reject(
            f"Shift date {shift.shift_date} is before {reference_date}",
            ConflictType.PAST_DATE,
        ))

    return result


def parse_shift(
    data: Dict[str, Any],
    constraints: Optional[Constraints] = None,
    reference_date: Optional[date] = None,
) -> Tuple[Optional[Shift], ValidationResult]:
    """Build a Shift from raw fields, collecting every rejection reason."""
    try:
        shift = Shift(**data)
    except ValidationError as e:
        return None, _reasons_from_error(e)

    result = check_shift(shift, constraints, reference_date)
    if not result.is_valid:
        return None, result
    return shift, result


def validate_shift(
    data: Dict[str, Any],
    constraints: Optional[Constraints] = None,
    reference_date: Optional[date] = None,
) -> ValidationResult:
    return parse_shift(data, constraints, reference_date)[1]
