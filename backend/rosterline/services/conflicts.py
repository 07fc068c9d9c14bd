from typing import List
from rosterline.models.shift import Shift
from rosterline.models.constraints import ValidationResult, ConflictType
from .time_utils import shift_span


def _overlaps(existing: Shift, candidate: Shift) -> bool:
    existing_start, existing_end = shift_span(existing.start_time, existing.end_time)
    candidate_start, candidate_end = shift_span(candidate.start_time, candidate.end_time)
    return candidate_start < existing_end and candidate_end > existing_start


def find_conflicts(existing_shifts: List[Shift], candidate: Shift) -> List[Shift]:
    """Existing non-cancelled shifts on the candidate's date that overlap it."""
    conflicts = []
    for existing in existing_shifts:
        if existing.shift_date != candidate.shift_date:
            continue
        if existing.is_cancelled:
            continue
        # Re-checking an edited record against its own stored version
        if candidate.id is not None and existing.id == candidate.id:
            continue
        if _overlaps(existing, candidate):
            conflicts.append(existing)
    return conflicts


def has_conflict(existing_shifts: List[Shift], candidate: Shift) -> bool:
    return len(find_conflicts(existing_shifts, candidate)) > 0


def check_swap(
    shift_a: Shift,
    shift_b: Shift,
    shifts_of_a_owner: List[Shift],
    shifts_of_b_owner: List[Shift],
) -> ValidationResult:
    """Check that swapping owners of two shifts double-books nobody.

    ``shifts_of_a_owner`` are the current shifts of ``shift_a.staff_member``
    (which will receive ``shift_b``) and vice versa.
    """
    if shift_a.staff_member == shift_b.staff_member:
        return ValidationResult.reject("Both shifts belong to the same staff member")

    result = ValidationResult.ok()

    # Each owner keeps their other shifts but loses the one being given away
    a_keeps = [s for s in shifts_of_a_owner if s.id is None or s.id != shift_a.id]
    b_keeps = [s for s in shifts_of_b_owner if s.id is None or s.id != shift_b.id]

    incoming_for_a = shift_b.model_copy(update={"staff_member": shift_a.staff_member})
    incoming_for_b = shift_a.model_copy(update={"staff_member": shift_b.staff_member})

    for clash in find_conflicts(a_keeps, incoming_for_a):
        result = result.merge(ValidationResult.reject(
            f"{shift_a.staff_member} already works {clash.start_time}-{clash.end_time} on {clash.shift_date}",
            ConflictType.DOUBLE_BOOKING,
        ))
    for clash in find_conflicts(b_keeps, incoming_for_b):
        result = result.merge(ValidationResult.reject(
            f"{shift_b.staff_member} already works {clash.start_time}-{clash.end_time} on {clash.shift_date}",
            ConflictType.DOUBLE_BOOKING,
        ))
    return result
