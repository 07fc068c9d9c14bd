"""Shift lifecycle state machine.

Transitions are a pure lookup; persisting the new status is the caller's job.
"""
from typing import Dict, List, Optional, Tuple
from rosterline.models.shift import Shift, ShiftStatus
from rosterline.models.constraints import ValidationResult, ConflictType


VALID_TRANSITIONS: Dict[str, List[str]] = {
    ShiftStatus.SCHEDULED.value: [ShiftStatus.CONFIRMED.value, ShiftStatus.CANCELLED.value],
    ShiftStatus.CONFIRMED.value: [
        ShiftStatus.COMPLETED.value,
        ShiftStatus.NO_SHOW.value,
        ShiftStatus.CANCELLED.value,
    ],
    ShiftStatus.COMPLETED.value: [],
    ShiftStatus.CANCELLED.value: [ShiftStatus.SCHEDULED.value],  # Rescheduling
    ShiftStatus.NO_SHOW.value: [],
}

TERMINAL_STATUSES = [s for s, targets in VALID_TRANSITIONS.items() if not targets]


def _status_value(status) -> str:
    return status.value if isinstance(status, ShiftStatus) else str(status)


def is_valid_transition(current: str, next_status: str) -> bool:
    return _status_value(next_status) in VALID_TRANSITIONS.get(_status_value(current), [])


def allowed_transitions(current: str) -> List[str]:
    return list(VALID_TRANSITIONS.get(_status_value(current), []))


def is_terminal(status: str) -> bool:
    return _status_value(status) in TERMINAL_STATUSES


def check_transition(current: str, next_status: str) -> ValidationResult:
    """Explain why a transition is rejected, or accept it."""
    current = _status_value(current)
    next_status = _status_value(next_status)

    if current not in VALID_TRANSITIONS:
        return ValidationResult.reject(f"Unknown shift status '{current}'", ConflictType.INVALID_TRANSITION)
    if next_status not in VALID_TRANSITIONS:
        return ValidationResult.reject(f"Unknown shift status '{next_status}'", ConflictType.INVALID_TRANSITION)
    if is_terminal(current):
        return ValidationResult.reject(
            f"Shift is already {current} and can no longer change status",
            ConflictType.INVALID_TRANSITION,
        )
    if not is_valid_transition(current, next_status):
        allowed = ", ".join(allowed_transitions(current))
        return ValidationResult.reject(
            f"Cannot move shift from {current} to {next_status} (allowed: {allowed})",
            ConflictType.INVALID_TRANSITION,
        )
    return ValidationResult.ok()


def apply_transition(
    shift: Shift,
    next_status: str,
    notes: Optional[str] = None,
) -> Tuple[Optional[Shift], ValidationResult]:
    """Return a copy of the shift in its new status; the input is untouched."""
    result = check_transition(shift.status, next_status)
    if not result.is_valid:
        return None, result

    update = {"status": _status_value(next_status)}
    if notes is not None:
        update["notes"] = notes
    return shift.model_copy(update=update), result
