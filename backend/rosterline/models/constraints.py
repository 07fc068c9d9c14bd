from enum import Enum
from typing import List
from pydantic import BaseModel


class ConflictType(str, Enum):
    # Rejections the caller surfaces as validation failures
    INVALID_FIELD = "invalid_field"
    INVALID_TIME = "invalid_time"
    INVALID_BREAK = "invalid_break"
    PAST_DATE = "past_date"
    INVALID_TRANSITION = "invalid_transition"
    DOUBLE_BOOKING = "double_booking"

    # Diagnostics (not errors)
    UNDERSTAFFED = "understaffed"
    OVERTIME = "overtime"


class ValidationResult(BaseModel):
    """Structured accept / reject decision with human readable reasons."""
    is_valid: bool = True
    reasons: List[str] = []
    conflict_types: List[ConflictType] = []

    class Config:
        use_enum_values = True

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls()

    @classmethod
    def reject(cls, reason: str, conflict_type: ConflictType = ConflictType.INVALID_FIELD) -> "ValidationResult":
        return cls(is_valid=False, reasons=[reason], conflict_types=[conflict_type])

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        return ValidationResult(
            is_valid=self.is_valid and other.is_valid,
            reasons=self.reasons + other.reasons,
            conflict_types=self.conflict_types + other.conflict_types,
        )


class Constraints(BaseModel):
    """Scheduling limits that vary by jurisdiction and contract."""

    # Weekly hours before overtime applies
    standard_weekly_hours: float = 35.0
    overtime_multiplier: float = 1.5

    # Break requirements
    default_break_minutes: int = 30
    short_shift_hours: float = 6.0
    short_shift_max_break_minutes: int = 60
    long_shift_hours: float = 8.0
    long_shift_max_break_minutes: int = 120

    # Hour slot window, 26 = 02:00 next day
    day_start_hour: int = 6
    day_end_hour: int = 26

    max_notes_length: int = 500

    def slot_hours(self) -> List[int]:
        """Hours covered by the staffing window, past-midnight hours above 23."""
        return list(range(self.day_start_hour, self.day_end_hour + 1))
