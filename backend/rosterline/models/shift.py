import re
from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator
from datetime import date


TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

DAY_NAMES = [
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
]


class Position(str, Enum):
    MANAGER = "manager"
    SERVER = "server"
    CHEF = "chef"
    BARTENDER = "bartender"
    HOST = "host"
    BUSSER = "busser"
    DISHWASHER = "dishwasher"
    KITCHEN_PREP = "kitchen_prep"
    OWNER = "owner"


class ShiftStatus(str, Enum):
    SCHEDULED = "scheduled"      # Created, awaiting staff confirmation
    CONFIRMED = "confirmed"      # Staff member accepted the shift
    COMPLETED = "completed"      # Terminal
    CANCELLED = "cancelled"      # Can be rescheduled
    NO_SHOW = "no_show"          # Terminal


def _check_time(value: str) -> str:
    if not isinstance(value, str) or not TIME_PATTERN.match(value):
        raise ValueError(f"'{value}' is not a valid HH:MM time")
    return value


class Shift(BaseModel):
    """A block of work for one staff member, position and calendar date.

    ``end_time`` at or before ``start_time`` means the shift crosses midnight
    and ends on the following day.
    """
    id: Optional[str] = None
    staff_member: str
    shift_date: date
    start_time: str
    end_time: str
    break_duration: int = Field(default=30, ge=0)
    position: Position
    status: ShiftStatus = ShiftStatus.SCHEDULED
    assigned_section: Optional[str] = None
    notes: str = ""

    # Revision marker set by the record store
    updated: Optional[str] = None

    class Config:
        use_enum_values = True

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, value: str) -> str:
        return _check_time(value)

    @property
    def day_name(self) -> str:
        return DAY_NAMES[self.shift_date.weekday()]

    @property
    def is_cancelled(self) -> bool:
        return self.status == ShiftStatus.CANCELLED

    def to_record(self) -> dict:
        """Fields as stored in the record store (no id / revision)."""
        data = self.model_dump(exclude={"id", "updated"})
        data["shift_date"] = self.shift_date.isoformat()
        return data


class TemplateEntry(BaseModel):
    position: Position
    start_time: str
    end_time: str

    class Config:
        use_enum_values = True

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, value: str) -> str:
        return _check_time(value)


# day name ("monday" ... "sunday") -> entries for that day
ScheduleTemplate = Dict[str, List[TemplateEntry]]
