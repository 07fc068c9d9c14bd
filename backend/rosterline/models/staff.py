from typing import Optional, Dict
from pydantic import BaseModel, Field
from .shift import Position


class DayAvailability(BaseModel):
    available: bool = False
    preferred_start: Optional[str] = None
    preferred_end: Optional[str] = None


class StaffMember(BaseModel):
    id: str
    name: str = ""
    position: Position
    hourly_rate: float = Field(default=0.0, ge=0)

    # Weekly hour cap; only the CP-SAT refinement enforces it
    max_hours: float = 40.0

    # Availability: lowercase day name -> availability window
    availability: Dict[str, DayAvailability] = {}

    class Config:
        use_enum_values = True

    def can_work_position(self, position: str) -> bool:
        """Check if staff member fills a position."""
        return self.position == position

    def is_available_on(self, day_name: str) -> bool:
        """Check availability for a lowercase day name."""
        window = self.availability.get(day_name)
        return window is not None and window.available
