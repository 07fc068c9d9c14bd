from typing import Dict, List
from pydantic import BaseModel, Field


# hour slot ("18:00") -> position -> headcount
StaffingLevels = Dict[str, Dict[str, int]]

# hour slot ("18:00") -> position -> minimum headcount
StaffingRequirements = Dict[str, Dict[str, int]]


class RequiredCoverage(BaseModel):
    """Minimum headcount for one position across a list of hour slots."""
    min: int = Field(ge=0)
    hours: List[str] = []


class CoverageGap(BaseModel):
    hour: str
    position: str
    required: int
    current: int
    shortage: int

    @property
    def is_critical(self) -> bool:
        return self.shortage >= 2
