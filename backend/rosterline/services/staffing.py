from typing import Dict, List, Optional
from rosterline.models.shift import Shift
from rosterline.models.coverage import (
    CoverageGap,
    RequiredCoverage,
    StaffingLevels,
    StaffingRequirements,
)
from rosterline.models.constraints import Constraints
from .time_utils import shift_span, slot_label


def empty_levels(constraints: Optional[Constraints] = None) -> StaffingLevels:
    """Hour slots for the operating window, 06:00 through 02:00 next day by default."""
    constraints = constraints or Constraints()
    return {slot_label(hour): {} for hour in constraints.slot_hours()}


def compute_staffing_levels(
    shifts: List[Shift],
    constraints: Optional[Constraints] = None,
) -> StaffingLevels:
    """Count staff per position for every hour slot each shift touches.

    A shift counts toward every hour it overlaps, including partial hours.
    Cancelled shifts are skipped, so callers can pass a full day of records
    without filtering them first.
    """
    levels = empty_levels(constraints)

    for shift in shifts:
        if shift.is_cancelled:
            continue
        start_minutes, end_minutes = shift_span(shift.start_time, shift.end_time)
        for minutes in range(start_minutes, end_minutes, 60):
            slot = slot_label(minutes // 60)
            by_position = levels.setdefault(slot, {})
            by_position[shift.position] = by_position.get(shift.position, 0) + 1

    return levels


def expand_required_coverage(required: Dict[str, RequiredCoverage]) -> StaffingRequirements:
    """Turn per-position {min, hours} coverage into hour -> position -> min."""
    requirements: StaffingRequirements = {}
    for position, coverage in required.items():
        if isinstance(coverage, dict):
            coverage = RequiredCoverage(**coverage)
        for hour in coverage.hours:
            requirements.setdefault(hour, {})[position] = coverage.min
    return requirements


def find_coverage_gaps(
    requirements: StaffingRequirements,
    current_levels: StaffingLevels,
) -> List[CoverageGap]:
    """Report every (hour, position) where scheduled staff fall short.

    Purely diagnostic: over-coverage is not reported and nothing is assigned.
    """
    gaps = []
    for hour, positions in requirements.items():
        for position, required in positions.items():
            current = current_levels.get(hour, {}).get(position, 0)
            if current < required:
                gaps.append(CoverageGap(
                    hour=hour,
                    position=position,
                    required=required,
                    current=current,
                    shortage=required - current,
                ))
    return gaps


def total_shortage(gaps: List[CoverageGap]) -> int:
    return sum(gap.shortage for gap in gaps)
