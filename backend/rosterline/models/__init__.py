from .shift import Shift, ShiftStatus, Position, TemplateEntry, ScheduleTemplate, DAY_NAMES
from .staff import StaffMember, DayAvailability
from .coverage import CoverageGap, RequiredCoverage, StaffingLevels, StaffingRequirements
from .constraints import Constraints, ConflictType, ValidationResult

__all__ = [
    'Shift', 'ShiftStatus', 'Position', 'TemplateEntry', 'ScheduleTemplate', 'DAY_NAMES',
    'StaffMember', 'DayAvailability',
    'CoverageGap', 'RequiredCoverage', 'StaffingLevels', 'StaffingRequirements',
    'Constraints', 'ConflictType', 'ValidationResult'
]
