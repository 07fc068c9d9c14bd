from typing import Dict, List, Any
from rosterline.models.staff import StaffMember
from rosterline.models.coverage import StaffingRequirements


def optimize_schedule(
    requirements: StaffingRequirements,
    available_staff: List[StaffMember],
) -> Dict[str, Any]:
    """Greedy coverage-vs-cost planning aid.

    Requirements are processed in input order and filled with the first
    matching staff in ``available_staff`` order. Weekly hour caps, existing
    conflicts and global cost optimality are not considered.
    """
    assignments = []
    unfilled = []
    total_cost = 0.0
    achieved = 0
    total_required = 0

    for hour, positions in requirements.items():
        for position, required in positions.items():
            total_required += required
            candidates = [s for s in available_staff if s.can_work_position(position)]
            selected = candidates[:required]
            cost = sum(s.hourly_rate for s in selected)

            achieved += len(selected)
            total_cost += cost

            if selected:
                assignments.append({
                    "hour": hour,
                    "position": position,
                    "staff_ids": [s.id for s in selected],
                    "staff_count": len(selected),
                    "required": required,
                    "cost": round(cost, 2),
                })
            if len(selected) < required:
                unfilled.append({
                    "hour": hour,
                    "position": position,
                    "required": required,
                    "assigned": len(selected),
                    "shortage": required - len(selected),
                })

    coverage = achieved / total_required * 100 if total_required > 0 else 100.0

    return {
        "total_cost": round(total_cost, 2),
        "coverage_percentage": round(coverage, 2),
        "assignments": assignments,
        "unfilled": unfilled,
        "total_required": total_required,
        "total_assigned": achieved,
    }
