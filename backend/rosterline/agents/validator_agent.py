from typing import Dict, Any, List
from .base import BaseAgent, AgentMessage
from rosterline.models.shift import Shift
from rosterline.models.constraints import Constraints, ConflictType
from rosterline.services.validation import parse_shift
from rosterline.services.conflicts import find_conflicts
from rosterline.services.status import check_transition
from rosterline.services.labor import weekly_hours, overtime_hours


class ValidatorAgent(BaseAgent):
    """Agent responsible for validating shifts before they are accepted."""

    def __init__(self, constraints: Constraints = None):
        super().__init__(name="ValidatorAgent")
        self.constraints = constraints or Constraints()

    def process(self, message: AgentMessage) -> AgentMessage:
        """Process validation requests."""
        action = message.action
        payload = message.payload

        if action == "validate_shifts":
            result = self.validate_shifts(
                payload.get("candidates", []),
                payload.get("existing", []),
            )
            return self.respond(message, "validation_result", result)

        if action == "check_transition":
            result = check_transition(payload.get("current", ""), payload.get("next", ""))
            return self.respond(message, "transition_result", result.model_dump())

        if action == "check_hours":
            result = self.check_hours(payload.get("shifts", []))
            return self.respond(message, "hours_result", result)

        return self.unknown_action(message)

    def validate_shifts(
        self,
        candidates: List[Any],
        existing: List[Any],
    ) -> Dict[str, Any]:
        """Validate fields and gate candidates on conflicts.

        Accepted candidates join the pool checked against later candidates.
        """
        self.set_status("validating")

        pool = [Shift(**s) if isinstance(s, dict) else s for s in existing]
        accepted = []
        rejected = []

        for candidate in candidates:
            data = candidate.model_dump() if isinstance(candidate, Shift) else candidate
            shift, result = parse_shift(data, self.constraints)
            if shift is None:
                rejected.append({"shift": data, "reasons": result.reasons, "types": result.conflict_types})
                continue

            same_staff = [s for s in pool if s.staff_member == shift.staff_member]
            clashes = find_conflicts(same_staff, shift)
            if clashes:
                rejected.append({
                    "shift": data,
                    "reasons": [
                        f"{shift.staff_member} already works {c.start_time}-{c.end_time} on {c.shift_date}"
                        for c in clashes
                    ],
                    "types": [ConflictType.DOUBLE_BOOKING.value] * len(clashes),
                })
                continue

            pool.append(shift)
            accepted.append(shift)

        self.set_status("complete")

        return {
            "is_valid": len(rejected) == 0,
            "accepted": accepted,
            "rejected": rejected,
            "total_accepted": len(accepted),
            "total_rejected": len(rejected),
        }

    def check_hours(self, shifts: List[Any]) -> Dict[str, Any]:
        """Weekly and overtime hours per staff member."""
        by_staff: Dict[str, List[Shift]] = {}
        for s in shifts:
            shift = Shift(**s) if isinstance(s, dict) else s
            by_staff.setdefault(shift.staff_member, []).append(shift)

        hours = {}
        warnings = []
        for staff_id, staff_shifts in by_staff.items():
            total = weekly_hours(staff_shifts)
            overtime = overtime_hours(total, self.constraints.standard_weekly_hours)
            hours[staff_id] = {"weekly_hours": total, "overtime_hours": overtime}
            if overtime > 0:
                warnings.append({
                    "type": ConflictType.OVERTIME.value,
                    "severity": "medium",
                    "description": f"{staff_id}: {total:.2f}h exceeds standard {self.constraints.standard_weekly_hours:g}h",
                    "staff_member": staff_id,
                })

        return {"hours": hours, "warnings": warnings}
