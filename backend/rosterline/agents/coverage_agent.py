from typing import Dict, Any, List
from .base import BaseAgent, AgentMessage
from rosterline.models.shift import Shift
from rosterline.models.constraints import Constraints
from rosterline.services.staffing import compute_staffing_levels, find_coverage_gaps, total_shortage


class CoverageAgent(BaseAgent):
    """Agent responsible for hourly staffing levels and coverage gaps."""

    def __init__(self, constraints: Constraints = None):
        super().__init__(name="CoverageAgent")
        self.constraints = constraints or Constraints()

    def process(self, message: AgentMessage) -> AgentMessage:
        """Process staffing analysis requests."""
        action = message.action
        payload = message.payload

        if action == "staffing_levels":
            shifts = [Shift(**s) if isinstance(s, dict) else s for s in payload.get("shifts", [])]
            levels = compute_staffing_levels(shifts, self.constraints)
            return self.respond(message, "staffing_levels_result", {"levels": levels})

        if action == "coverage_gaps":
            result = self.analyze_coverage(
                payload.get("requirements", {}),
                payload.get("levels", {}),
            )
            return self.respond(message, "coverage_gaps_result", result)

        return self.unknown_action(message)

    def analyze_coverage(
        self,
        requirements: Dict[str, Dict[str, int]],
        levels: Dict[str, Dict[str, int]],
    ) -> Dict[str, Any]:
        """Compare required headcount against scheduled staffing."""
        self.set_status("analyzing")

        gaps = find_coverage_gaps(requirements, levels)

        # Hours with at least one gap, in requirement order
        short_hours: List[str] = []
        for gap in gaps:
            if gap.hour not in short_hours:
                short_hours.append(gap.hour)

        self.set_status("complete")

        return {
            "gaps": [g.model_dump() for g in gaps],
            "total_gaps": len(gaps),
            "total_shortage": total_shortage(gaps),
            "critical_gaps": sum(1 for g in gaps if g.is_critical),
            "short_hours": short_hours,
            "fully_covered": len(gaps) == 0,
        }
