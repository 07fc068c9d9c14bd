from typing import Dict, Any, List
from .base import BaseAgent, AgentMessage
from rosterline.models.staff import StaffMember
from rosterline.models.constraints import Constraints
from rosterline.services.optimizer import optimize_schedule
from rosterline.services.scheduler import SchedulerService


class PlannerAgent(BaseAgent):
    """Agent responsible for assigning available staff to hourly requirements."""

    def __init__(self, constraints: Constraints = None):
        super().__init__(name="PlannerAgent")
        self.constraints = constraints or Constraints()

    def process(self, message: AgentMessage) -> AgentMessage:
        """Process planning requests."""
        action = message.action
        payload = message.payload
        requirements = payload.get("requirements", {})
        staff = self._to_staff(payload.get("staff", []))

        if action == "optimize":
            self.set_status("planning")
            result = optimize_schedule(requirements, staff)
            self.set_status("complete")
            return self.respond(message, "plan_result", result)

        if action == "refine":
            self.set_status("solving")
            scheduler = SchedulerService(staff, self.constraints)
            result = scheduler.refine(requirements, payload.get("time_limit_seconds", 10.0))
            self.set_status("complete")
            return self.respond(message, "plan_result", result)

        if action == "position_supply":
            return self.respond(message, "supply_result", self.position_supply(requirements, staff))

        return self.unknown_action(message)

    def _to_staff(self, staff_data: List[Any]) -> List[StaffMember]:
        return [StaffMember(**s) if isinstance(s, dict) else s for s in staff_data]

    def position_supply(self, requirements: Dict[str, Dict[str, int]], staff: List[StaffMember]) -> Dict[str, Any]:
        """Peak demand per position against how many staff can fill it."""
        peak_demand: Dict[str, int] = {}
        for positions in requirements.values():
            for position, required in positions.items():
                peak_demand[position] = max(peak_demand.get(position, 0), required)

        supply = {}
        for position, required in peak_demand.items():
            available = sum(1 for s in staff if s.can_work_position(position))
            supply[position] = {
                "peak_required": required,
                "available": available,
                "is_sufficient": available >= required,
            }
        return supply
