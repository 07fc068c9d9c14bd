import logging
import time
from datetime import date, timedelta
from typing import Dict, Any, List, Optional
from .base import BaseAgent, AgentMessage, MessageType
from .coverage_agent import CoverageAgent
from .validator_agent import ValidatorAgent
from .planner_agent import PlannerAgent
from rosterline.models.shift import Shift, DAY_NAMES
from rosterline.models.staff import StaffMember
from rosterline.models.constraints import Constraints
from rosterline.services.templates import generate_weekly_shifts
from rosterline.services.labor import labor_cost

logger = logging.getLogger(__name__)


class OrchestratorAgent(BaseAgent):
    """Master agent that runs the weekly planning workflow."""

    def __init__(self, constraints: Optional[Constraints] = None):
        super().__init__(name="OrchestratorAgent")
        self.constraints = constraints or Constraints()

        # Initialize sub-agents
        self.coverage_agent = CoverageAgent(self.constraints)
        self.validator_agent = ValidatorAgent(self.constraints)
        self.planner_agent = PlannerAgent(self.constraints)

        # Workflow state
        self.workflow_log = []

    def process(self, message: AgentMessage) -> AgentMessage:
        """Process orchestration requests."""
        if message.action == "plan_week":
            result = self.plan_week(message.payload)
            return self.respond(message, "plan_complete", result)

        return self.unknown_action(message)

    def _ask(self, agent: BaseAgent, action: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        request = AgentMessage(
            sender=self.name,
            recipient=agent.name,
            message_type=MessageType.REQUEST,
            action=action,
            payload=payload,
        )
        agent.receive_message(request)
        return agent.process(request).payload

    def plan_week(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Generate, gate, analyze and price one week of shifts.

        Payload keys: ``week_start`` (Monday, YYYY-MM-DD), ``templates``
        (staff id -> day template), ``existing_shifts``, ``staff``,
        ``requirements`` (applied to every day) or ``requirements_by_day``,
        ``hourly_rates`` and ``refine``.
        """
        start_time = time.time()
        self.set_status("orchestrating")
        self.workflow_log = []

        week_start = payload.get("week_start")
        if isinstance(week_start, str):
            week_start = date.fromisoformat(week_start)
        week_days = [week_start + timedelta(days=i) for i in range(7)]

        staff = [StaffMember(**s) if isinstance(s, dict) else s for s in payload.get("staff", [])]
        existing = [Shift(**s) if isinstance(s, dict) else s for s in payload.get("existing_shifts", [])]
        existing = [s for s in existing if week_days[0] <= s.shift_date <= week_days[-1]]

        self._log_step("INIT", f"Planning week of {week_start.isoformat()}")

        # Step 1: Expand templates into drafts
        drafts: List[Shift] = []
        for staff_id, template in payload.get("templates", {}).items():
            drafts.extend(generate_weekly_shifts(template, week_start, staff_id, self.constraints))
        self._log_step("GENERATE", f"{len(drafts)} draft shifts from {len(payload.get('templates', {}))} templates")

        # Step 2: Gate drafts on validation and conflicts
        validation = self._ask(self.validator_agent, "validate_shifts", {
            "candidates": drafts,
            "existing": existing,
        })
        accepted: List[Shift] = validation["accepted"]
        self._log_step("VALIDATE", f"{validation['total_accepted']} accepted, {validation['total_rejected']} rejected")

        week_shifts = existing + accepted

        # Step 3: Staffing levels and gaps per day
        coverage_by_day = {}
        plan_by_day = {}
        for day in week_days:
            day_name = DAY_NAMES[day.weekday()]
            requirements = self._requirements_for(payload, day_name)
            day_shifts = [s for s in week_shifts if s.shift_date == day]

            levels = self._ask(self.coverage_agent, "staffing_levels", {"shifts": day_shifts})["levels"]
            coverage = {"levels": levels}
            if requirements:
                coverage.update(self._ask(self.coverage_agent, "coverage_gaps", {
                    "requirements": requirements,
                    "levels": levels,
                }))

                # Step 4: Staffing plan for the day's requirements
                day_staff = [s for s in staff if not s.availability or s.is_available_on(day_name)]
                plan_by_day[day.isoformat()] = self._ask(
                    self.planner_agent,
                    "refine" if payload.get("refine") else "optimize",
                    {
                        "requirements": requirements,
                        "staff": day_staff,
                        "time_limit_seconds": payload.get("time_limit_seconds", 10.0),
                    },
                )
            coverage_by_day[day.isoformat()] = coverage

        total_gaps = sum(c.get("total_gaps", 0) for c in coverage_by_day.values())
        self._log_step("COVERAGE", f"{total_gaps} coverage gaps across the week")
        self._log_step("PLAN", f"Staffing plans for {len(plan_by_day)} days")

        # Step 5: Hours and labor cost
        hours = self._ask(self.validator_agent, "check_hours", {"shifts": week_shifts})
        rates = payload.get("hourly_rates") or self._rates_from_staff(staff)
        cost = labor_cost(week_shifts, rates)
        self._log_step("COST", f"Straight-time labor cost {cost['total']:.2f}")

        total_time = time.time() - start_time
        self.set_status("complete")
        self._log_step("COMPLETE", f"Workflow completed in {total_time:.2f}s")

        return {
            "status": "success" if validation["is_valid"] and total_gaps == 0 else "partial",
            "week_start": week_start.isoformat(),
            "accepted_shifts": [s.model_dump(mode="json") for s in accepted],
            "rejected_shifts": validation["rejected"],
            "coverage": coverage_by_day,
            "plans": plan_by_day,
            "hours": hours["hours"],
            "warnings": hours["warnings"],
            "labor_cost": cost,
            "generation_time_seconds": round(total_time, 2),
            "workflow_log": self.workflow_log,
            "agents_used": [
                self.validator_agent.name,
                self.coverage_agent.name,
                self.planner_agent.name,
            ],
        }

    def _requirements_for(self, payload: Dict[str, Any], day_name: str) -> Dict[str, Dict[str, int]]:
        by_day = payload.get("requirements_by_day") or {}
        if by_day:
            return by_day.get(day_name, {})
        return payload.get("requirements") or {}

    def _rates_from_staff(self, staff: List[StaffMember]) -> Dict[str, float]:
        """Average hourly rate per position."""
        totals: Dict[str, List[float]] = {}
        for s in staff:
            totals.setdefault(s.position, []).append(s.hourly_rate)
        return {position: sum(r) / len(r) for position, r in totals.items()}

    def _log_step(self, stage: str, message: str) -> None:
        """Log a workflow step."""
        logger.info("[%s] %s", stage, message)
        self.workflow_log.append({
            "timestamp": time.time(),
            "stage": stage,
            "message": message,
        })
