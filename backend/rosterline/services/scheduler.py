import logging
import time as time_module
from typing import List, Dict, Any, Optional, Tuple
from ortools.sat.python import cp_model
from rosterline.models.staff import StaffMember
from rosterline.models.coverage import StaffingRequirements
from rosterline.models.constraints import Constraints
from .optimizer import optimize_schedule

logger = logging.getLogger(__name__)


class SchedulerService:
    """Refines the greedy plan with the OR-Tools CP-SAT solver.

    Unlike the greedy optimizer this respects each staff member's weekly hour
    cap and picks the cheapest staff for each slot.
    """

    def __init__(
        self,
        staff: List[StaffMember],
        constraints: Optional[Constraints] = None,
    ):
        self.staff = staff
        self.constraints = constraints or Constraints()
        self.staff_map = {s.id: s for s in staff}

    def greedy_baseline(self, requirements: StaffingRequirements) -> Dict[str, Any]:
        result = optimize_schedule(requirements, self.staff)
        result["status"] = "greedy"
        return result

    def refine(self, requirements: StaffingRequirements, time_limit_seconds: float = 10.0) -> Dict[str, Any]:
        """Maximize filled slots first, then minimize cost."""
        start_time = time_module.time()
        model = cp_model.CpModel()

        # Decision variables: staff member s works hour slot h
        works: Dict[Tuple[str, str], Any] = {}
        for hour, positions in requirements.items():
            for s in self.staff:
                if s.position in positions and positions[s.position] > 0:
                    works[(s.id, hour)] = model.new_bool_var(f"works_{s.id}_{hour}")

        if not works:
            return self.greedy_baseline(requirements)

        # Constraint 1: never exceed the requested headcount for a slot
        for hour, positions in requirements.items():
            for position, required in positions.items():
                slot_vars = [works[(s.id, hour)] for s in self.staff if (s.id, hour) in works and s.position == position]
                if slot_vars:
                    model.add(sum(slot_vars) <= required)

        # Constraint 2: weekly hour cap, each slot is one hour
        for s in self.staff:
            staff_vars = [var for (staff_id, _), var in works.items() if staff_id == s.id]
            if staff_vars:
                model.add(sum(staff_vars) <= int(s.max_hours))

        # Objective: coverage dominates, cost (in cents) breaks ties
        rate_cents = {s.id: int(round(s.hourly_rate * 100)) for s in self.staff}
        coverage_weight = sum(rate_cents.values()) * len(requirements) + 1
        model.maximize(sum(
            var * (coverage_weight - rate_cents[staff_id])
            for (staff_id, _), var in works.items()
        ))

        solver = cp_model.CpSolver()
        solver.parameters.max_time_in_seconds = time_limit_seconds
        solver.parameters.num_workers = 4
        status = solver.solve(model)

        solve_time = round(time_module.time() - start_time, 2)

        if status not in [cp_model.OPTIMAL, cp_model.FEASIBLE]:
            logger.warning("CP-SAT found no solution in %.1fs, using greedy plan", time_limit_seconds)
            return self.greedy_baseline(requirements)

        chosen = {key for key, var in works.items() if solver.value(var) == 1}
        result = self._summarize(requirements, chosen)
        result["status"] = "optimal" if status == cp_model.OPTIMAL else "feasible"
        result["solve_time_seconds"] = solve_time
        logger.info("CP-SAT %s plan: %.2f%% coverage, cost %.2f",
                    result["status"], result["coverage_percentage"], result["total_cost"])
        return result

    def _summarize(self, requirements: StaffingRequirements, chosen) -> Dict[str, Any]:
        """Report a solver plan in the greedy optimizer's shape."""
        assignments = []
        unfilled = []
        total_cost = 0.0
        total_required = 0
        achieved = 0

        for hour, positions in requirements.items():
            for position, required in positions.items():
                total_required += required
                staff_ids = [s.id for s in self.staff if s.position == position and (s.id, hour) in chosen]
                cost = sum(self.staff_map[i].hourly_rate for i in staff_ids)
                achieved += len(staff_ids)
                total_cost += cost

                if staff_ids:
                    assignments.append({
                        "hour": hour,
                        "position": position,
                        "staff_ids": staff_ids,
                        "staff_count": len(staff_ids),
                        "required": required,
                        "cost": round(cost, 2),
                    })
                if len(staff_ids) < required:
                    unfilled.append({
                        "hour": hour,
                        "position": position,
                        "required": required,
                        "assigned": len(staff_ids),
                        "shortage": required - len(staff_ids),
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
