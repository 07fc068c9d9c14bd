import logging
from datetime import date
from typing import List, Dict, Any, Optional

from fastapi import Depends, FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from rosterline import __version__
from rosterline.agents.orchestrator import OrchestratorAgent
from rosterline.agents.base import AgentMessage, MessageType
from rosterline.models.shift import Shift, TemplateEntry
from rosterline.models.staff import StaffMember
from rosterline.models.coverage import RequiredCoverage
from rosterline.models.constraints import Constraints, ValidationResult
from rosterline.services.conflicts import find_conflicts
from rosterline.services.staffing import compute_staffing_levels, find_coverage_gaps, expand_required_coverage
from rosterline.services.templates import generate_weekly_shifts
from rosterline.services.labor import weekly_hours, overtime_hours, labor_cost, shift_hours
from rosterline.services.optimizer import optimize_schedule
from rosterline.services.scheduler import SchedulerService
from rosterline.services.validation import validate_shift
from rosterline.services.record_store import InMemoryRecordStore, RecordNotFoundError, StaleRecordError
from rosterline.services.shift_service import ShiftService
from rosterline.services.data_loader import DataLoader

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Rosterline Scheduling API",
    description="Shift scheduling and workforce coverage",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

constraints = Constraints()
store = InMemoryRecordStore()
data_loader = DataLoader()


def get_shift_service() -> ShiftService:
    return ShiftService(store, constraints)


class ValidateShiftRequest(BaseModel):
    shift: Dict[str, Any]
    reference_date: Optional[date] = None


class ShiftsRequest(BaseModel):
    shifts: List[Shift]


class GapsRequest(BaseModel):
    requirements: Dict[str, Dict[str, int]] = {}
    required_coverage: Dict[str, RequiredCoverage] = {}
    levels: Optional[Dict[str, Dict[str, int]]] = None
    shifts: List[Shift] = []


class ConflictRequest(BaseModel):
    existing: List[Shift]
    candidate: Shift


class GenerateWeekRequest(BaseModel):
    template: Dict[str, List[TemplateEntry]]
    week_start: date
    staff_id: str


class HoursRequest(BaseModel):
    shifts: List[Shift]
    standard_hours: Optional[float] = None


class CostRequest(BaseModel):
    shifts: List[Shift]
    hourly_rates: Dict[str, float]


class OptimizeRequest(BaseModel):
    requirements: Dict[str, Dict[str, int]]
    staff: List[StaffMember]
    refine: bool = False
    time_limit_seconds: float = 10.0


class StatusRequest(BaseModel):
    status: str
    notes: Optional[str] = None


class SwapRequest(BaseModel):
    shift_a: str
    shift_b: str


class ExportRequest(BaseModel):
    shift_date: date
    requirements: Dict[str, Dict[str, int]] = {}
    required_coverage: Dict[str, RequiredCoverage] = {}


def _reject(result: ValidationResult):
    raise HTTPException(status_code=422, detail=result.model_dump())


@app.get("/")
async def root():
    return {
        "service": "Rosterline Scheduling API",
        "version": __version__,
        "agents": [
            "OrchestratorAgent",
            "CoverageAgent",
            "ValidatorAgent",
            "PlannerAgent",
        ],
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


@app.get("/api/constraints")
async def get_constraints():
    """Get the active scheduling limits."""
    return constraints.model_dump()


@app.post("/api/shifts/validate")
async def validate(request: ValidateShiftRequest):
    return validate_shift(request.shift, constraints, request.reference_date).model_dump()


@app.post("/api/shifts/levels")
async def staffing_levels(request: ShiftsRequest):
    return {"levels": compute_staffing_levels(request.shifts, constraints)}


@app.post("/api/shifts/gaps")
async def coverage_gaps(request: GapsRequest):
    """Coverage gaps against explicit levels, or levels computed from shifts."""
    requirements = dict(request.requirements)
    for hour, positions in expand_required_coverage(request.required_coverage).items():
        requirements.setdefault(hour, {}).update(positions)

    levels = request.levels
    if levels is None:
        levels = compute_staffing_levels(request.shifts, constraints)

    gaps = find_coverage_gaps(requirements, levels)
    return {"gaps": [g.model_dump() for g in gaps], "total_gaps": len(gaps)}


@app.post("/api/shifts/conflicts")
async def shift_conflicts(request: ConflictRequest):
    clashes = find_conflicts(request.existing, request.candidate)
    return {"has_conflict": len(clashes) > 0, "conflicts": [c.model_dump(mode="json") for c in clashes]}


@app.post("/api/schedule/generate")
async def generate_week(request: GenerateWeekRequest):
    """Expand a weekly template into draft shifts (not persisted)."""
    try:
        drafts = generate_weekly_shifts(request.template, request.week_start, request.staff_id, constraints)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"shifts": [d.model_dump(mode="json") for d in drafts], "total": len(drafts)}


@app.post("/api/labor/hours")
async def labor_hours(request: HoursRequest):
    standard = request.standard_hours if request.standard_hours is not None else constraints.standard_weekly_hours
    total = weekly_hours(request.shifts)
    return {
        "shift_hours": [shift_hours(s) for s in request.shifts],
        "weekly_hours": total,
        "standard_hours": standard,
        "overtime_hours": overtime_hours(total, standard),
    }


@app.post("/api/labor/cost")
async def labor_costs(request: CostRequest):
    return labor_cost(request.shifts, request.hourly_rates)


@app.post("/api/optimize")
async def optimize(request: OptimizeRequest):
    """Greedy staffing plan, optionally refined with CP-SAT."""
    if request.refine:
        return SchedulerService(request.staff, constraints).refine(request.requirements, request.time_limit_seconds)
    return optimize_schedule(request.requirements, request.staff)


@app.post("/api/plan")
async def plan_week(payload: Dict[str, Any]):
    """Run the weekly planning workflow."""
    if not payload.get("week_start"):
        raise HTTPException(status_code=400, detail="week_start is required (YYYY-MM-DD)")

    orchestrator = OrchestratorAgent(constraints)
    message = AgentMessage(
        sender="API",
        recipient=orchestrator.name,
        message_type=MessageType.REQUEST,
        action="plan_week",
        payload=payload,
    )
    try:
        return orchestrator.process(message).payload
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.get("/api/shifts")
async def list_shifts(
    staff_member: Optional[str] = None,
    shift_date: Optional[date] = None,
    service: ShiftService = Depends(get_shift_service),
):
    record_filter = {}
    if staff_member:
        record_filter["staff_member"] = staff_member
    if shift_date:
        record_filter["shift_date"] = shift_date.isoformat()
    shifts = service.list_shifts(record_filter or None)
    return {"shifts": [s.model_dump(mode="json") for s in shifts], "total": len(shifts)}


@app.post("/api/shifts", status_code=201)
async def create_shift(request: ValidateShiftRequest, service: ShiftService = Depends(get_shift_service)):
    shift, result = service.create_shift(request.shift, request.reference_date)
    if shift is None:
        _reject(result)
    return shift.model_dump(mode="json")


@app.post("/api/shifts/swap")
async def swap_shifts(request: SwapRequest, service: ShiftService = Depends(get_shift_service)):
    try:
        shifts, result = service.swap_shifts(request.shift_a, request.shift_b)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StaleRecordError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not result.is_valid:
        _reject(result)
    return {"shifts": [s.model_dump(mode="json") for s in shifts]}


@app.post("/api/shifts/{shift_id}/status")
async def update_status(
    shift_id: str,
    request: StatusRequest,
    service: ShiftService = Depends(get_shift_service),
):
    try:
        shift, result = service.transition_status(shift_id, request.status, request.notes)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StaleRecordError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if shift is None:
        _reject(result)
    return shift.model_dump(mode="json")


def _export_day(
    service: ShiftService,
    shift_date: date,
    requirements: Optional[Dict[str, Dict[str, int]]] = None,
) -> Response:
    shifts = service.list_shifts({"shift_date": shift_date.isoformat()})
    levels = compute_staffing_levels(shifts, constraints)
    gaps = find_coverage_gaps(requirements, levels) if requirements else None
    content = data_loader.export_schedule_excel(shifts, levels, gaps)
    logger.info("Exported %d shifts for %s (%d gaps)", len(shifts), shift_date, len(gaps or []))

    filename = f"schedule_{shift_date.isoformat()}.xlsx"
    return Response(
        content=content,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@app.get("/api/export")
async def export_schedule(shift_date: date, service: ShiftService = Depends(get_shift_service)):
    """Export one day's stored shifts and staffing levels to Excel."""
    return _export_day(service, shift_date)


@app.post("/api/export")
async def export_schedule_with_gaps(request: ExportRequest, service: ShiftService = Depends(get_shift_service)):
    """Export one day's shifts, staffing levels and gaps against the given requirements."""
    requirements = dict(request.requirements)
    for hour, positions in expand_required_coverage(request.required_coverage).items():
        requirements.setdefault(hour, {}).update(positions)
    return _export_day(service, request.shift_date, requirements)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
