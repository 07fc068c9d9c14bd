import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple
from rosterline.models.shift import Shift
from rosterline.models.constraints import Constraints, ValidationResult, ConflictType
from .record_store import RecordStore, StaleRecordError
from .validation import parse_shift, check_shift
from .conflicts import find_conflicts, check_swap
from .status import check_transition

logger = logging.getLogger(__name__)

SHIFTS = "shifts"


class ShiftService:
    """Shift workflows against a record store.

    Every decision is made on a fresh read taken just before the write, and
    writes carry the revision that was read.
    """

    def __init__(self, store: RecordStore, constraints: Optional[Constraints] = None):
        self.store = store
        self.constraints = constraints or Constraints()

    def _staff_shifts(self, staff_id: str, shift_date: Optional[date] = None) -> List[Shift]:
        record_filter: Dict[str, Any] = {"staff_member": staff_id}
        if shift_date is not None:
            record_filter["shift_date"] = shift_date.isoformat()
        records = self.store.list(SHIFTS, record_filter, sort="shift_date,start_time")
        return [Shift(**r) for r in records]

    def get_shift(self, shift_id: str) -> Shift:
        return Shift(**self.store.get(SHIFTS, shift_id))

    def list_shifts(self, record_filter: Optional[Dict[str, Any]] = None, sort: str = "shift_date,start_time") -> List[Shift]:
        return [Shift(**r) for r in self.store.list(SHIFTS, record_filter, sort=sort)]

    def _conflict_result(self, staff_id: str, clashes: List[Shift]) -> ValidationResult:
        result = ValidationResult(is_valid=False)
        for clash in clashes:
            result.reasons.append(
                f"{staff_id} already works {clash.start_time}-{clash.end_time} on {clash.shift_date}"
            )
            result.conflict_types.append(ConflictType.DOUBLE_BOOKING.value)
        return result

    def create_shift(
        self,
        data: Dict[str, Any],
        reference_date: Optional[date] = None,
    ) -> Tuple[Optional[Shift], ValidationResult]:
        """Validate, conflict check and persist a new shift."""
        shift, result = parse_shift(data, self.constraints, reference_date)
        if shift is None:
            return None, result

        clashes = find_conflicts(self._staff_shifts(shift.staff_member, shift.shift_date), shift)
        if clashes:
            logger.info("Rejected shift for %s on %s: %d overlapping shift(s)",
                        shift.staff_member, shift.shift_date, len(clashes))
            return None, self._conflict_result(shift.staff_member, clashes)

        record = self.store.create(SHIFTS, shift.to_record())
        logger.info("Created shift %s for %s on %s", record["id"], shift.staff_member, shift.shift_date)
        return Shift(**record), result

    def transition_status(
        self,
        shift_id: str,
        next_status: str,
        notes: Optional[str] = None,
        retries: int = 1,
    ) -> Tuple[Optional[Shift], ValidationResult]:
        """Move a shift to a new status, re-deciding if another writer got there first."""
        attempt = 0
        while True:
            current = self.get_shift(shift_id)
            result = check_transition(current.status, next_status)
            if not result.is_valid:
                return None, result

            # Validate the revised shift before anything is written
            revised = current.model_dump()
            revised["status"] = next_status
            if notes is not None:
                revised["notes"] = notes
            candidate, result = parse_shift(revised, self.constraints)
            if candidate is None:
                return None, result

            # Rescheduling puts a cancelled shift back on the floor
            if current.is_cancelled:
                clashes = find_conflicts(self._staff_shifts(current.staff_member, current.shift_date), candidate)
                if clashes:
                    logger.info("Rejected rescheduling shift %s: %d overlapping shift(s)", shift_id, len(clashes))
                    return None, self._conflict_result(current.staff_member, clashes)

            fields: Dict[str, Any] = {"status": candidate.status}
            if notes is not None:
                fields["notes"] = candidate.notes

            try:
                record = self.store.update(SHIFTS, shift_id, fields, expected_updated=current.updated)
            except StaleRecordError:
                if attempt >= retries:
                    raise
                attempt += 1
                logger.warning("Shift %s changed during status update, re-reading", shift_id)
                continue

            logger.info("Shift %s: %s -> %s", shift_id, current.status, next_status)
            return Shift(**record), result

    def swap_shifts(self, shift_id_a: str, shift_id_b: str) -> Tuple[List[Shift], ValidationResult]:
        """Exchange the staff members of two shifts if neither ends up double booked."""
        shift_a = self.get_shift(shift_id_a)
        shift_b = self.get_shift(shift_id_b)

        result = check_swap(
            shift_a,
            shift_b,
            self._staff_shifts(shift_a.staff_member, shift_b.shift_date),
            self._staff_shifts(shift_b.staff_member, shift_a.shift_date),
        )
        if not result.is_valid:
            return [], result

        updated_a = self.store.update(
            SHIFTS, shift_a.id, {"staff_member": shift_b.staff_member}, expected_updated=shift_a.updated
        )
        try:
            updated_b = self.store.update(
                SHIFTS, shift_b.id, {"staff_member": shift_a.staff_member}, expected_updated=shift_b.updated
            )
        except StaleRecordError:
            # Hand shift A back so neither owner ends up with both shifts
            self.store.update(
                SHIFTS, shift_a.id, {"staff_member": shift_a.staff_member}, expected_updated=updated_a["updated"]
            )
            logger.warning("Shift %s changed during swap, swap of %s reverted", shift_b.id, shift_a.id)
            raise
        logger.info("Swapped shifts %s and %s", shift_a.id, shift_b.id)
        return [Shift(**updated_a), Shift(**updated_b)], result

    def accept_week(self, drafts: List[Shift]) -> Dict[str, Any]:
        """Persist generated drafts that pass validation and the conflict gate."""
        accepted: List[Shift] = []
        rejected: List[Dict[str, Any]] = []

        for draft in drafts:
            result = check_shift(draft, self.constraints)
            if result.is_valid:
                existing = self._staff_shifts(draft.staff_member, draft.shift_date)
                clashes = find_conflicts(existing, draft)
                if clashes:
                    result = self._conflict_result(draft.staff_member, clashes)

            if not result.is_valid:
                rejected.append({"shift": draft, "reasons": result.reasons})
                continue

            record = self.store.create(SHIFTS, draft.to_record())
            accepted.append(Shift(**record))

        logger.info("Accepted %d of %d generated shifts", len(accepted), len(drafts))
        return {"accepted": accepted, "rejected": rejected}
