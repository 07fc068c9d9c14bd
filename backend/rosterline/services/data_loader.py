import logging
import pandas as pd
from io import BytesIO
from pathlib import Path
from typing import List, Dict, Any, Optional
from rosterline.models.shift import Shift
from rosterline.models.coverage import CoverageGap, StaffingLevels
from .labor import shift_hours
from .validation import parse_shift

logger = logging.getLogger(__name__)

SHIFT_COLUMNS = [
    "staff_member",
    "assigned_section",
    "shift_date",
    "start_time",
    "end_time",
    "break_duration",
    "position",
    "status",
    "notes",
]


class DataLoader:
    """Import shift records from CSV and export schedules to CSV / Excel."""

    def __init__(self, data_dir: Optional[str] = None):
        self.data_dir = Path(data_dir) if data_dir else Path.cwd()

    def _resolve(self, filename: str) -> Path:
        path = Path(filename)
        return path if path.is_absolute() else self.data_dir / path

    def load_shifts_csv(self, filename: str) -> Dict[str, Any]:
        """Parse a shifts CSV; bad rows are reported with their line number."""
        csv_path = self._resolve(filename)
        if not csv_path.exists():
            raise FileNotFoundError(f"Shift file not found: {csv_path}")

        df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
        df.columns = [c.strip() for c in df.columns]

        shifts = []
        errors = []
        for idx, row in df.iterrows():
            data = {col: row[col].strip() for col in SHIFT_COLUMNS if col in df.columns and row[col].strip() != ""}
            if "position" in data:
                data["position"] = data["position"].lower().replace(" ", "_")
            if "status" in data:
                data["status"] = data["status"].lower().replace(" ", "_")

            shift, result = parse_shift(data)
            if shift is None:
                # +2: header line and 1-based numbering
                errors.append({"row": idx + 2, "reasons": result.reasons})
                continue
            shifts.append(shift)

        logger.info("Loaded %d shifts from %s (%d rejected)", len(shifts), csv_path.name, len(errors))
        return {"shifts": shifts, "errors": errors}

    def shifts_to_frame(self, shifts: List[Shift]) -> pd.DataFrame:
        rows = []
        for shift in shifts:
            row = shift.to_record()
            row["id"] = shift.id
            row["hours"] = shift_hours(shift)
            rows.append(row)
        return pd.DataFrame(rows, columns=["id"] + SHIFT_COLUMNS + ["hours"])

    def export_shifts_csv(self, shifts: List[Shift], filename: str) -> Path:
        path = self._resolve(filename)
        self.shifts_to_frame(shifts).to_csv(path, index=False)
        return path

    def export_schedule_excel(
        self,
        shifts: List[Shift],
        levels: Optional[StaffingLevels] = None,
        gaps: Optional[List[CoverageGap]] = None,
    ) -> bytes:
        """Workbook with Shifts, Staffing and Coverage Gaps sheets."""
        output = BytesIO()

        with pd.ExcelWriter(output, engine="xlsxwriter") as writer:
            # Sheet 1: Shifts
            self.shifts_to_frame(shifts).to_excel(writer, sheet_name="Shifts", index=False)

            # Sheet 2: Staffing levels, one row per hour slot
            if levels:
                df_levels = pd.DataFrame.from_dict(levels, orient="index").fillna(0).astype(int)
                df_levels.index.name = "hour"
                df_levels.to_excel(writer, sheet_name="Staffing")

            # Sheet 3: Coverage gaps
            if gaps:
                df_gaps = pd.DataFrame([g.model_dump() for g in gaps])
                df_gaps.to_excel(writer, sheet_name="Coverage Gaps", index=False)

        output.seek(0)
        return output.getvalue()
