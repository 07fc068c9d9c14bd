import io
import zipfile

import pytest

from rosterline.models.coverage import CoverageGap
from rosterline.services.data_loader import DataLoader
from rosterline.services.staffing import compute_staffing_levels
from .helpers import make_shift

CSV = """staff_member,shift_date,start_time,end_time,break_duration,position,status,notes
staff-1,2024-01-15,17:00,23:00,30,Server,Scheduled,
staff-2,2024-01-15,25:00,23:00,30,server,scheduled,
staff-3,2024-01-15,16:00,00:00,60,Kitchen Prep,confirmed,Prep station
"""


@pytest.fixture
def loader(tmp_path):
    (tmp_path / "shifts.csv").write_text(CSV)
    return DataLoader(str(tmp_path))


def test_load_shifts_csv(loader):
    loaded = loader.load_shifts_csv("shifts.csv")

    assert [s.staff_member for s in loaded["shifts"]] == ["staff-1", "staff-3"]
    assert loaded["shifts"][0].position == "server"
    assert loaded["shifts"][1].position == "kitchen_prep"
    assert loaded["shifts"][1].notes == "Prep station"
    assert loaded["errors"][0]["row"] == 3
    assert loaded["errors"][0]["reasons"][0].startswith("start_time")


def test_missing_file_raises(loader):
    with pytest.raises(FileNotFoundError):
        loader.load_shifts_csv("nope.csv")


def test_export_csv_can_be_loaded_again(loader):
    shifts = loader.load_shifts_csv("shifts.csv")["shifts"]
    path = loader.export_shifts_csv(shifts, "out.csv")

    header = path.read_text().splitlines()[0]
    assert header.startswith("id,staff_member")
    assert header.endswith(",hours")
    assert len(loader.load_shifts_csv(str(path))["shifts"]) == 2


def test_shift_frame_hours(loader):
    frame = loader.shifts_to_frame([make_shift("17:00", "23:00", break_duration=30)])
    assert frame.loc[0, "hours"] == 5.5


def test_excel_export_sheets(loader):
    shifts = [make_shift(), make_shift(position="chef", staff="staff-3")]
    levels = compute_staffing_levels(shifts)
    gaps = [CoverageGap(hour="18:00", position="bartender", required=1, current=0, shortage=1)]

    content = loader.export_schedule_excel(shifts, levels, gaps)
    assert content[:2] == b"PK"

    with zipfile.ZipFile(io.BytesIO(content)) as workbook:
        sheets = workbook.read("xl/workbook.xml").decode()
    for name in ("Shifts", "Staffing", "Coverage Gaps"):
        assert f'name="{name}"' in sheets
