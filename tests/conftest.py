import pytest

from rosterline.models.staff import StaffMember
from rosterline.models.constraints import Constraints
from rosterline.services.record_store import InMemoryRecordStore
from rosterline.services.shift_service import ShiftService


@pytest.fixture
def constraints():
    return Constraints()


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def service(store, constraints):
    return ShiftService(store, constraints)


@pytest.fixture
def staff_pool():
    return [
        StaffMember(id="staff-1", name="Ana", position="server", hourly_rate=15.50, max_hours=8),
        StaffMember(id="staff-2", name="Ben", position="server", hourly_rate=16.00, max_hours=6),
        StaffMember(id="staff-3", name="Cleo", position="chef", hourly_rate=22.00, max_hours=8),
        StaffMember(id="staff-4", name="Dev", position="bartender", hourly_rate=18.00, max_hours=6),
    ]
