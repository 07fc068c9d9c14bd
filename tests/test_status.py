import itertools

import pytest

from rosterline.models.shift import ShiftStatus
from rosterline.services.status import (
    VALID_TRANSITIONS,
    is_valid_transition,
    allowed_transitions,
    is_terminal,
    check_transition,
    apply_transition,
)
from .helpers import make_shift

ALL_STATUSES = [s.value for s in ShiftStatus]

ALLOWED = {
    ("scheduled", "confirmed"),
    ("scheduled", "cancelled"),
    ("confirmed", "completed"),
    ("confirmed", "no_show"),
    ("confirmed", "cancelled"),
    ("cancelled", "scheduled"),
}


@pytest.mark.parametrize("current,next_status", sorted(ALLOWED))
def test_allowed_transitions(current, next_status):
    assert is_valid_transition(current, next_status)
    assert check_transition(current, next_status).is_valid


def test_every_other_pair_is_rejected():
    for current, next_status in itertools.product(ALL_STATUSES, repeat=2):
        if (current, next_status) in ALLOWED:
            continue
        assert not is_valid_transition(current, next_status), (current, next_status)


@pytest.mark.parametrize("status", ALL_STATUSES)
def test_self_transition_is_rejected(status):
    assert not is_valid_transition(status, status)


@pytest.mark.parametrize("terminal", ["completed", "no_show"])
def test_terminal_states_have_no_exits(terminal):
    assert is_terminal(terminal)
    assert allowed_transitions(terminal) == []
    for target in ALL_STATUSES:
        result = check_transition(terminal, target)
        assert not result.is_valid
        assert "no longer change" in result.reasons[0]


def test_unknown_status_is_a_validation_failure():
    assert not is_valid_transition("in_progress", "completed")
    result = check_transition("scheduled", "archived")
    assert not result.is_valid
    assert result.conflict_types == ["invalid_transition"]


def test_enum_members_are_accepted():
    assert is_valid_transition(ShiftStatus.SCHEDULED, ShiftStatus.CONFIRMED)
    assert set(VALID_TRANSITIONS) == set(ALL_STATUSES)


def test_apply_transition_returns_new_value():
    shift = make_shift(status="scheduled")
    updated, result = apply_transition(shift, "confirmed", notes="Confirmed by staff member")

    assert result.is_valid
    assert updated.status == "confirmed"
    assert updated.notes == "Confirmed by staff member"
    assert shift.status == "scheduled"


def test_apply_transition_rejects_without_copy():
    shift = make_shift(status="completed")
    updated, result = apply_transition(shift, "scheduled")
    assert updated is None
    assert not result.is_valid
