from __future__ import annotations

from datetime import date, datetime

import pytest

from hrm_system.audit.trail import apply
from hrm_system.core.enums import RequestStatus, Role
from hrm_system.core.exceptions import InsufficientCompLeave, InvalidRange, MissingReason, NotPending, ValidationError
from hrm_system.leaves import ledger
from hrm_system.state.model import HRMState
from hrm_system.users.model import Employee

NOW = datetime(2026, 3, 2, 9, 0)


def _state(earned: int = 2, used: int = 0) -> HRMState:
    return HRMState(
        employees=(
            Employee("m1", "Manager", "m1@example.com", "x", Role.MANAGER, 80, 8000),
            Employee(
                "e1",
                "Worker",
                "e1@example.com",
                "x",
                Role.EMPLOYEE,
                80,
                5000,
                manager_id="m1",
                comp_leaves_earned=earned,
                comp_leaves_used=used,
            ),
        )
    )


def _requested(state: HRMState, start=date(2026, 3, 10), end=date(2026, 3, 14)):
    state = apply(state, ledger.request_leave, "e1", start, end, "Family trip", now=NOW)
    return state, state.leave_requests[-1].id


def test_request_validates_range_and_reason():
    with pytest.raises(InvalidRange):
        ledger.request_leave(_state(), "e1", date(2026, 3, 5), date(2026, 3, 4), "x", now=NOW)
    with pytest.raises(MissingReason):
        ledger.request_leave(_state(), "e1", date(2026, 3, 5), date(2026, 3, 5), "  ", now=NOW)


def test_single_day_request_is_pending():
    state, leave_id = _requested(_state(), date(2026, 3, 5), date(2026, 3, 5))
    assert state.get_leave_request(leave_id).status == RequestStatus.PENDING


def test_approval_uses_exactly_one_comp_leave_regardless_of_range():
    state, leave_id = _requested(_state(earned=2))
    state = apply(state, ledger.decide, leave_id, "m1", True, "Enjoy", now=NOW)

    emp = state.get_employee("e1")
    assert emp.comp_leaves_used == 1
    assert ledger.available_balance(emp) == 1
    req = state.get_leave_request(leave_id)
    assert req.status == RequestStatus.APPROVED
    assert req.reviewed_by == "m1"
    assert req.review_comment == "Enjoy"
    audit = state.audit_logs[-1]
    assert (audit.action, audit.previous_value, audit.new_value) == ("Leave Approved", "0", "1")


def test_rejection_leaves_balance_untouched():
    state, leave_id = _requested(_state(earned=2))
    state = apply(state, ledger.decide, leave_id, "m1", False, now=NOW)

    assert state.get_employee("e1").comp_leaves_used == 0
    assert state.get_leave_request(leave_id).status == RequestStatus.REJECTED


def test_decided_request_cannot_be_decided_again():
    state, leave_id = _requested(_state())
    state = apply(state, ledger.decide, leave_id, "m1", False, now=NOW)
    with pytest.raises(NotPending):
        ledger.decide(state, leave_id, "m1", True, now=NOW)


def test_approval_is_permissive_unless_balance_enforced():
    state, leave_id = _requested(_state(earned=0))

    with pytest.raises(InsufficientCompLeave):
        ledger.decide(state, leave_id, "m1", True, enforce_balance=True, now=NOW)

    state = apply(state, ledger.decide, leave_id, "m1", True, now=NOW)
    assert ledger.available_balance(state.get_employee("e1")) == -1


def test_grant_comp_leave():
    state = apply(_state(earned=1), ledger.grant_comp_leave, "e1", 3, "m1", now=NOW)
    assert state.get_employee("e1").comp_leaves_earned == 4
    assert state.audit_logs[-1].action == "Comp Leave Granted"

    for bad in (0, -1, 1.5, True):
        with pytest.raises(ValidationError):
            ledger.grant_comp_leave(state, "e1", bad, "m1", now=NOW)
