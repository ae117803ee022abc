from __future__ import annotations

from datetime import date, datetime

import pytest

from hrm_system.attendance import ledger
from hrm_system.audit.trail import apply
from hrm_system.core.enums import Role, TimeLogStatus
from hrm_system.core.exceptions import (
    AlreadyCheckedOut,
    AlreadyOnBreak,
    DuplicateCheckIn,
    NoActiveBreak,
    NotCheckedIn,
    TasksRequired,
)
from hrm_system.state.model import HRMState
from hrm_system.tasks.log import add_task
from hrm_system.users.model import Employee

DAY = date(2026, 3, 2)


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 3, 2, hour, minute)


def _state() -> HRMState:
    emp = Employee(
        id="e1",
        name="Ali",
        email="ali@example.com",
        password_hash="x",
        role=Role.EMPLOYEE,
        monthly_hour_target=80,
        hourly_rate=5000,
    )
    return HRMState(employees=(emp,))


def _checked_in(hour: int = 9) -> HRMState:
    return apply(_state(), ledger.check_in, "e1", DAY, now=at(hour))


def _with_task(state: HRMState) -> HRMState:
    return apply(state, add_task, "e1", DAY, "Fix login bug", 2, now=at(10))


def test_check_in_creates_open_entry_with_audit():
    t = ledger.check_in(_state(), "e1", DAY, now=at(9))

    entry = t.state.find_time_log("e1", DAY)
    assert entry.check_in == at(9)
    assert entry.check_out is None
    assert entry.status == TimeLogStatus.CHECKED_IN
    assert t.audit.action == "Check In"
    assert t.audit.entity_id == entry.id
    # Audit is only appended on commit.
    assert t.state.audit_logs == ()
    assert len(t.commit().audit_logs) == 1


def test_second_check_in_same_day_is_rejected():
    state = _checked_in()
    with pytest.raises(DuplicateCheckIn):
        ledger.check_in(state, "e1", DAY, now=at(10))


def test_check_in_on_next_day_is_allowed():
    state = _checked_in()
    t = ledger.check_in(state, "e1", date(2026, 3, 3), now=datetime(2026, 3, 3, 9))
    assert len(t.state.time_logs) == 2


def test_break_requires_check_in():
    with pytest.raises(NotCheckedIn):
        ledger.break_start(_state(), "e1", DAY, now=at(12))
    with pytest.raises(NotCheckedIn):
        ledger.break_end(_state(), "e1", DAY, now=at(12))


def test_break_start_and_end():
    state = apply(_checked_in(), ledger.break_start, "e1", DAY, now=at(12))
    with pytest.raises(AlreadyOnBreak):
        ledger.break_start(state, "e1", DAY, now=at(12, 5))

    state = apply(state, ledger.break_end, "e1", DAY, now=at(12, 30))
    entry = state.find_time_log("e1", DAY)
    assert len(entry.breaks) == 1
    assert entry.breaks[0].break_out == at(12, 30)
    assert entry.open_break is None

    with pytest.raises(NoActiveBreak):
        ledger.break_end(state, "e1", DAY, now=at(13))


def test_check_out_without_tasks_fails_and_leaves_state_untouched():
    state = _checked_in()
    with pytest.raises(TasksRequired):
        ledger.check_out(state, "e1", DAY, now=at(17))

    assert state.find_time_log("e1", DAY).check_out is None
    assert len(state.audit_logs) == 1


def test_check_out_computes_total_hours_minus_breaks():
    state = _with_task(_checked_in())
    state = apply(state, ledger.break_start, "e1", DAY, now=at(12))
    state = apply(state, ledger.break_end, "e1", DAY, now=at(12, 30))

    t = ledger.check_out(state, "e1", DAY, now=at(17, 30))
    entry = t.state.find_time_log("e1", DAY)

    assert entry.total_hours == pytest.approx(8.0)
    assert entry.status == TimeLogStatus.CHECKED_OUT
    assert t.audit.changes == "Employee checked out. Total hours: 8.00"


def test_open_break_is_closed_at_check_out_for_the_total():
    state = _with_task(_checked_in())
    state = apply(state, ledger.break_start, "e1", DAY, now=at(16))

    state = apply(state, ledger.check_out, "e1", DAY, now=at(17))
    entry = state.find_time_log("e1", DAY)

    assert entry.total_hours == pytest.approx(7.0)
    # The stored break stays open; only the subtraction uses the check-out time.
    assert entry.breaks[0].break_out is None


def test_checked_out_is_terminal():
    state = apply(_with_task(_checked_in()), ledger.check_out, "e1", DAY, now=at(17))

    with pytest.raises(AlreadyCheckedOut):
        ledger.check_out(state, "e1", DAY, now=at(18))
    with pytest.raises(NotCheckedIn):
        ledger.break_start(state, "e1", DAY, now=at(18))
    with pytest.raises(DuplicateCheckIn):
        ledger.check_in(state, "e1", DAY, now=at(18))


def test_check_out_without_check_in():
    with pytest.raises(NotCheckedIn):
        ledger.check_out(_with_task(_state()), "e1", DAY, now=at(17))


def test_hours_worked_so_far_uses_now_for_open_parts():
    state = apply(_checked_in(), ledger.break_start, "e1", DAY, now=at(12))
    entry = state.find_time_log("e1", DAY)

    assert ledger.hours_worked_so_far(entry, at(13)) == pytest.approx(3.0)
    assert ledger.hours_worked_so_far(None, at(13)) == 0.0


def test_history_is_newest_first_and_limited():
    state = _state()
    for day in (1, 3, 2):
        state = apply(state, ledger.check_in, "e1", date(2026, 3, day), now=datetime(2026, 3, day, 9))

    rows = ledger.history_for(state, "e1", limit=2)
    assert [r.work_date.day for r in rows] == [3, 2]
