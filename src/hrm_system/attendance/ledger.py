"""Time ledger transformations.

Pure functions over :class:`HRMState`. Each mutating operation returns a
:class:`Transition`; reads return plain values.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ..audit.trail import Transition, record
from ..common.datetime_utils import now_local
from ..common.ids import new_id
from ..core.enums import TimeLogStatus
from ..core.exceptions import (
    AlreadyCheckedOut,
    AlreadyOnBreak,
    DuplicateCheckIn,
    NoActiveBreak,
    NotCheckedIn,
    TasksRequired,
)
from ..payroll.calculator.base import HoursCalculator
from ..payroll.calculator.standard_calculator import StandardHoursCalculator
from ..state.model import HRMState
from .model import BreakInterval, TimeLogEntry

ENTITY = "TimeLog"

_calculator: HoursCalculator = StandardHoursCalculator()


def _replace_log(state: HRMState, updated: TimeLogEntry) -> HRMState:
    return replace(state, time_logs=tuple(updated if t.id == updated.id else t for t in state.time_logs))


def _open_entry(state: HRMState, employee_id: str, work_date: date) -> TimeLogEntry:
    entry = state.find_time_log(employee_id, work_date)
    if not entry or not entry.is_open:
        raise NotCheckedIn("You are not checked in")
    return entry


def hours_worked_so_far(entry: Optional[TimeLogEntry], now: Optional[datetime] = None) -> float:
    """Live worked hours for display; authoritative once checked out."""
    if entry is None:
        return 0.0
    return _calculator.worked_hours(entry, now=now or now_local())


def check_in(
    state: HRMState,
    employee_id: str,
    work_date: Optional[date] = None,
    *,
    now: Optional[datetime] = None,
) -> Transition:
    now = now or now_local()
    work_date = work_date or now.date()
    state.get_employee(employee_id)

    if state.find_time_log(employee_id, work_date):
        raise DuplicateCheckIn("Already checked in today")

    entry = TimeLogEntry(
        id=new_id("log"),
        employee_id=employee_id,
        work_date=work_date,
        check_in=now,
        check_out=None,
        breaks=(),
        total_hours=0.0,
        status=TimeLogStatus.CHECKED_IN,
    )
    next_state = replace(state, time_logs=state.time_logs + (entry,))
    audit = record(state, employee_id, "Check In", ENTITY, entry.id, "Employee checked in", now=now)
    return Transition(next_state, audit)


def break_start(
    state: HRMState,
    employee_id: str,
    work_date: Optional[date] = None,
    *,
    now: Optional[datetime] = None,
) -> Transition:
    now = now or now_local()
    entry = _open_entry(state, employee_id, work_date or now.date())
    if entry.open_break is not None:
        raise AlreadyOnBreak("Already on break")

    updated = replace(entry, breaks=entry.breaks + (BreakInterval(break_in=now),))
    audit = record(state, employee_id, "Break Start", ENTITY, entry.id, "Employee started break", now=now)
    return Transition(_replace_log(state, updated), audit)


def break_end(
    state: HRMState,
    employee_id: str,
    work_date: Optional[date] = None,
    *,
    now: Optional[datetime] = None,
) -> Transition:
    now = now or now_local()
    entry = _open_entry(state, employee_id, work_date or now.date())

    # At most one break is open; close the latest one.
    idx = next((i for i in range(len(entry.breaks) - 1, -1, -1) if entry.breaks[i].is_open), None)
    if idx is None:
        raise NoActiveBreak("No active break")

    breaks = list(entry.breaks)
    breaks[idx] = replace(breaks[idx], break_out=now)
    updated = replace(entry, breaks=tuple(breaks))
    audit = record(state, employee_id, "Break End", ENTITY, entry.id, "Employee ended break", now=now)
    return Transition(_replace_log(state, updated), audit)


def check_out(
    state: HRMState,
    employee_id: str,
    work_date: Optional[date] = None,
    *,
    now: Optional[datetime] = None,
) -> Transition:
    now = now or now_local()
    work_date = work_date or now.date()

    entry = state.find_time_log(employee_id, work_date)
    if not entry or entry.check_in is None:
        raise NotCheckedIn("You are not checked in")
    if entry.check_out is not None:
        raise AlreadyCheckedOut("Already checked out")
    if not state.tasks_for(employee_id, work_date):
        raise TasksRequired("Please add your tasks before checking out")

    closed = replace(entry, check_out=now)
    total_hours = _calculator.worked_hours(closed, now=now)
    updated = replace(closed, total_hours=total_hours, status=TimeLogStatus.CHECKED_OUT)

    audit = record(
        state,
        employee_id,
        "Check Out",
        ENTITY,
        entry.id,
        f"Employee checked out. Total hours: {total_hours:.2f}",
        now=now,
    )
    return Transition(_replace_log(state, updated), audit)


def history_for(state: HRMState, employee_id: str, *, limit: int) -> list[TimeLogEntry]:
    rows = [t for t in state.time_logs if t.employee_id == employee_id]
    rows.sort(key=lambda t: t.work_date, reverse=True)
    return rows[:limit]
