"""Comp-leave balances and the leave request approval workflow."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ..audit.trail import Transition, record
from ..common.datetime_utils import now_local
from ..common.ids import new_id
from ..common.validators import optional_text, require_non_empty
from ..core.enums import RequestStatus
from ..core.exceptions import InsufficientCompLeave, InvalidRange, MissingReason, NotPending, ValidationError
from ..state.model import HRMState
from ..users.model import Employee
from .model import LeaveRequest

ENTITY = "LeaveRequest"


def available_balance(employee: Employee) -> int:
    return employee.comp_leaves_earned - employee.comp_leaves_used


def _replace_employee(state: HRMState, updated: Employee) -> HRMState:
    return replace(state, employees=tuple(updated if e.id == updated.id else e for e in state.employees))


def request_leave(
    state: HRMState,
    employee_id: str,
    start_date: date,
    end_date: date,
    reason: str,
    *,
    now: Optional[datetime] = None,
) -> Transition:
    now = now or now_local()
    if end_date < start_date:
        raise InvalidRange("End date must be on or after start date")
    reason = require_non_empty(reason, "Reason", error=MissingReason)
    state.get_employee(employee_id)

    req = LeaveRequest(
        id=new_id("leave"),
        employee_id=employee_id,
        start_date=start_date,
        end_date=end_date,
        reason=reason,
        status=RequestStatus.PENDING,
        requested_at=now,
    )
    next_state = replace(state, leave_requests=state.leave_requests + (req,))
    audit = record(
        state,
        employee_id,
        "Leave Request Created",
        ENTITY,
        req.id,
        f"Leave requested: {start_date.isoformat()} to {end_date.isoformat()}",
        now=now,
    )
    return Transition(next_state, audit)


def decide(
    state: HRMState,
    leave_id: str,
    reviewer_id: str,
    approve: bool,
    comment: Optional[str] = None,
    *,
    enforce_balance: bool = False,
    now: Optional[datetime] = None,
) -> Transition:
    """Approve or reject a pending request; both outcomes are terminal.

    Approval uses exactly one comp leave whatever the length of the range.
    With ``enforce_balance`` an employee with no comp leave left cannot be
    approved; by default the used counter may run past the earned one.
    """
    now = now or now_local()
    req = state.get_leave_request(leave_id)
    if req.status != RequestStatus.PENDING:
        raise NotPending("Leave request has already been decided")

    employee = state.get_employee(req.employee_id)
    if approve and enforce_balance and available_balance(employee) <= 0:
        raise InsufficientCompLeave("No comp leave available")

    comment = optional_text(comment)
    updated = replace(
        req,
        status=RequestStatus.APPROVED if approve else RequestStatus.REJECTED,
        reviewed_by=reviewer_id,
        reviewed_at=now,
        review_comment=comment,
    )
    next_state = replace(
        state,
        leave_requests=tuple(updated if r.id == leave_id else r for r in state.leave_requests),
    )

    before = after = None
    if approve:
        next_state = _replace_employee(next_state, replace(employee, comp_leaves_used=employee.comp_leaves_used + 1))
        before, after = str(employee.comp_leaves_used), str(employee.comp_leaves_used + 1)

    verdict = "approved" if approve else "rejected"
    audit = record(
        state,
        reviewer_id,
        "Leave Approved" if approve else "Leave Rejected",
        ENTITY,
        leave_id,
        f"Leave {verdict}: {comment}" if comment else f"Leave {verdict}",
        before=before,
        after=after,
        now=now,
    )
    return Transition(next_state, audit)


def grant_comp_leave(
    state: HRMState,
    employee_id: str,
    days: int,
    actor_id: str,
    *,
    now: Optional[datetime] = None,
) -> Transition:
    if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
        raise ValidationError("Days must be a positive whole number")
    employee = state.get_employee(employee_id)

    earned = employee.comp_leaves_earned + days
    next_state = _replace_employee(state, replace(employee, comp_leaves_earned=earned))
    audit = record(
        state,
        actor_id,
        "Comp Leave Granted",
        "Employee",
        employee_id,
        f"Granted {days} comp leave(s)",
        before=str(employee.comp_leaves_earned),
        after=str(earned),
        now=now,
    )
    return Transition(next_state, audit)


def requests_for(state: HRMState, employee_id: str) -> list[LeaveRequest]:
    rows = [r for r in state.leave_requests if r.employee_id == employee_id]
    rows.sort(key=lambda r: r.requested_at, reverse=True)
    return rows
