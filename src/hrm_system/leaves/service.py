from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.permissions import manages, require_manages, require_reviewer, require_self_or_manager
from ..core.enums import RequestStatus
from ..state.holder import StateHolder
from ..users.model import Employee, SessionUser
from . import ledger
from .model import LeaveRequest


class LeaveService:
    """Use cases: comp-leave requests, manager decisions and grants."""

    def __init__(self, holder: StateHolder, *, enforce_balance: bool = False):
        self._holder = holder
        self._enforce_balance = enforce_balance

    def request(self, *, actor: SessionUser, start_date: date, end_date: date, reason: str) -> LeaveRequest:
        state = self._holder.apply(ledger.request_leave, actor.user_id, start_date, end_date, reason)
        return state.leave_requests[-1]

    def list_for(self, *, actor: SessionUser, employee_id: Optional[str] = None) -> list[LeaveRequest]:
        state = self._holder.state
        employee = state.get_employee(employee_id or actor.user_id)
        require_self_or_manager(actor, employee)
        return ledger.requests_for(state, employee.id)

    def pending_review(self, *, actor: SessionUser) -> list[LeaveRequest]:
        require_reviewer(actor)
        state = self._holder.state
        team = {e.id for e in state.employees if manages(actor, e) and e.id != actor.user_id}
        return [r for r in state.leave_requests if r.status == RequestStatus.PENDING and r.employee_id in team]

    def decide(
        self,
        *,
        actor: SessionUser,
        leave_id: str,
        approve: bool,
        comment: Optional[str] = None,
    ) -> LeaveRequest:
        state = self._holder.state
        req = state.get_leave_request(leave_id)
        require_manages(actor, state.get_employee(req.employee_id))
        state = self._holder.apply(
            ledger.decide,
            leave_id,
            actor.user_id,
            bool(approve),
            comment,
            enforce_balance=self._enforce_balance,
        )
        return state.get_leave_request(leave_id)

    def grant(self, *, actor: SessionUser, employee_id: str, days: int) -> Employee:
        require_manages(actor, self._holder.state.get_employee(employee_id))
        return self._holder.apply(ledger.grant_comp_leave, employee_id, days, actor.user_id).get_employee(employee_id)

    def balance(self, *, actor: SessionUser, employee_id: Optional[str] = None) -> dict:
        employee = self._holder.state.get_employee(employee_id or actor.user_id)
        require_self_or_manager(actor, employee)
        return {
            "earned": employee.comp_leaves_earned,
            "used": employee.comp_leaves_used,
            "available": ledger.available_balance(employee),
        }
