from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.csv_export import to_csv
from ..common.datetime_utils import now_local
from ..common.permissions import require_reviewer, require_self_or_manager
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import Role
from ..state.holder import StateHolder
from ..users.model import Employee, SessionUser
from . import ledger
from .model import TimeLogEntry


@dataclass(frozen=True)
class TodayStatus:
    employee_id: str
    work_date: date
    entry: Optional[TimeLogEntry]
    hours_so_far: float
    tasks_logged: int

    @property
    def on_break(self) -> bool:
        return bool(self.entry and self.entry.open_break is not None)


class AttendanceService:
    """Use cases: check-in/out and breaks for the signed-in employee."""

    def __init__(self, holder: StateHolder, *, history_limit: int = DEFAULT_HISTORY_LIMIT):
        self._holder = holder
        self._history_limit = history_limit

    def check_in(self, *, actor: SessionUser, now: Optional[datetime] = None) -> TimeLogEntry:
        now = now or now_local()
        state = self._holder.apply(ledger.check_in, actor.user_id, now.date(), now=now)
        return state.find_time_log(actor.user_id, now.date())  # type: ignore[return-value]

    def start_break(self, *, actor: SessionUser, now: Optional[datetime] = None) -> TimeLogEntry:
        now = now or now_local()
        state = self._holder.apply(ledger.break_start, actor.user_id, now.date(), now=now)
        return state.find_time_log(actor.user_id, now.date())  # type: ignore[return-value]

    def end_break(self, *, actor: SessionUser, now: Optional[datetime] = None) -> TimeLogEntry:
        now = now or now_local()
        state = self._holder.apply(ledger.break_end, actor.user_id, now.date(), now=now)
        return state.find_time_log(actor.user_id, now.date())  # type: ignore[return-value]

    def check_out(self, *, actor: SessionUser, now: Optional[datetime] = None) -> TimeLogEntry:
        now = now or now_local()
        state = self._holder.apply(ledger.check_out, actor.user_id, now.date(), now=now)
        return state.find_time_log(actor.user_id, now.date())  # type: ignore[return-value]

    def _status(self, employee: Employee, now: datetime) -> TodayStatus:
        state = self._holder.state
        entry = state.find_time_log(employee.id, now.date())
        return TodayStatus(
            employee_id=employee.id,
            work_date=now.date(),
            entry=entry,
            hours_so_far=ledger.hours_worked_so_far(entry, now),
            tasks_logged=len(state.tasks_for(employee.id, now.date())),
        )

    def today(self, *, actor: SessionUser, now: Optional[datetime] = None) -> TodayStatus:
        employee = self._holder.state.get_employee(actor.user_id)
        return self._status(employee, now or now_local())

    def team_today(self, *, actor: SessionUser, now: Optional[datetime] = None) -> list[TodayStatus]:
        require_reviewer(actor)
        now = now or now_local()
        state = self._holder.state
        team = state.employees if actor.role == Role.ADMIN else state.team_of(actor.user_id)
        return [self._status(e, now) for e in team]

    def history(
        self,
        *,
        actor: SessionUser,
        employee_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[TimeLogEntry]:
        state = self._holder.state
        employee = state.get_employee(employee_id or actor.user_id)
        require_self_or_manager(actor, employee)
        return ledger.history_for(state, employee.id, limit=limit or self._history_limit)

    def export_history_csv(self, *, actor: SessionUser, employee_id: Optional[str] = None) -> str:
        rows = self.history(actor=actor, employee_id=employee_id)
        return to_csv(
            [
                {
                    "Date": t.work_date.isoformat(),
                    "Check In": t.check_in.strftime("%I:%M %p") if t.check_in else "",
                    "Check Out": t.check_out.strftime("%I:%M %p") if t.check_out else "",
                    "Total Hours": f"{t.total_hours:.2f}",
                    "Breaks": len(t.breaks),
                    "Status": t.status.value,
                }
                for t in rows
            ]
        )
