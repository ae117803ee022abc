from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.permissions import manages, require_manages, require_reviewer, require_self_or_manager
from ..core.enums import TaskStatus
from ..core.exceptions import AuthorizationError
from ..state.holder import StateHolder
from ..users.model import SessionUser
from . import log
from .model import TaskEntry


class TaskService:
    def __init__(self, holder: StateHolder):
        self._holder = holder

    def add(
        self,
        *,
        actor: SessionUser,
        description: str,
        hours: float,
        work_date: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> TaskEntry:
        now = now or now_local()
        state = self._holder.apply(log.add_task, actor.user_id, work_date, description, hours, now=now)
        return state.tasks[-1]

    def delete(self, *, actor: SessionUser, task_id: str) -> None:
        task = self._holder.state.get_task(task_id)
        if task.employee_id != actor.user_id:
            raise AuthorizationError("You can only delete your own tasks")
        self._holder.apply(log.delete_task, task_id, actor.user_id)

    def list_for(
        self,
        *,
        actor: SessionUser,
        employee_id: Optional[str] = None,
        work_date: Optional[date] = None,
    ) -> list[TaskEntry]:
        state = self._holder.state
        employee = state.get_employee(employee_id or actor.user_id)
        require_self_or_manager(actor, employee)
        rows = [t for t in state.tasks if t.employee_id == employee.id]
        if work_date is not None:
            rows = [t for t in rows if t.work_date == work_date]
        rows.sort(key=lambda t: t.work_date, reverse=True)
        return rows

    def pending_review(self, *, actor: SessionUser) -> list[TaskEntry]:
        """Pending tasks of the reviewer's team, oldest day first."""
        require_reviewer(actor)
        state = self._holder.state
        team = {e.id for e in state.employees if manages(actor, e) and e.id != actor.user_id}
        rows = [t for t in state.tasks if t.status == TaskStatus.PENDING and t.employee_id in team]
        rows.sort(key=lambda t: t.work_date)
        return rows

    def _check_reviewer(self, actor: SessionUser, task_id: str) -> None:
        state = self._holder.state
        task = state.get_task(task_id)
        require_manages(actor, state.get_employee(task.employee_id))

    def approve(self, *, actor: SessionUser, task_id: str, comment: Optional[str] = None) -> TaskEntry:
        self._check_reviewer(actor, task_id)
        return self._holder.apply(log.review_approve, task_id, actor.user_id, comment).get_task(task_id)

    def comment(self, *, actor: SessionUser, task_id: str, comment: str) -> TaskEntry:
        self._check_reviewer(actor, task_id)
        return self._holder.apply(log.review_comment, task_id, actor.user_id, comment).get_task(task_id)
