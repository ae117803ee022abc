from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ..audit.trail import Transition, record
from ..common.datetime_utils import now_local
from ..common.ids import new_id
from ..common.validators import optional_text, require_non_empty, require_positive
from ..core.enums import TaskStatus
from ..core.exceptions import CommentRequired, InvalidTask, TaskAlreadyReviewed, TaskLocked
from ..state.model import HRMState
from .model import TaskEntry

ENTITY = "Task"


def _replace_task(state: HRMState, updated: TaskEntry) -> HRMState:
    return replace(state, tasks=tuple(updated if t.id == updated.id else t for t in state.tasks))


def add_task(
    state: HRMState,
    employee_id: str,
    work_date: Optional[date],
    description: str,
    hours: float,
    *,
    now: Optional[datetime] = None,
) -> Transition:
    now = now or now_local()
    description = require_non_empty(description, "Description", error=InvalidTask)
    hours = require_positive(hours, "Hours", error=InvalidTask)
    state.get_employee(employee_id)

    task = TaskEntry(
        id=new_id("task"),
        employee_id=employee_id,
        work_date=work_date or now.date(),
        description=description,
        hours_spent=hours,
        status=TaskStatus.PENDING,
    )
    next_state = replace(state, tasks=state.tasks + (task,))
    audit = record(
        state, employee_id, "Task Created", ENTITY, task.id, f"Task added: {description} ({hours:g} hrs)", now=now
    )
    return Transition(next_state, audit)


def delete_task(state: HRMState, task_id: str, actor_id: str, *, now: Optional[datetime] = None) -> Transition:
    task = state.get_task(task_id)
    if task.status != TaskStatus.PENDING:
        raise TaskLocked("Reviewed tasks cannot be deleted")

    next_state = replace(state, tasks=tuple(t for t in state.tasks if t.id != task_id))
    audit = record(state, actor_id, "Task Deleted", ENTITY, task_id, f"Task deleted: {task.description}", now=now)
    return Transition(next_state, audit)


def _require_pending(task: TaskEntry) -> None:
    if task.status != TaskStatus.PENDING:
        raise TaskAlreadyReviewed("Task has already been reviewed")


def review_approve(
    state: HRMState,
    task_id: str,
    reviewer_id: str,
    comment: Optional[str] = None,
    *,
    now: Optional[datetime] = None,
) -> Transition:
    now = now or now_local()
    task = state.get_task(task_id)
    _require_pending(task)
    comment = optional_text(comment)

    updated = replace(
        task,
        status=TaskStatus.APPROVED,
        manager_comment=comment,
        reviewed_by=reviewer_id,
        reviewed_at=now,
    )
    changes = f"Approved with comment: {comment}" if comment else "Task approved"
    audit = record(state, reviewer_id, "Task Approved", ENTITY, task_id, changes, now=now)
    return Transition(_replace_task(state, updated), audit)


def review_comment(
    state: HRMState,
    task_id: str,
    reviewer_id: str,
    comment: str,
    *,
    now: Optional[datetime] = None,
) -> Transition:
    now = now or now_local()
    comment = require_non_empty(comment, "Comment", error=CommentRequired)
    task = state.get_task(task_id)
    _require_pending(task)

    updated = replace(
        task,
        status=TaskStatus.COMMENTED,
        manager_comment=comment,
        reviewed_by=reviewer_id,
        reviewed_at=now,
    )
    audit = record(state, reviewer_id, "Task Reviewed", ENTITY, task_id, f"Comment added: {comment}", now=now)
    return Transition(_replace_task(state, updated), audit)
