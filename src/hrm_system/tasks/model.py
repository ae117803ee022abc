from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import TaskStatus


@dataclass(frozen=True)
class TaskEntry:
    id: str
    employee_id: str
    work_date: date
    description: str
    hours_spent: float
    status: TaskStatus
    manager_comment: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
