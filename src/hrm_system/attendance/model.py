from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import TimeLogStatus


@dataclass(frozen=True)
class BreakInterval:
    break_in: datetime
    break_out: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.break_out is None


@dataclass(frozen=True)
class TimeLogEntry:
    """Domain entity: one employee's attendance for one calendar day.

    ``total_hours`` is only authoritative once ``check_out`` is set.
    """

    id: str
    employee_id: str
    work_date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    breaks: tuple[BreakInterval, ...]
    total_hours: float
    status: TimeLogStatus

    @property
    def is_open(self) -> bool:
        return self.check_in is not None and self.check_out is None

    @property
    def open_break(self) -> Optional[BreakInterval]:
        for b in reversed(self.breaks):
            if b.is_open:
                return b
        return None
