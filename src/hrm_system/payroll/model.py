from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import PayrollStatus


@dataclass(frozen=True)
class PayrollEntry:
    """One employee's payroll for one month (``YYYY-MM``)."""

    id: str
    employee_id: str
    month: str
    regular_hours: float
    overtime_hours: float
    regular_pay: float
    overtime_pay: float
    total_pay: float
    status: PayrollStatus
    processed_by: Optional[str] = None
    processed_at: Optional[datetime] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class PayrollRunReport:
    """Outcome of processing a month; ``created == 0`` means nothing to do."""

    month: str
    created: int
    skipped: int
    message: str
