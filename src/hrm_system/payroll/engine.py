"""Monthly payroll generation.

Overtime pay is held back while an employee still has unused comp leave:
hours above the monthly target only count as overtime once the comp-leave
balance is exhausted. The comp leave itself is not consumed here.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Iterable, Mapping, Optional

from ..attendance.model import TimeLogEntry
from ..audit.trail import Transition, record
from ..common.datetime_utils import month_bounds, now_local
from ..common.ids import new_id
from ..common.validators import optional_text, require_non_negative
from ..core.constants import DEFAULT_OVERTIME_MULTIPLIER
from ..core.enums import PayrollStatus
from ..core.exceptions import NothingToProcess, ValidationError
from ..state.model import HRMState
from ..users.model import Employee, OvertimeSettings
from .model import PayrollEntry

ENTITY = "Payroll"

EDITABLE_FIELDS = frozenset({"regular_hours", "overtime_hours", "status", "notes"})


@dataclass(frozen=True)
class PayLine:
    employee_id: str
    regular_hours: float
    overtime_hours: float
    regular_pay: float
    overtime_pay: float
    total_pay: float


def compute_pay(regular_hours: float, overtime_hours: float, hourly_rate: float, multiplier: float) -> tuple[float, float, float]:
    regular_pay = regular_hours * hourly_rate
    overtime_pay = overtime_hours * hourly_rate * multiplier
    return regular_pay, overtime_pay, regular_pay + overtime_pay


def split_hours(total_hours: float, target: int, comp_leaves_available: int) -> tuple[float, float]:
    """Return ``(regular, overtime)`` hours for a month."""
    regular = min(total_hours, float(target))
    overtime = total_hours - target if total_hours > target and comp_leaves_available <= 0 else 0.0
    return regular, overtime


def multiplier_for(settings: Iterable[OvertimeSettings], employee_id: str) -> float:
    found = next((s for s in settings if s.employee_id == employee_id), None)
    return found.overtime_multiplier if found else DEFAULT_OVERTIME_MULTIPLIER


def compute_line(
    employee: Employee,
    month: str,
    time_logs: Iterable[TimeLogEntry],
    overtime_settings: Iterable[OvertimeSettings],
) -> PayLine:
    start, end = month_bounds(month)
    total_hours = sum(
        t.total_hours
        for t in time_logs
        if t.employee_id == employee.id and start <= t.work_date <= end and t.check_out is not None
    )
    regular, overtime = split_hours(total_hours, employee.monthly_hour_target, employee.comp_leaves_available)
    regular_pay, overtime_pay, total_pay = compute_pay(
        regular, overtime, employee.hourly_rate, multiplier_for(overtime_settings, employee.id)
    )
    return PayLine(
        employee_id=employee.id,
        regular_hours=regular,
        overtime_hours=overtime,
        regular_pay=regular_pay,
        overtime_pay=overtime_pay,
        total_pay=total_pay,
    )


def process_month(
    state: HRMState,
    month: str,
    actor_id: str,
    *,
    now: Optional[datetime] = None,
) -> Transition:
    """Create pending entries for every employee without one for ``month``.

    Raises :class:`NothingToProcess` when every employee is already covered.
    """
    now = now or now_local()
    month_bounds(month)

    created: list[PayrollEntry] = []
    for emp in state.employees:
        if state.find_payroll_entry(emp.id, month):
            continue
        line = compute_line(emp, month, state.time_logs, state.overtime_settings)
        created.append(
            PayrollEntry(
                id=new_id("payroll"),
                employee_id=emp.id,
                month=month,
                regular_hours=line.regular_hours,
                overtime_hours=line.overtime_hours,
                regular_pay=line.regular_pay,
                overtime_pay=line.overtime_pay,
                total_pay=line.total_pay,
                status=PayrollStatus.PENDING,
                processed_by=actor_id,
                processed_at=now,
            )
        )

    if not created:
        raise NothingToProcess("Payroll already processed for this month")

    next_state = replace(state, payroll_entries=state.payroll_entries + tuple(created))
    audit = record(
        state,
        actor_id,
        "Payroll Processed",
        ENTITY,
        month,
        f"Processed payroll for {len(created)} employees",
        now=now,
    )
    return Transition(next_state, audit)


def update_payroll_entry(
    state: HRMState,
    entry_id: str,
    patch: Mapping[str, object],
    actor_id: str,
    *,
    now: Optional[datetime] = None,
) -> Transition:
    """Edit an entry after processing.

    When hours change, pay is recomputed with the employee's *current* rate and
    multiplier, not the ones in force when the entry was generated.
    """
    unknown = set(patch) - EDITABLE_FIELDS
    if unknown:
        raise ValidationError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")
    if not patch:
        raise ValidationError("Nothing to update")

    entry = state.get_payroll_entry(entry_id)
    changes: dict = {}
    if "regular_hours" in patch:
        changes["regular_hours"] = require_non_negative(patch["regular_hours"], "Regular hours")
    if "overtime_hours" in patch:
        changes["overtime_hours"] = require_non_negative(patch["overtime_hours"], "Overtime hours")
    if "status" in patch:
        try:
            changes["status"] = PayrollStatus(patch["status"])
        except ValueError:
            raise ValidationError("Invalid payroll status")
    if "notes" in patch:
        changes["notes"] = optional_text(patch["notes"], "Notes")

    updated = replace(entry, **changes)
    if "regular_hours" in changes or "overtime_hours" in changes:
        employee = state.get_employee(entry.employee_id)
        regular_pay, overtime_pay, total_pay = compute_pay(
            updated.regular_hours,
            updated.overtime_hours,
            employee.hourly_rate,
            multiplier_for(state.overtime_settings, employee.id),
        )
        updated = replace(updated, regular_pay=regular_pay, overtime_pay=overtime_pay, total_pay=total_pay)

    next_state = replace(
        state,
        payroll_entries=tuple(updated if p.id == entry_id else p for p in state.payroll_entries),
    )
    audit = record(
        state,
        actor_id,
        "Payroll Updated",
        ENTITY,
        entry_id,
        f"Updated: {', '.join(sorted(patch))}",
        before=f"{entry.total_pay:g}",
        after=f"{updated.total_pay:g}",
        now=now,
    )
    return Transition(next_state, audit)


def entries_for_month(state: HRMState, month: str) -> list[PayrollEntry]:
    return [p for p in state.payroll_entries if p.month == month]
