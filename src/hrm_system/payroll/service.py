from __future__ import annotations

import logging
from typing import Mapping, Optional

from ..common.csv_export import to_csv
from ..common.datetime_utils import month_bounds
from ..common.permissions import require_admin, require_self_or_manager
from ..core.exceptions import NothingToProcess
from ..state.holder import StateHolder
from ..users.model import SessionUser
from . import engine
from .model import PayrollEntry, PayrollRunReport

logger = logging.getLogger(__name__)


class PayrollService:
    """Use cases: run monthly payroll, review and adjust entries."""

    def __init__(self, holder: StateHolder):
        self._holder = holder

    def process(self, *, actor: SessionUser, month: str) -> PayrollRunReport:
        require_admin(actor)
        month_bounds(month)
        existing = {p.id for p in engine.entries_for_month(self._holder.state, month)}
        try:
            state = self._holder.apply(engine.process_month, month, actor.user_id)
        except NothingToProcess as e:
            return PayrollRunReport(month=month, created=0, skipped=len(existing), message=str(e))

        created = sum(1 for p in engine.entries_for_month(state, month) if p.id not in existing)
        logger.info("Payroll processed for %s by %s", month, actor.user_id)
        return PayrollRunReport(
            month=month,
            created=created,
            skipped=len(state.employees) - created,
            message=f"Processed payroll for {created} employees",
        )

    def list_month(self, *, actor: SessionUser, month: str) -> list[PayrollEntry]:
        require_admin(actor)
        month_bounds(month)
        return engine.entries_for_month(self._holder.state, month)

    def list_for(self, *, actor: SessionUser, employee_id: Optional[str] = None) -> list[PayrollEntry]:
        state = self._holder.state
        employee = state.get_employee(employee_id or actor.user_id)
        require_self_or_manager(actor, employee)
        rows = [p for p in state.payroll_entries if p.employee_id == employee.id]
        rows.sort(key=lambda p: p.month, reverse=True)
        return rows

    def update(self, *, actor: SessionUser, entry_id: str, patch: Mapping[str, object]) -> PayrollEntry:
        require_admin(actor)
        state = self._holder.apply(engine.update_payroll_entry, entry_id, dict(patch), actor.user_id)
        return state.get_payroll_entry(entry_id)

    def export_month_csv(self, *, actor: SessionUser, month: str) -> str:
        state = self._holder.state
        rows = []
        for entry in self.list_month(actor=actor, month=month):
            emp = state.find_employee(entry.employee_id)
            rows.append(
                {
                    "Employee": emp.name if emp else "Unknown",
                    "Month": entry.month,
                    "Regular Hours": entry.regular_hours,
                    "Overtime Hours": entry.overtime_hours,
                    "Hourly Rate (PKR)": emp.hourly_rate if emp else 0,
                    "Regular Pay (PKR)": entry.regular_pay,
                    "Overtime Pay (PKR)": entry.overtime_pay,
                    "Total Pay (PKR)": entry.total_pay,
                    "Status": entry.status.value,
                }
            )
        return to_csv(rows)
