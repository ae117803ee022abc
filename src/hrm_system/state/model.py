from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.model import TimeLogEntry
from ..audit.model import AuditLogEntry
from ..core.exceptions import EntityNotFound
from ..leaves.model import LeaveRequest
from ..payroll.model import PayrollEntry
from ..tasks.model import TaskEntry
from ..users.model import Employee, OvertimeSettings


@dataclass(frozen=True)
class HRMState:
    """Aggregate root: every collection plus the current-user pointer.

    This is the only unit of persistence; nothing is saved field by field.
    """

    employees: tuple[Employee, ...] = ()
    time_logs: tuple[TimeLogEntry, ...] = ()
    tasks: tuple[TaskEntry, ...] = ()
    leave_requests: tuple[LeaveRequest, ...] = ()
    payroll_entries: tuple[PayrollEntry, ...] = ()
    overtime_settings: tuple[OvertimeSettings, ...] = ()
    audit_logs: tuple[AuditLogEntry, ...] = ()
    current_user: Optional[str] = None

    # Lookups
    def find_employee(self, employee_id: str) -> Optional[Employee]:
        return next((e for e in self.employees if e.id == employee_id), None)

    def get_employee(self, employee_id: str) -> Employee:
        emp = self.find_employee(employee_id)
        if not emp:
            raise EntityNotFound("Employee not found")
        return emp

    def find_employee_by_email(self, email: str) -> Optional[Employee]:
        needle = (email or "").strip().lower()
        return next((e for e in self.employees if e.email.lower() == needle), None)

    def find_time_log(self, employee_id: str, work_date: date) -> Optional[TimeLogEntry]:
        return next(
            (t for t in self.time_logs if t.employee_id == employee_id and t.work_date == work_date),
            None,
        )

    def tasks_for(self, employee_id: str, work_date: date) -> list[TaskEntry]:
        return [t for t in self.tasks if t.employee_id == employee_id and t.work_date == work_date]

    def get_task(self, task_id: str) -> TaskEntry:
        task = next((t for t in self.tasks if t.id == task_id), None)
        if not task:
            raise EntityNotFound("Task not found")
        return task

    def get_leave_request(self, leave_id: str) -> LeaveRequest:
        req = next((r for r in self.leave_requests if r.id == leave_id), None)
        if not req:
            raise EntityNotFound("Leave request not found")
        return req

    def get_payroll_entry(self, entry_id: str) -> PayrollEntry:
        entry = next((p for p in self.payroll_entries if p.id == entry_id), None)
        if not entry:
            raise EntityNotFound("Payroll entry not found")
        return entry

    def find_payroll_entry(self, employee_id: str, month: str) -> Optional[PayrollEntry]:
        return next(
            (p for p in self.payroll_entries if p.employee_id == employee_id and p.month == month),
            None,
        )

    def find_overtime_settings(self, employee_id: str) -> Optional[OvertimeSettings]:
        return next((s for s in self.overtime_settings if s.employee_id == employee_id), None)

    def team_of(self, manager_id: str) -> list[Employee]:
        return [e for e in self.employees if e.manager_id == manager_id]
