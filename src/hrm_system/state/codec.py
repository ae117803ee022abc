"""Serialize :class:`HRMState` to and from the persisted JSON document.

The document uses the camelCase layout shared by every client of the store, so
field names here are part of the wire format.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from ..attendance.model import BreakInterval, TimeLogEntry
from ..audit.model import AuditLogEntry
from ..common.datetime_utils import parse_iso_date, parse_iso_datetime, to_iso
from ..core.enums import PayrollStatus, RequestStatus, Role, TaskStatus, TimeLogStatus
from ..leaves.model import LeaveRequest
from ..payroll.model import PayrollEntry
from ..tasks.model import TaskEntry
from ..users.model import Employee, OvertimeSettings
from .model import HRMState


def _drop_none(d: dict) -> dict:
    return {k: v for k, v in d.items() if v is not None}


# Encoding
def employee_to_dict(e: Employee) -> dict:
    d = _drop_none(
        {
            "id": e.id,
            "name": e.name,
            "email": e.email,
            "passwordHash": e.password_hash,
            "phone": e.phone,
            "position": e.position,
            "department": e.department,
            "employmentStartDate": e.employment_start_date,
            "managerId": e.manager_id,
            "monthlyHourTarget": e.monthly_hour_target,
            "hourlyRate": e.hourly_rate,
            "role": e.role.value,
            "compLeavesEarned": e.comp_leaves_earned,
            "compLeavesUsed": e.comp_leaves_used,
            "profilePicture": e.profile_picture,
            "address": e.address,
            "dateOfBirth": e.date_of_birth,
            "emergencyContact": e.emergency_contact,
        }
    )
    # managerId is always present, null for top-level employees.
    d["managerId"] = e.manager_id
    return d


def time_log_to_dict(t: TimeLogEntry) -> dict:
    return {
        "id": t.id,
        "employeeId": t.employee_id,
        "date": t.work_date.isoformat(),
        "checkIn": to_iso(t.check_in),
        "checkOut": to_iso(t.check_out),
        "breaks": [{"breakIn": to_iso(b.break_in), "breakOut": to_iso(b.break_out)} for b in t.breaks],
        "totalHours": t.total_hours,
        "status": t.status.value,
    }


def task_to_dict(t: TaskEntry) -> dict:
    return _drop_none(
        {
            "id": t.id,
            "employeeId": t.employee_id,
            "date": t.work_date.isoformat(),
            "description": t.description,
            "hoursSpent": t.hours_spent,
            "status": t.status.value,
            "managerComment": t.manager_comment,
            "reviewedBy": t.reviewed_by,
            "reviewedAt": to_iso(t.reviewed_at),
        }
    )


def leave_to_dict(r: LeaveRequest) -> dict:
    return _drop_none(
        {
            "id": r.id,
            "employeeId": r.employee_id,
            "startDate": r.start_date.isoformat(),
            "endDate": r.end_date.isoformat(),
            "reason": r.reason,
            "status": r.status.value,
            "requestedAt": to_iso(r.requested_at),
            "reviewedBy": r.reviewed_by,
            "reviewedAt": to_iso(r.reviewed_at),
            "reviewComment": r.review_comment,
        }
    )


def payroll_to_dict(p: PayrollEntry) -> dict:
    return _drop_none(
        {
            "id": p.id,
            "employeeId": p.employee_id,
            "month": p.month,
            "regularHours": p.regular_hours,
            "overtimeHours": p.overtime_hours,
            "regularPay": p.regular_pay,
            "overtimePay": p.overtime_pay,
            "totalPay": p.total_pay,
            "status": p.status.value,
            "processedBy": p.processed_by,
            "processedAt": to_iso(p.processed_at),
            "notes": p.notes,
        }
    )


def audit_to_dict(a: AuditLogEntry) -> dict:
    return _drop_none(
        {
            "id": a.id,
            "timestamp": to_iso(a.timestamp),
            "userId": a.user_id,
            "userName": a.user_name,
            "action": a.action,
            "entityType": a.entity_type,
            "entityId": a.entity_id,
            "changes": a.changes,
            "previousValue": a.previous_value,
            "newValue": a.new_value,
        }
    )


def to_document(state: HRMState) -> dict:
    return {
        "employees": [employee_to_dict(e) for e in state.employees],
        "timeLogs": [time_log_to_dict(t) for t in state.time_logs],
        "tasks": [task_to_dict(t) for t in state.tasks],
        "leaveRequests": [leave_to_dict(r) for r in state.leave_requests],
        "payrollEntries": [payroll_to_dict(p) for p in state.payroll_entries],
        "overtimeSettings": [
            {"employeeId": s.employee_id, "overtimeMultiplier": s.overtime_multiplier} for s in state.overtime_settings
        ],
        "auditLogs": [audit_to_dict(a) for a in state.audit_logs],
        "currentUser": state.current_user,
    }


# Decoding
def _employee(d: dict) -> Employee:
    return Employee(
        id=str(d["id"]),
        name=d.get("name", ""),
        email=d.get("email", ""),
        password_hash=d.get("passwordHash", ""),
        role=Role(d.get("role", Role.EMPLOYEE.value)),
        monthly_hour_target=int(d.get("monthlyHourTarget", 80)),
        hourly_rate=float(d.get("hourlyRate", 0)),
        manager_id=d.get("managerId"),
        phone=d.get("phone", ""),
        position=d.get("position", ""),
        department=d.get("department", ""),
        employment_start_date=d.get("employmentStartDate"),
        comp_leaves_earned=int(d.get("compLeavesEarned", 0)),
        comp_leaves_used=int(d.get("compLeavesUsed", 0)),
        profile_picture=d.get("profilePicture"),
        address=d.get("address"),
        date_of_birth=d.get("dateOfBirth"),
        emergency_contact=d.get("emergencyContact"),
    )


def _time_log(d: dict) -> TimeLogEntry:
    return TimeLogEntry(
        id=str(d["id"]),
        employee_id=str(d["employeeId"]),
        work_date=parse_iso_date(d["date"]),
        check_in=parse_iso_datetime(d.get("checkIn")),
        check_out=parse_iso_datetime(d.get("checkOut")),
        breaks=tuple(
            BreakInterval(break_in=parse_iso_datetime(b["breakIn"]), break_out=parse_iso_datetime(b.get("breakOut")))
            for b in d.get("breaks") or []
        ),
        total_hours=float(d.get("totalHours", 0)),
        status=TimeLogStatus(d.get("status", TimeLogStatus.CHECKED_IN.value)),
    )


def _task(d: dict) -> TaskEntry:
    return TaskEntry(
        id=str(d["id"]),
        employee_id=str(d["employeeId"]),
        work_date=parse_iso_date(d["date"]),
        description=d.get("description", ""),
        hours_spent=float(d.get("hoursSpent", 0)),
        status=TaskStatus(d.get("status", TaskStatus.PENDING.value)),
        manager_comment=d.get("managerComment"),
        reviewed_by=d.get("reviewedBy"),
        reviewed_at=parse_iso_datetime(d.get("reviewedAt")),
    )


def _leave(d: dict) -> LeaveRequest:
    return LeaveRequest(
        id=str(d["id"]),
        employee_id=str(d["employeeId"]),
        start_date=parse_iso_date(d["startDate"]),
        end_date=parse_iso_date(d["endDate"]),
        reason=d.get("reason", ""),
        status=RequestStatus(d.get("status", RequestStatus.PENDING.value)),
        requested_at=parse_iso_datetime(d["requestedAt"]),
        reviewed_by=d.get("reviewedBy"),
        reviewed_at=parse_iso_datetime(d.get("reviewedAt")),
        review_comment=d.get("reviewComment"),
    )


def _payroll(d: dict) -> PayrollEntry:
    return PayrollEntry(
        id=str(d["id"]),
        employee_id=str(d["employeeId"]),
        month=d["month"],
        regular_hours=float(d.get("regularHours", 0)),
        overtime_hours=float(d.get("overtimeHours", 0)),
        regular_pay=float(d.get("regularPay", 0)),
        overtime_pay=float(d.get("overtimePay", 0)),
        total_pay=float(d.get("totalPay", 0)),
        status=PayrollStatus(d.get("status", PayrollStatus.PENDING.value)),
        processed_by=d.get("processedBy"),
        processed_at=parse_iso_datetime(d.get("processedAt")),
        notes=d.get("notes"),
    )


def _audit(d: dict) -> AuditLogEntry:
    return AuditLogEntry(
        id=str(d["id"]),
        timestamp=parse_iso_datetime(d["timestamp"]),
        user_id=str(d.get("userId", "")),
        user_name=d.get("userName", ""),
        action=d.get("action", ""),
        entity_type=d.get("entityType", ""),
        entity_id=str(d.get("entityId", "")),
        changes=d.get("changes", ""),
        previous_value=d.get("previousValue"),
        new_value=d.get("newValue"),
    )


def from_document(doc: dict) -> HRMState:
    return HRMState(
        employees=tuple(_employee(d) for d in doc.get("employees") or []),
        time_logs=tuple(_time_log(d) for d in doc.get("timeLogs") or []),
        tasks=tuple(_task(d) for d in doc.get("tasks") or []),
        leave_requests=tuple(_leave(d) for d in doc.get("leaveRequests") or []),
        payroll_entries=tuple(_payroll(d) for d in doc.get("payrollEntries") or []),
        overtime_settings=tuple(
            OvertimeSettings(employee_id=str(d["employeeId"]), overtime_multiplier=float(d["overtimeMultiplier"]))
            for d in doc.get("overtimeSettings") or []
        ),
        audit_logs=tuple(_audit(d) for d in doc.get("auditLogs") or []),
        current_user=doc.get("currentUser"),
    )


def fingerprint(doc: Optional[dict]) -> str:
    """Stable serialization used to tell whether a fetched document changed."""
    return json.dumps(doc, sort_keys=True, separators=(",", ":"), default=str)


def dumps(state: HRMState) -> str:
    return json.dumps(to_document(state))


def loads(raw: str) -> HRMState:
    data: Any = json.loads(raw)
    return from_document(data)
