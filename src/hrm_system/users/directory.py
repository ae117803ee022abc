from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Mapping, Optional

from ..audit.trail import Transition, record
from ..common.ids import new_id
from ..common.validators import require_non_empty, require_non_negative, require_positive
from ..core.constants import DEFAULT_OVERTIME_MULTIPLIER, MAX_MONTHLY_HOUR_TARGET, MAX_TIER_OVERTIME_MULTIPLIER
from ..core.enums import MONTHLY_HOUR_TARGETS, Role
from ..core.exceptions import ValidationError
from ..state.model import HRMState
from .model import Employee, OvertimeSettings

ENTITY = "Employee"

UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "email",
        "password_hash",
        "phone",
        "position",
        "department",
        "employment_start_date",
        "manager_id",
        "monthly_hour_target",
        "hourly_rate",
        "role",
        "comp_leaves_earned",
        "comp_leaves_used",
        "profile_picture",
        "address",
        "date_of_birth",
        "emergency_contact",
    }
)


@dataclass(frozen=True)
class NewEmployee:
    name: str
    email: str
    password_hash: str
    role: Role
    monthly_hour_target: int
    hourly_rate: float
    manager_id: Optional[str] = None
    phone: str = ""
    position: str = ""
    department: str = ""
    employment_start_date: Optional[str] = None
    comp_leaves_earned: int = 0
    comp_leaves_used: int = 0
    address: Optional[str] = None
    date_of_birth: Optional[str] = None
    emergency_contact: Optional[str] = None


def default_multiplier(monthly_hour_target: int) -> float:
    if monthly_hour_target == MAX_MONTHLY_HOUR_TARGET:
        return MAX_TIER_OVERTIME_MULTIPLIER
    return DEFAULT_OVERTIME_MULTIPLIER


def _check_target(value: Any) -> int:
    try:
        target = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError("Monthly hour target must be a number")
    if target not in MONTHLY_HOUR_TARGETS:
        raise ValidationError(f"Monthly hour target must be one of {', '.join(map(str, MONTHLY_HOUR_TARGETS))}")
    return target


def _check_role(value: Any) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ValidationError("Invalid role")


def _check_email(state: HRMState, email: str, *, exclude_id: Optional[str] = None) -> str:
    email = require_non_empty(email, "Email")
    other = state.find_employee_by_email(email)
    if other and other.id != exclude_id:
        raise ValidationError("Email is already in use")
    return email


def _check_manager(state: HRMState, manager_id: Optional[str]) -> Optional[str]:
    if not manager_id:
        return None
    state.get_employee(manager_id)
    return manager_id


def create_employee(
    state: HRMState,
    new: NewEmployee,
    actor_id: str,
    *,
    now: Optional[datetime] = None,
) -> Transition:
    name = require_non_empty(new.name, "Name")
    email = _check_email(state, new.email)
    require_non_empty(new.password_hash, "Password")
    target = _check_target(new.monthly_hour_target)

    employee = Employee(
        id=new_id("emp"),
        name=name,
        email=email,
        password_hash=new.password_hash,
        role=_check_role(new.role),
        monthly_hour_target=target,
        hourly_rate=require_non_negative(new.hourly_rate, "Hourly rate"),
        manager_id=_check_manager(state, new.manager_id),
        phone=new.phone,
        position=new.position,
        department=new.department,
        employment_start_date=new.employment_start_date,
        comp_leaves_earned=int(require_non_negative(new.comp_leaves_earned, "Comp leaves earned")),
        comp_leaves_used=int(require_non_negative(new.comp_leaves_used, "Comp leaves used")),
        address=new.address,
        date_of_birth=new.date_of_birth,
        emergency_contact=new.emergency_contact,
    )
    settings = OvertimeSettings(employee_id=employee.id, overtime_multiplier=default_multiplier(target))

    next_state = replace(
        state,
        employees=state.employees + (employee,),
        overtime_settings=state.overtime_settings + (settings,),
    )
    audit = record(state, actor_id, "Employee Created", ENTITY, employee.id, f"Created employee: {name}", now=now)
    return Transition(next_state, audit)


def update_employee(
    state: HRMState,
    employee_id: str,
    updates: Mapping[str, Any],
    actor_id: str,
    *,
    now: Optional[datetime] = None,
) -> Transition:
    unknown = set(updates) - UPDATABLE_FIELDS
    if unknown:
        raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
    if not updates:
        raise ValidationError("Nothing to update")

    employee = state.get_employee(employee_id)
    changes = dict(updates)
    if "name" in changes:
        changes["name"] = require_non_empty(changes["name"], "Name")
    if "email" in changes:
        changes["email"] = _check_email(state, changes["email"], exclude_id=employee_id)
    if "role" in changes:
        changes["role"] = _check_role(changes["role"])
    if "monthly_hour_target" in changes:
        changes["monthly_hour_target"] = _check_target(changes["monthly_hour_target"])
    if "hourly_rate" in changes:
        changes["hourly_rate"] = require_non_negative(changes["hourly_rate"], "Hourly rate")
    if "manager_id" in changes:
        if changes["manager_id"] == employee_id:
            raise ValidationError("An employee cannot report to themselves")
        changes["manager_id"] = _check_manager(state, changes["manager_id"])
    for counter in ("comp_leaves_earned", "comp_leaves_used"):
        if counter in changes:
            changes[counter] = int(require_non_negative(changes[counter], counter.replace("_", " ").capitalize()))

    updated = replace(employee, **changes)
    next_state = replace(state, employees=tuple(updated if e.id == employee_id else e for e in state.employees))
    # Never echo the password hash into the audit trail.
    fields = sorted(k for k in updates if k != "password_hash") + (["password"] if "password_hash" in updates else [])
    audit = record(
        state, actor_id, "Employee Updated", ENTITY, employee_id, f"Updated fields: {', '.join(fields)}", now=now
    )
    return Transition(next_state, audit)


def delete_employee(
    state: HRMState,
    employee_id: str,
    actor_id: str,
    *,
    now: Optional[datetime] = None,
) -> Transition:
    """Remove an employee and every record keyed by them in one transition.

    Employees reporting to the removed one get ``manager_id`` cleared to ``None``.
    """
    employee = state.get_employee(employee_id)
    if employee_id == actor_id:
        raise ValidationError("You cannot delete your own account")

    keep = lambda rows: tuple(r for r in rows if r.employee_id != employee_id)  # noqa: E731
    employees = tuple(
        replace(e, manager_id=None) if e.manager_id == employee_id else e
        for e in state.employees
        if e.id != employee_id
    )
    next_state = replace(
        state,
        employees=employees,
        time_logs=keep(state.time_logs),
        tasks=keep(state.tasks),
        leave_requests=keep(state.leave_requests),
        payroll_entries=keep(state.payroll_entries),
        overtime_settings=keep(state.overtime_settings),
    )
    audit = record(
        state, actor_id, "Employee Deleted", ENTITY, employee_id, f"Deleted employee: {employee.name}", now=now
    )
    return Transition(next_state, audit)


def update_overtime_settings(
    state: HRMState,
    employee_id: str,
    multiplier: float,
    actor_id: str,
    *,
    now: Optional[datetime] = None,
) -> Transition:
    state.get_employee(employee_id)
    multiplier = require_positive(multiplier, "Overtime multiplier")

    existing = state.find_overtime_settings(employee_id)
    if existing:
        settings = tuple(
            replace(s, overtime_multiplier=multiplier) if s.employee_id == employee_id else s
            for s in state.overtime_settings
        )
    else:
        settings = state.overtime_settings + (OvertimeSettings(employee_id, multiplier),)

    audit = record(
        state,
        actor_id,
        "Overtime Settings Updated",
        "OvertimeSettings",
        employee_id,
        f"Overtime multiplier set to {multiplier:g}x",
        before=f"{existing.overtime_multiplier:g}" if existing else None,
        after=f"{multiplier:g}",
        now=now,
    )
    return Transition(replace(state, overtime_settings=settings), audit)
