from __future__ import annotations

from typing import Any, Mapping, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.csv_export import to_csv
from ..common.permissions import require_admin, require_self_or_manager
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from ..state.holder import StateHolder
from .model import Employee, OvertimeSettings, SessionUser
from . import directory
from .directory import NewEmployee

# Fields an employee may change on their own profile.
SELF_SERVICE_FIELDS = frozenset({"phone", "address", "emergency_contact", "profile_picture", "password"})


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, holder: StateHolder):
        self._holder = holder

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._holder.state.find_employee_by_email(email)
        if not user:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # Unknown hash method, e.g. a hand-edited document
            ok = False
        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser(user_id=user.id, name=user.name, role=user.role, manager_id=user.manager_id)

    def current(self, user_id: str) -> Optional[SessionUser]:
        """Re-resolve a session against the current state; None once deleted."""
        user = self._holder.state.find_employee(user_id)
        if not user:
            return None
        return SessionUser(user_id=user.id, name=user.name, role=user.role, manager_id=user.manager_id)


def _hash_password(password: str) -> str:
    return generate_password_hash(require_non_empty(password, "Password"))


class EmployeeService:
    def __init__(self, holder: StateHolder):
        self._holder = holder

    def list_all(self, *, actor: SessionUser) -> list[Employee]:
        require_admin(actor)
        return list(self._holder.state.employees)

    def team(self, *, actor: SessionUser) -> list[Employee]:
        return self._holder.state.team_of(actor.user_id)

    def get(self, *, actor: SessionUser, employee_id: str) -> Employee:
        employee = self._holder.state.get_employee(employee_id)
        require_self_or_manager(actor, employee)
        return employee

    def create(self, *, actor: SessionUser, password: str, **fields: Any) -> Employee:
        require_admin(actor)
        try:
            new = NewEmployee(password_hash=_hash_password(password), **fields)
        except TypeError as e:
            raise ValidationError(f"Invalid employee fields: {e}")
        state = self._holder.apply(directory.create_employee, new, actor.user_id)
        return state.employees[-1]

    def update(self, *, actor: SessionUser, employee_id: str, updates: Mapping[str, Any]) -> Employee:
        updates = dict(updates)
        if "password_hash" in updates:
            raise ValidationError("Use the password field to change a password")
        if actor.role != Role.ADMIN:
            if employee_id != actor.user_id or set(updates) - SELF_SERVICE_FIELDS:
                require_admin(actor)
        if "password" in updates:
            updates["password_hash"] = _hash_password(updates.pop("password"))
        state = self._holder.apply(directory.update_employee, employee_id, updates, actor.user_id)
        return state.get_employee(employee_id)

    def delete(self, *, actor: SessionUser, employee_id: str) -> None:
        require_admin(actor)
        self._holder.apply(directory.delete_employee, employee_id, actor.user_id)

    def overtime_settings(self, *, actor: SessionUser) -> list[OvertimeSettings]:
        require_admin(actor)
        return list(self._holder.state.overtime_settings)

    def set_overtime_multiplier(self, *, actor: SessionUser, employee_id: str, multiplier: float) -> OvertimeSettings:
        require_admin(actor)
        state = self._holder.apply(directory.update_overtime_settings, employee_id, multiplier, actor.user_id)
        return state.find_overtime_settings(employee_id)  # type: ignore[return-value]

    def export_csv(self, *, actor: SessionUser) -> str:
        return to_csv(
            [
                {
                    "Name": e.name,
                    "Email": e.email,
                    "Phone": e.phone,
                    "Position": e.position,
                    "Department": e.department,
                    "Start Date": e.employment_start_date or "",
                    "Monthly Target": e.monthly_hour_target,
                    "Hourly Rate (PKR)": e.hourly_rate,
                    "Role": e.role.value,
                    "Comp Leaves Earned": e.comp_leaves_earned,
                    "Comp Leaves Used": e.comp_leaves_used,
                }
                for e in self.list_all(actor=actor)
            ]
        )
