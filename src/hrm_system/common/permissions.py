from __future__ import annotations

from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..users.model import Employee, SessionUser


def require_admin(actor: SessionUser) -> None:
    if actor.role != Role.ADMIN:
        raise AuthorizationError("Admin access required")


def require_reviewer(actor: SessionUser) -> None:
    if actor.role not in {Role.MANAGER, Role.ADMIN}:
        raise AuthorizationError("Manager access required")


def manages(actor: SessionUser, employee: Employee) -> bool:
    """Admins manage everyone; managers only their direct reports."""
    if actor.role == Role.ADMIN:
        return True
    return actor.role == Role.MANAGER and employee.manager_id == actor.user_id


def require_manages(actor: SessionUser, employee: Employee) -> None:
    if not manages(actor, employee):
        raise AuthorizationError("You can only act on your direct reports")


def require_self_or_manager(actor: SessionUser, employee: Employee) -> None:
    if employee.id != actor.user_id and not manages(actor, employee):
        raise AuthorizationError("You do not have access to this employee")
