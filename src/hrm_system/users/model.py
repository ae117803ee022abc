from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee record.

    Note: plain data object, no persistence code. ``comp_leaves_used`` may exceed
    ``comp_leaves_earned``; the leave ledger decides whether to allow that.
    """

    id: str
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
    profile_picture: Optional[str] = None
    address: Optional[str] = None
    date_of_birth: Optional[str] = None
    emergency_contact: Optional[str] = None

    @property
    def comp_leaves_available(self) -> int:
        return self.comp_leaves_earned - self.comp_leaves_used


@dataclass(frozen=True)
class OvertimeSettings:
    employee_id: str
    overtime_multiplier: float


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: str
    name: str
    role: Role
    manager_id: Optional[str]
