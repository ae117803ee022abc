from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    EMPLOYEE = "employee"
    MANAGER = "manager"
    ADMIN = "admin"


class TimeLogStatus(str, Enum):
    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"
    # Reserved for entries never checked out by end of day; nothing sets it yet.
    INCOMPLETE = "incomplete"


class TaskStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    COMMENTED = "commented"


class RequestStatus(str, Enum):
    """Leave request approval workflow."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PayrollStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    PAID = "paid"


MONTHLY_HOUR_TARGETS = (40, 60, 80, 100)
