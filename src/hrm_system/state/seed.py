"""Demo data used when the store is empty or reset."""

from __future__ import annotations

from typing import Callable

from werkzeug.security import generate_password_hash

from ..core.enums import Role
from ..users.directory import default_multiplier
from ..users.model import Employee, OvertimeSettings
from .model import HRMState

# id, name, email, password, phone, position, department, start date, manager,
# target, rate (PKR), role, comp earned, comp used, address, date of birth, emergency contact
_DEMO_EMPLOYEES = [
    ("emp1", "Admin User", "admin@harphrm.com", "admin123", "+92-300-1234567", "System Administrator",
     "Administration", "2023-01-15", None, 100, 7500, Role.ADMIN, 5, 1, "Lahore, Pakistan", "1990-01-15",
     "+92-300-9876543"),
    ("emp2", "Manager User", "manager@harphrm.com", "manager123", "+92-321-1234567", "Engineering Manager",
     "Engineering", "2022-06-01", "emp1", 80, 8500, Role.MANAGER, 4, 0, "Karachi, Pakistan", "1988-03-20",
     "+92-321-9876543"),
    ("emp3", "Ali Hassan", "ali.hassan@harphrm.com", "employee123", "+92-333-1234567", "Software Engineer",
     "Engineering", "2023-03-20", "emp2", 80, 6000, Role.EMPLOYEE, 3, 1, "Islamabad, Pakistan", "1995-05-10",
     "+92-333-9876543"),
    ("emp4", "Fatima Khan", "fatima.khan@harphrm.com", "employee123", "+92-345-1234567", "Software Engineer",
     "Engineering", "2023-05-10", "emp2", 60, 5500, Role.EMPLOYEE, 2, 0, "Lahore, Pakistan", "1996-08-15",
     "+92-345-9876543"),
    ("emp5", "Sarah Ahmed", "sarah.ahmed@harphrm.com", "manager123", "+92-311-1234567", "Marketing Manager",
     "Marketing", "2022-09-15", "emp1", 80, 7000, Role.MANAGER, 6, 2, "Karachi, Pakistan", "1989-11-25",
     "+92-311-9876543"),
    ("emp6", "Ahmed Raza", "ahmed.raza@harphrm.com", "employee123", "+92-322-1234567", "Marketing Specialist",
     "Marketing", "2023-07-01", "emp5", 60, 5000, Role.EMPLOYEE, 2, 0, "Faisalabad, Pakistan", "1997-02-14",
     "+92-322-9876543"),
    ("emp7", "Ayesha Malik", "ayesha.malik@harphrm.com", "employee123", "+92-334-1234567", "Content Writer",
     "Marketing", "2023-08-15", "emp5", 40, 4500, Role.EMPLOYEE, 1, 0, "Multan, Pakistan", "1998-06-20",
     "+92-334-9876543"),
    ("emp8", "Hassan Ali", "hassan.ali@harphrm.com", "employee123", "+92-312-1234567", "Junior Developer",
     "Engineering", "2024-01-10", "emp2", 80, 5000, Role.EMPLOYEE, 1, 0, "Rawalpindi, Pakistan", "1999-09-05",
     "+92-312-9876543"),
    ("emp9", "Zainab Tariq", "zainab.tariq@harphrm.com", "employee123", "+92-335-1234567", "UI/UX Designer",
     "Design", "2023-04-01", "emp2", 60, 6500, Role.EMPLOYEE, 3, 1, "Lahore, Pakistan", "1996-12-10",
     "+92-335-9876543"),
    ("emp10", "Usman Farooq", "usman.farooq@harphrm.com", "employee123", "+92-346-1234567", "QA Engineer",
     "Engineering", "2023-11-01", "emp2", 80, 5800, Role.EMPLOYEE, 2, 0, "Islamabad, Pakistan", "1997-04-18",
     "+92-346-9876543"),
]


def initial_state(*, hasher: Callable[[str], str] = generate_password_hash) -> HRMState:
    employees = tuple(
        Employee(
            id=emp_id,
            name=name,
            email=email,
            password_hash=hasher(password),
            phone=phone,
            position=position,
            department=department,
            employment_start_date=start,
            manager_id=manager_id,
            monthly_hour_target=target,
            hourly_rate=float(rate),
            role=role,
            comp_leaves_earned=earned,
            comp_leaves_used=used,
            address=address,
            date_of_birth=dob,
            emergency_contact=emergency,
        )
        for (emp_id, name, email, password, phone, position, department, start, manager_id, target, rate, role,
             earned, used, address, dob, emergency) in _DEMO_EMPLOYEES
    )
    settings = tuple(OvertimeSettings(e.id, default_multiplier(e.monthly_hour_target)) for e in employees)
    return HRMState(employees=employees, overtime_settings=settings)
