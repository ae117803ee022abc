from __future__ import annotations

from datetime import date, timedelta

from flask import Flask, jsonify, session

from ..common.web import csv_response, current_actor, json_body, login_required, require_field, roles_required
from ..container import Container
from ..core.enums import Role
from ..state.codec import employee_to_dict
from .model import Employee, SessionUser

# JSON body key -> Employee field
EMPLOYEE_FIELDS = {
    "name": "name",
    "email": "email",
    "phone": "phone",
    "position": "position",
    "department": "department",
    "employmentStartDate": "employment_start_date",
    "managerId": "manager_id",
    "monthlyHourTarget": "monthly_hour_target",
    "hourlyRate": "hourly_rate",
    "role": "role",
    "compLeavesEarned": "comp_leaves_earned",
    "compLeavesUsed": "comp_leaves_used",
    "profilePicture": "profile_picture",
    "address": "address",
    "dateOfBirth": "date_of_birth",
    "emergencyContact": "emergency_contact",
    "password": "password",
}


def public_employee(e: Employee) -> dict:
    d = employee_to_dict(e)
    d.pop("passwordHash", None)
    d["compLeavesAvailable"] = e.comp_leaves_available
    return d


def _session_user(u: SessionUser) -> dict:
    return {"id": u.user_id, "name": u.name, "role": u.role.value, "managerId": u.manager_id}


def _employee_fields(body: dict) -> dict:
    return {EMPLOYEE_FIELDS[k]: v for k, v in body.items() if k in EMPLOYEE_FIELDS}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        body = json_body()
        s_user = container.auth_service.authenticate(
            str(require_field(body, "email")), str(body.get("password") or "")
        )

        session.permanent = bool(body.get("rememberMe"))
        app.permanent_session_lifetime = timedelta(days=7)
        session["user_id"] = s_user.user_id
        return jsonify({"user": _session_user(s_user)})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        actor = current_actor()
        employee = container.employee_service.get(actor=actor, employee_id=actor.user_id)
        return jsonify({"user": _session_user(actor), "employee": public_employee(employee)})

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @roles_required(Role.ADMIN)
    def list_employees():
        rows = container.employee_service.list_all(actor=current_actor())
        return jsonify({"employees": [public_employee(e) for e in rows]})

    @app.route("/api/employees/team", methods=["GET"], endpoint="list_team")
    @roles_required(Role.MANAGER, Role.ADMIN)
    def list_team():
        rows = container.employee_service.team(actor=current_actor())
        return jsonify({"employees": [public_employee(e) for e in rows]})

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    @roles_required(Role.ADMIN)
    def create_employee():
        fields = _employee_fields(json_body())
        password = str(fields.pop("password", "") or "")
        employee = container.employee_service.create(actor=current_actor(), password=password, **fields)
        return jsonify({"employee": public_employee(employee)}), 201

    @app.route("/api/employees/<employee_id>", methods=["GET"], endpoint="get_employee")
    @login_required
    def get_employee(employee_id: str):
        employee = container.employee_service.get(actor=current_actor(), employee_id=employee_id)
        return jsonify({"employee": public_employee(employee)})

    @app.route("/api/employees/<employee_id>", methods=["PATCH"], endpoint="update_employee")
    @login_required
    def update_employee(employee_id: str):
        employee = container.employee_service.update(
            actor=current_actor(), employee_id=employee_id, updates=_employee_fields(json_body())
        )
        return jsonify({"employee": public_employee(employee)})

    @app.route("/api/employees/<employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @roles_required(Role.ADMIN)
    def delete_employee(employee_id: str):
        container.employee_service.delete(actor=current_actor(), employee_id=employee_id)
        return jsonify({"success": True})

    @app.route("/api/overtime-settings", methods=["GET"], endpoint="list_overtime_settings")
    @roles_required(Role.ADMIN)
    def list_overtime_settings():
        rows = container.employee_service.overtime_settings(actor=current_actor())
        return jsonify(
            {"overtimeSettings": [{"employeeId": s.employee_id, "overtimeMultiplier": s.overtime_multiplier} for s in rows]}
        )

    @app.route("/api/overtime-settings/<employee_id>", methods=["PUT"], endpoint="set_overtime_multiplier")
    @roles_required(Role.ADMIN)
    def set_overtime_multiplier(employee_id: str):
        multiplier = require_field(json_body(), "overtimeMultiplier")
        s = container.employee_service.set_overtime_multiplier(
            actor=current_actor(), employee_id=employee_id, multiplier=multiplier
        )
        return jsonify({"employeeId": s.employee_id, "overtimeMultiplier": s.overtime_multiplier})

    @app.route("/api/exports/employees.csv", methods=["GET"], endpoint="export_employees")
    @roles_required(Role.ADMIN)
    def export_employees():
        text = container.employee_service.export_csv(actor=current_actor())
        return csv_response(text, f"employees_{date.today().isoformat()}.csv")
