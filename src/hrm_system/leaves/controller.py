from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_actor, json_body, login_required, optional_date, require_field, roles_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..state.codec import leave_to_dict
from ..users.controller import public_employee


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leaves", methods=["GET"], endpoint="list_leaves")
    @login_required
    def list_leaves():
        rows = container.leave_service.list_for(actor=current_actor(), employee_id=request.args.get("employeeId"))
        return jsonify({"leaveRequests": [leave_to_dict(r) for r in rows]})

    @app.route("/api/leaves", methods=["POST"], endpoint="request_leave")
    @login_required
    def request_leave():
        body = json_body()
        start = optional_date(require_field(body, "startDate"), "startDate")
        end = optional_date(require_field(body, "endDate"), "endDate")
        req = container.leave_service.request(
            actor=current_actor(),
            start_date=start,
            end_date=end,
            reason=str(body.get("reason") or ""),
        )
        return jsonify({"leaveRequest": leave_to_dict(req)}), 201

    @app.route("/api/leaves/balance", methods=["GET"], endpoint="leave_balance")
    @login_required
    def leave_balance():
        return jsonify(
            container.leave_service.balance(actor=current_actor(), employee_id=request.args.get("employeeId"))
        )

    @app.route("/api/leaves/review", methods=["GET"], endpoint="leaves_for_review")
    @roles_required(Role.MANAGER, Role.ADMIN)
    def leaves_for_review():
        rows = container.leave_service.pending_review(actor=current_actor())
        return jsonify({"leaveRequests": [leave_to_dict(r) for r in rows]})

    @app.route("/api/leaves/<leave_id>/decision", methods=["POST"], endpoint="decide_leave")
    @roles_required(Role.MANAGER, Role.ADMIN)
    def decide_leave(leave_id: str):
        body = json_body()
        approve = body.get("approve")
        if not isinstance(approve, bool):
            raise ValidationError("approve must be true or false")
        req = container.leave_service.decide(
            actor=current_actor(), leave_id=leave_id, approve=approve, comment=body.get("comment")
        )
        return jsonify({"leaveRequest": leave_to_dict(req)})

    @app.route("/api/employees/<employee_id>/comp-leaves", methods=["POST"], endpoint="grant_comp_leave")
    @roles_required(Role.MANAGER, Role.ADMIN)
    def grant_comp_leave(employee_id: str):
        days = require_field(json_body(), "days")
        employee = container.leave_service.grant(actor=current_actor(), employee_id=employee_id, days=days)
        return jsonify({"employee": public_employee(employee)})
