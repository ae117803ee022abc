from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import csv_response, current_actor, json_body, login_required, require_field, roles_required
from ..container import Container
from ..core.enums import Role
from ..state.codec import payroll_to_dict

# JSON body key -> editable PayrollEntry field
PATCH_FIELDS = {
    "regularHours": "regular_hours",
    "overtimeHours": "overtime_hours",
    "status": "status",
    "notes": "notes",
}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll/process", methods=["POST"], endpoint="process_payroll")
    @roles_required(Role.ADMIN)
    def process_payroll():
        month = str(require_field(json_body(), "month"))
        report = container.payroll_service.process(actor=current_actor(), month=month)
        return jsonify(
            {
                "month": report.month,
                "created": report.created,
                "skipped": report.skipped,
                "message": report.message,
            }
        )

    @app.route("/api/payroll", methods=["GET"], endpoint="list_payroll")
    @roles_required(Role.ADMIN)
    def list_payroll():
        rows = container.payroll_service.list_month(actor=current_actor(), month=request.args.get("month", ""))
        return jsonify({"payrollEntries": [payroll_to_dict(p) for p in rows]})

    @app.route("/api/payroll/mine", methods=["GET"], endpoint="my_payroll")
    @login_required
    def my_payroll():
        rows = container.payroll_service.list_for(actor=current_actor(), employee_id=request.args.get("employeeId"))
        return jsonify({"payrollEntries": [payroll_to_dict(p) for p in rows]})

    @app.route("/api/payroll/<entry_id>", methods=["PATCH"], endpoint="update_payroll")
    @roles_required(Role.ADMIN)
    def update_payroll(entry_id: str):
        body = json_body()
        patch = {PATCH_FIELDS.get(k, k): v for k, v in body.items()}
        entry = container.payroll_service.update(actor=current_actor(), entry_id=entry_id, patch=patch)
        return jsonify({"payrollEntry": payroll_to_dict(entry)})

    @app.route("/api/exports/payroll.csv", methods=["GET"], endpoint="export_payroll")
    @roles_required(Role.ADMIN)
    def export_payroll():
        month = request.args.get("month", "")
        text = container.payroll_service.export_month_csv(actor=current_actor(), month=month)
        return csv_response(text, f"payroll_{month}.csv")
