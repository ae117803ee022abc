from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.web import csv_response, current_actor, roles_required
from ..container import Container
from ..core.constants import DEFAULT_AUDIT_LIMIT
from ..core.enums import Role
from ..state.codec import audit_to_dict


def register(app: Flask, container: Container) -> None:
    @app.route("/api/audit", methods=["GET"], endpoint="list_audit")
    @roles_required(Role.MANAGER, Role.ADMIN)
    def list_audit():
        rows = container.audit_service.list_entries(
            actor=current_actor(),
            limit=request.args.get("limit", DEFAULT_AUDIT_LIMIT, type=int),
            entity_type=request.args.get("entityType"),
            user_id=request.args.get("userId"),
        )
        return jsonify({"auditLogs": [audit_to_dict(a) for a in rows]})

    @app.route("/api/exports/audit.csv", methods=["GET"], endpoint="export_audit")
    @roles_required(Role.ADMIN)
    def export_audit():
        text = container.audit_service.export_csv(actor=current_actor())
        return csv_response(text, f"audit_trail_{date.today().isoformat()}.csv")
