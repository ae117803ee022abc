from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_actor, roles_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok", **container.data_service.status()})

    @app.route("/api/admin/reset", methods=["POST"], endpoint="reset_data")
    @roles_required(Role.ADMIN)
    def reset_data():
        container.data_service.reset(actor=current_actor())
        return jsonify({"success": True, "message": "Data reset to demo seed"})

    @app.route("/api/admin/sync", methods=["POST"], endpoint="sync_now")
    @roles_required(Role.ADMIN)
    def sync_now():
        outcome = container.data_service.sync_now(actor=current_actor())
        return jsonify({"outcome": outcome})
