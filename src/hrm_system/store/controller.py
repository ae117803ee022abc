from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from .service import StoreService

logger = logging.getLogger(__name__)


def register(app: Flask, store: StoreService, *, prefix: str = "/hrm") -> None:
    def _body_data():
        body = request.get_json(silent=True) or {}
        return body.get("data")

    def _missing():
        return jsonify({"error": "Missing data field in request body"}), 400

    @app.route("/health", methods=["GET"], endpoint="store_health")
    def health():
        return jsonify({"status": "ok"})

    @app.route(f"{prefix}/data", methods=["GET"], endpoint="store_get")
    def get_data():
        try:
            return jsonify({"data": store.get_data()})
        except Exception as e:
            logger.exception("Error getting HRM data")
            return jsonify({"error": f"Failed to get HRM data: {e}"}), 500

    @app.route(f"{prefix}/data", methods=["POST"], endpoint="store_save")
    def save_data():
        data = _body_data()
        if not data:
            return _missing()
        try:
            store.save(data)
            return jsonify({"success": True})
        except Exception as e:
            logger.exception("Error saving HRM data")
            return jsonify({"error": f"Failed to save HRM data: {e}"}), 500

    @app.route(f"{prefix}/init", methods=["POST"], endpoint="store_init")
    def init_data():
        data = _body_data()
        if not data:
            return _missing()
        try:
            initialized = store.init(data)
        except Exception as e:
            logger.exception("Error initializing HRM data")
            return jsonify({"error": f"Failed to initialize HRM data: {e}"}), 500
        message = "Data initialized successfully" if initialized else "Data already initialized"
        return jsonify({"success": True, "message": message, "initialized": initialized})

    @app.route(f"{prefix}/reset", methods=["POST"], endpoint="store_reset")
    def reset_data():
        data = _body_data()
        if not data:
            return _missing()
        try:
            store.reset(data)
            return jsonify({"success": True, "message": "Data reset successfully"})
        except Exception as e:
            logger.exception("Error resetting HRM data")
            return jsonify({"error": f"Failed to reset HRM data: {e}"}), 500
