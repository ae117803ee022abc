from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.web import csv_response, current_actor, login_required, roles_required
from ..container import Container
from ..core.enums import Role
from ..state.codec import time_log_to_dict
from .service import TodayStatus


def _today(s: TodayStatus) -> dict:
    return {
        "employeeId": s.employee_id,
        "date": s.work_date.isoformat(),
        "timeLog": time_log_to_dict(s.entry) if s.entry else None,
        "hoursSoFar": round(s.hours_so_far, 2),
        "onBreak": s.on_break,
        "tasksLogged": s.tasks_logged,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="check_in")
    @login_required
    def check_in():
        entry = container.attendance_service.check_in(actor=current_actor())
        return jsonify({"timeLog": time_log_to_dict(entry), "message": "Checked in successfully"})

    @app.route("/api/attendance/break-start", methods=["POST"], endpoint="break_start")
    @login_required
    def break_start():
        entry = container.attendance_service.start_break(actor=current_actor())
        return jsonify({"timeLog": time_log_to_dict(entry), "message": "Break started"})

    @app.route("/api/attendance/break-end", methods=["POST"], endpoint="break_end")
    @login_required
    def break_end():
        entry = container.attendance_service.end_break(actor=current_actor())
        return jsonify({"timeLog": time_log_to_dict(entry), "message": "Break ended"})

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="check_out")
    @login_required
    def check_out():
        entry = container.attendance_service.check_out(actor=current_actor())
        return jsonify(
            {"timeLog": time_log_to_dict(entry), "message": f"Checked out. Total hours: {entry.total_hours:.2f}"}
        )

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def today():
        return jsonify(_today(container.attendance_service.today(actor=current_actor())))

    @app.route("/api/attendance/team", methods=["GET"], endpoint="attendance_team")
    @roles_required(Role.MANAGER, Role.ADMIN)
    def team():
        rows = container.attendance_service.team_today(actor=current_actor())
        return jsonify({"team": [_today(s) for s in rows]})

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def history():
        limit = request.args.get("limit", type=int)
        rows = container.attendance_service.history(
            actor=current_actor(), employee_id=request.args.get("employeeId"), limit=limit
        )
        return jsonify({"timeLogs": [time_log_to_dict(t) for t in rows]})

    @app.route("/api/exports/time-logs.csv", methods=["GET"], endpoint="export_time_logs")
    @login_required
    def export_time_logs():
        text = container.attendance_service.export_history_csv(
            actor=current_actor(), employee_id=request.args.get("employeeId")
        )
        return csv_response(text, f"time_logs_{date.today().isoformat()}.csv")
