from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_actor, json_body, login_required, optional_date, roles_required
from ..container import Container
from ..core.enums import Role
from ..state.codec import task_to_dict


def register(app: Flask, container: Container) -> None:
    @app.route("/api/tasks", methods=["GET"], endpoint="list_tasks")
    @login_required
    def list_tasks():
        rows = container.task_service.list_for(
            actor=current_actor(),
            employee_id=request.args.get("employeeId"),
            work_date=optional_date(request.args.get("date"), "date"),
        )
        return jsonify({"tasks": [task_to_dict(t) for t in rows]})

    @app.route("/api/tasks", methods=["POST"], endpoint="add_task")
    @login_required
    def add_task():
        body = json_body()
        task = container.task_service.add(
            actor=current_actor(),
            description=str(body.get("description") or ""),
            hours=body.get("hoursSpent"),
            work_date=optional_date(body.get("date"), "date"),
        )
        return jsonify({"task": task_to_dict(task)}), 201

    @app.route("/api/tasks/<task_id>", methods=["DELETE"], endpoint="delete_task")
    @login_required
    def delete_task(task_id: str):
        container.task_service.delete(actor=current_actor(), task_id=task_id)
        return jsonify({"success": True})

    @app.route("/api/tasks/review", methods=["GET"], endpoint="tasks_for_review")
    @roles_required(Role.MANAGER, Role.ADMIN)
    def tasks_for_review():
        rows = container.task_service.pending_review(actor=current_actor())
        return jsonify({"tasks": [task_to_dict(t) for t in rows]})

    @app.route("/api/tasks/<task_id>/approve", methods=["POST"], endpoint="approve_task")
    @roles_required(Role.MANAGER, Role.ADMIN)
    def approve_task(task_id: str):
        task = container.task_service.approve(
            actor=current_actor(), task_id=task_id, comment=json_body().get("comment")
        )
        return jsonify({"task": task_to_dict(task)})

    @app.route("/api/tasks/<task_id>/comment", methods=["POST"], endpoint="comment_task")
    @roles_required(Role.MANAGER, Role.ADMIN)
    def comment_task(task_id: str):
        comment = str(json_body().get("comment") or "")
        task = container.task_service.comment(actor=current_actor(), task_id=task_id, comment=comment)
        return jsonify({"task": task_to_dict(task)})
