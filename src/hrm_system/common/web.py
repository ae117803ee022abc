"""Flask plumbing shared by the feature controllers: guards, error mapping, bodies."""

from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Any, Optional

from flask import Flask, Response, current_app, g, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    PersistenceError,
    PreconditionError,
    StateConflictError,
    ValidationError,
)
from ..users.model import SessionUser
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

EXTENSION_KEY = "hrm_container"

STATUS_CODES: dict[type, int] = {
    ValidationError: 400,
    AuthenticationError: 401,
    AuthorizationError: 403,
    StateConflictError: 409,
    PreconditionError: 422,
    DomainError: 400,
}


def register_error_handlers(app: Flask) -> None:
    for exc_type, status in STATUS_CODES.items():

        def handler(e, _status=status):
            return jsonify({"error": str(e), "type": type(e).__name__}), _status

        app.register_error_handler(exc_type, handler)

    @app.errorhandler(PersistenceError)
    def _persistence_error(e: PersistenceError):
        logger.error("Persistence failure: %s", e)
        return jsonify({"error": "Storage is unavailable", "type": type(e).__name__}), 503


def current_actor() -> SessionUser:
    return g.actor


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        user_id = session.get("user_id")
        actor = current_app.extensions[EXTENSION_KEY].auth_service.current(user_id) if user_id else None
        if actor is None:
            session.clear()
            raise AuthenticationError("Please log in to continue")
        g.actor = actor
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    def decorator(view):
        @wraps(view)
        @login_required
        def wrapper(*args, **kwargs):
            if current_actor().role not in roles:
                raise AuthorizationError("You do not have permission for this action")
            return view(*args, **kwargs)

        return wrapper

    return decorator


def json_body() -> dict:
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def require_field(body: dict, name: str) -> Any:
    value = body.get(name)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{name} is required")
    return value


def optional_date(value: Optional[str], name: str) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a date (YYYY-MM-DD)")


def csv_response(text: str, filename: str) -> Response:
    return Response(
        text,
        mimetype="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
