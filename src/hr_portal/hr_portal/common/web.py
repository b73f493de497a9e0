from __future__ import annotations

from functools import wraps
from typing import Any

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..access.model import Caller
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DomainError, ValidationError
from ..core.logging_config import get_logger

logger = get_logger("web")


def json_error(kind: str, message: str, status_code: int):
    return jsonify({"success": False, "kind": kind, "message": message}), status_code


def ok(status_code: int = 200, **payload: Any):
    return jsonify({"success": True, **payload}), status_code


def current_caller() -> Caller:
    """Identity placed in the session by the authentication service."""
    try:
        return Caller(user_id=int(session["user_id"]), role=Role(session.get("role")))
    except (KeyError, TypeError, ValueError):
        raise AuthorizationError("Unauthorized")


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("unauthenticated", "Authentication required", 401)
        return view(*args, **kwargs)

    return wrapper


def role_required(*roles: Role):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        @login_required
        def wrapper(*args, **kwargs):
            if session.get("role") not in allowed:
                return json_error(AuthorizationError.kind, "Access denied", AuthorizationError.status_code)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return json_error(e.kind, str(e), e.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return json_error("http_error", e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.error("unhandled error on %s %s", request.method, request.path, exc_info=e)
        return json_error("internal_error", "Internal server error", 500)
