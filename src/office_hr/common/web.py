"""Helpers shared by the Flask controllers.

Identity comes from the session populated by the external auth integration
(``user_id`` and ``role``); controllers turn it into an ``Actor`` and pass it
explicitly into services.
"""
from __future__ import annotations

from datetime import date
from functools import wraps
from typing import Optional

from flask import Flask, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from ..core.identity import Actor
from .datetime_utils import parse_iso_date


def current_actor() -> Actor:
    return Actor(user_id=int(session["user_id"]), role=Role(session["role"]))


_ROLES = {r.value for r in Role}


def _has_identity() -> bool:
    """Session carries a numeric user id and a role this system knows."""

    if session.get("role") not in _ROLES:
        return False
    try:
        int(session.get("user_id"))
    except (TypeError, ValueError):
        return False
    return True


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not _has_identity():
            return jsonify({"success": False, "message": "Authentication required"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not _has_identity():
            return jsonify({"success": False, "message": "Authentication required"}), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify({"success": False, "message": "Admin access required"}), 403
        return view(*args, **kwargs)

    return wrapper


def ok(data, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("JSON body is required")
    return data


def required_field(data: dict, name: str):
    value = data.get(name)
    if value is None or value == "":
        raise ValidationError(f"{name} is required")
    return value


def int_field(data: dict, name: str) -> int:
    value = required_field(data, name)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer")


def date_field(value: Optional[str], name: str) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{name} must be YYYY-MM-DD")


def int_arg(name: str) -> Optional[int]:
    value = request.args.get(name)
    if value in (None, ""):
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")


_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(exc, cls)), 400)
        return jsonify({"success": False, "error": type(exc).__name__, "message": str(exc)}), status
