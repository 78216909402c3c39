"""Helpers shared by the Flask controllers."""
from __future__ import annotations

from datetime import date
from functools import wraps

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please log in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "message": "Please log in to continue"}), 401
            if session.get("role") not in allowed:
                return jsonify({"success": False, "message": "You do not have access to this page"}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_role() -> Role | None:
    role = session.get("role")
    return Role(role) if role else None


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def date_arg(value: str | None, field_name: str = "date") -> date:
    if not value:
        raise ValidationError(f"Missing parameter {field_name}")
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD") from None
