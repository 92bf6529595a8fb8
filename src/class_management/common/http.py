from __future__ import annotations

from typing import Any, Optional

from flask import jsonify, request, session

from ..core.exceptions import ValidationError


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def json_message(message: str, status: int = 200, **extra: Any):
    payload = {"message": message}
    payload.update(extra)
    return jsonify(payload), status


def bool_arg(name: str) -> Optional[bool]:
    """Query flag semantics: absent -> no filter, 'true' -> True, anything else -> False."""

    value = request.args.get(name)
    if value is None:
        return None
    return value == "true"


def acting_user_id(body: dict, field_name: str) -> str:
    """The logged-in user, falling back to an explicit id in the request body."""

    user_id = session.get("user_id") or body.get(field_name)
    if not user_id:
        raise ValidationError(f"{field_name} is required")
    return str(user_id)
