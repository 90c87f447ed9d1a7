"""JSON request/response helpers shared by the controllers."""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Optional

from flask import jsonify, request

from ..core.exceptions import ConflictError, ConnectivityError, DomainError, NotFoundError, ValidationError


def error_response(message: str, status: int, **extra: Any):
    body = {"error": message}
    body.update(extra)
    return jsonify(body), status


def domain_error_response(exc: DomainError):
    if isinstance(exc, NotFoundError):
        return error_response(str(exc), 404)
    if isinstance(exc, (ValidationError, ConflictError)):
        return error_response(str(exc), 400)
    if isinstance(exc, ConnectivityError):
        return error_response("Failed to reach the sheet", 502, details=str(exc), statusCode=exc.status_code)
    return error_response(str(exc), 400)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def text(data: dict, key: str, default: str = "") -> str:
    value = data.get(key)
    return default if value is None else str(value).strip()


def int_arg(value: Any, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")


def isoformat(value: Optional[object]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, time):
        return value.strftime("%H:%M")
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)
