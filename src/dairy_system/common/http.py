from __future__ import annotations

from typing import Any

from flask import g, jsonify, request

from ..core.exceptions import ValidationError
from .serialization import to_jsonable


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict() if request.form else None
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def ok(data: Any = None, status: int = 200, **extra):
    payload = {"success": True}
    if data is not None:
        payload["data"] = to_jsonable(data)
    payload.update(to_jsonable(extra))
    return jsonify(payload), status


def current_actor() -> str:
    return getattr(g, "actor", None) or "anonymous"
