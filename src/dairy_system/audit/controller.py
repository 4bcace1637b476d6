from __future__ import annotations

from flask import Flask, request

from ..common.http import ok
from ..common.validators import optional_int
from ..container import Container
from ..core.constants import DEFAULT_AUDIT_LIMIT


def register(app: Flask, container: Container) -> None:
    @app.route("/api/audit-log", methods=["GET"], endpoint="audit_log")
    def audit_log():
        limit = optional_int(request.args.get("limit"), "limit") or DEFAULT_AUDIT_LIMIT
        entries = container.audit_service.list_recent(entity=request.args.get("entity") or None, limit=limit)
        return ok(entries)
