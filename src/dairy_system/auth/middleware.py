from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import Flask, g, jsonify, redirect, request, session, url_for

from ..common.logger import get_logger
from ..container import Container
from ..core.exceptions import AuthenticationError
from ..localization.middleware import t

logger = get_logger(__name__)

PUBLIC_API_PATHS = frozenset({"/api/auth/token", "/api/test-db"})


def _bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return None


def login_required(view):
    """Session-only guard for the HTML pages."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "username" not in session:
            return redirect(url_for("simple_login"))
        return view(*args, **kwargs)

    return wrapper


def register(app: Flask, container: Container) -> None:
    @app.before_request
    def _authenticate():
        g.actor = session.get("username")
        g.auth_method = "session" if g.actor else None
        token_error: Optional[str] = None

        if not g.actor:
            token = _bearer_token()
            if token:
                try:
                    claims = container.token_service.verify(token)
                    g.actor = claims["sub"]
                    g.auth_method = "jwt"
                    g.token_claims = claims
                except AuthenticationError as e:
                    token_error = str(e)

        path = request.path
        if not path.startswith("/api/") or path in PUBLIC_API_PATHS:
            return None

        if not g.actor:
            logger.info("Rejected unauthenticated request %s %s", request.method, path)
            response = jsonify({"success": False, "message": token_error or t("error.unauthorized")})
            response.headers["WWW-Authenticate"] = 'Bearer realm="dairy"'
            return response, 401
        return None
