from __future__ import annotations

from flask import Flask, g, jsonify, redirect, request

from .catalog import DEFAULT_CULTURE, SUPPORTED_CULTURES, normalize_culture, translate

CULTURE_COOKIE = "culture"


def negotiate_culture() -> str:
    """Pick the request culture: ?culture=, then the cookie, then Accept-Language."""
    for candidate in (request.args.get("culture"), request.cookies.get(CULTURE_COOKIE)):
        culture = normalize_culture(candidate)
        if culture:
            return culture

    best = request.accept_languages.best_match(SUPPORTED_CULTURES)
    return best or DEFAULT_CULTURE


def t(key: str, **kwargs) -> str:
    return translate(key, getattr(g, "culture", DEFAULT_CULTURE), **kwargs)


def register(app: Flask) -> None:
    @app.before_request
    def _select_culture():
        g.culture = negotiate_culture()

    @app.after_request
    def _content_language(response):
        response.headers.setdefault("Content-Language", getattr(g, "culture", DEFAULT_CULTURE))
        return response

    @app.route("/set-culture", methods=["GET"], endpoint="set_culture")
    def set_culture():
        culture = normalize_culture(request.args.get("culture"))
        if not culture:
            return jsonify({"success": False, "message": f"Supported cultures: {', '.join(SUPPORTED_CULTURES)}"}), 400

        target = request.args.get("redirect") or "/simple-login"
        if not target.startswith("/") or target.startswith("//"):
            target = "/simple-login"
        response = redirect(target)
        response.set_cookie(CULTURE_COOKIE, culture, max_age=365 * 24 * 3600, httponly=True, samesite="Lax")
        return response

    app.jinja_env.globals["t"] = t
