from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from flask import Flask, g, jsonify, redirect, render_template_string, request, session, url_for

from ..common.logger import get_logger
from ..common.money import round_money
from ..common.serialization import to_jsonable
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import AuthenticationError
from ..localization.middleware import t
from .middleware import login_required
from .pages import DASHBOARD_PAGE, LOGIN_PAGE

logger = get_logger(__name__)


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    def _render_login(*, error: str | None = None, message: str | None = None, status: int = 200):
        html = render_template_string(LOGIN_PAGE, culture=g.culture, error=error, message=message)
        return html, status

    def _credentials() -> tuple[str, str, bool]:
        data = request.get_json(silent=True) if request.is_json else None
        source = data if isinstance(data, dict) else request.form
        return (
            str(source.get("username", "") or ""),
            str(source.get("password", "") or ""),
            bool(source.get("remember_me")),
        )

    def _today_stats() -> dict | None:
        today = date.today()
        try:
            collections = container.collection_service.list_all(start_date=today, end_date=today)
            sales = container.sale_service.list_all(start_date=today, end_date=today)
        except Exception:
            logger.exception("Dashboard figures could not be loaded")
            return None
        return {
            "collected_ltr": float(sum((c.qty_ltr for c in collections), Decimal(0))),
            "collected_amt": float(sum((c.due_amt for c in collections), Decimal(0))),
            "sold_ltr": float(sum((s.qty_ltr for s in sales), Decimal(0))),
            "sold_amt": float(sum((round_money(s.qty_ltr * s.unit_price) - s.discount for s in sales), Decimal(0))),
        }

    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        return redirect(url_for("dashboard" if "username" in session else "simple_login"))

    @app.route("/simple-login", methods=["GET"], endpoint="simple_login")
    def simple_login():
        if "username" in session:
            return redirect(url_for("dashboard"))
        message = t("logout.done") if request.args.get("logged_out") else None
        return _render_login(message=message)

    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        username, password, remember = _credentials()
        try:
            user = container.auth_service.authenticate(username, password)
        except AuthenticationError:
            logger.warning("Failed login for %r from %s", username, request.remote_addr)
            if request.is_json:
                return jsonify({"success": False, "message": t("login.invalid")}), 401
            return _render_login(error=t("login.invalid"), status=401)

        session.clear()
        session.permanent = remember
        session["username"] = user.username
        session["name"] = user.display_name
        session["role"] = user.role.value
        logger.info("User %s logged in", user.username)

        if request.is_json:
            return jsonify({"success": True, "message": t("login.success"), "user": to_jsonable(user)})
        return redirect(url_for("dashboard"))

    @app.route("/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    def dashboard():
        return render_template_string(
            DASHBOARD_PAGE,
            culture=g.culture,
            name=session.get("name") or session.get("username"),
            stats=_today_stats(),
        )

    @app.route("/logout", methods=["GET"], endpoint="logout")
    def logout():
        username = session.get("username")
        session.clear()
        if username:
            logger.info("User %s logged out", username)
        return redirect(url_for("simple_login", logged_out=1))

    @app.route("/api/auth/token", methods=["POST"], endpoint="issue_token")
    def issue_token():
        username, password, _ = _credentials()
        try:
            user = container.auth_service.authenticate(username, password)
        except AuthenticationError:
            logger.warning("Failed token request for %r from %s", username, request.remote_addr)
            return jsonify({"success": False, "message": t("login.invalid")}), 401

        issued = container.token_service.issue(user)
        return jsonify(
            {
                "success": True,
                "access_token": issued.access_token,
                "token_type": issued.token_type,
                "expires_at": issued.expires_at.isoformat(),
            }
        )
