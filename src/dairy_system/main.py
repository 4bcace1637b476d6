from __future__ import annotations

import importlib
import os
import time
import uuid
from types import ModuleType
from typing import Optional

import psycopg2
from dotenv import load_dotenv
from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from .audit.controller import register as register_audit
from .auth.controller import register as register_auth
from .auth.middleware import register as register_auth_middleware
from .branches.controller import register as register_branches
from .common.logger import get_logger
from .container import Container, build_container
from .core.constants import DEFAULT_PORT
from .core.exceptions import DomainError
from .customers.controller import register as register_customers
from .database.bootstrap import apply_schema, check_connection
from .employees.controller import register as register_employees
from .farmers.controller import register as register_farmers
from .health.controller import register as register_health
from .health.controller import register_liveness
from .localization.middleware import register as register_localization
from .localization.middleware import t
from .milk_collections.controller import register as register_collections
from .payments.controller import register as register_payments
from .reports.controller import register as register_reports
from .sales.controller import register as register_sales
from .settings import get_settings_module
from .shifts.controller import register as register_shifts

logger = get_logger(__name__)


def _load_settings(settings_module: Optional[str]) -> ModuleType:
    return importlib.import_module(settings_module or get_settings_module())


def _base_app(settings: ModuleType) -> Flask:
    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["ENVIRONMENT"] = os.getenv("ASPNETCORE_ENVIRONMENT") or getattr(settings, "ENVIRONMENT", "Development")
    app.config["PORT"] = int(getattr(settings, "PORT", DEFAULT_PORT))
    app.json.sort_keys = False
    _install_request_logging(app)
    return app


def _install_request_logging(app: Flask) -> None:
    @app.before_request
    def _start_timer():
        g.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        g.started_at = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = getattr(g, "started_at", None)
        elapsed_ms = (time.perf_counter() - started) * 1000 if started else 0.0
        response.headers["X-Request-ID"] = getattr(g, "request_id", "")
        logger.info(
            "HTTP %s %s responded %s in %.1f ms [%s]",
            request.method,
            request.path,
            response.status_code,
            elapsed_ms,
            getattr(g, "request_id", "-"),
        )
        return response


def _wants_json() -> bool:
    return request.path.startswith("/api/") or request.is_json


def _install_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain_error(e: DomainError):
        return jsonify({"success": False, "message": str(e)}), e.status_code

    @app.errorhandler(psycopg2.Error)
    def _database_error(e: psycopg2.Error):
        logger.error("Database error on %s %s: %s", request.method, request.path, e)
        return jsonify({"success": False, "message": f"Database error: {str(e).strip()}"}), 500

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        if e.code and e.code < 400:
            return e
        if _wants_json():
            message = t("error.not_found") if e.code == 404 else e.description
            return jsonify({"success": False, "message": message}), e.code
        return e

    @app.errorhandler(Exception)
    def _unhandled(e: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.path)
        if _wants_json():
            return jsonify({"success": False, "message": t("error.internal")}), 500
        return t("error.internal"), 500


def _startup_database(app: Flask, container: Container, settings: ModuleType) -> None:
    if container.conn is None:
        return

    logger.info("Database target %s", container.conn.config.describe())
    try:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn)
        check_connection(container.conn)
        logger.info("Database connection verified at startup")
    except psycopg2.Error:
        # Keep serving so /health and /api/test-db can be used for diagnostics.
        logger.exception("Database connection failed at startup")


def create_fallback_app(settings: ModuleType) -> Flask:
    """Health-only app served when the full configuration fails."""
    app = _base_app(settings)
    register_liveness(app)
    logger.warning("Started in fallback mode: only /health is available")
    return app


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    settings = _load_settings(settings_module)
    logger.info("Using settings %s", settings.__name__)

    try:
        app = _base_app(settings)
        if container is None:
            container = build_container(settings)
            _startup_database(app, container, settings)

        _install_error_handlers(app)
        register_localization(app)
        register_auth_middleware(app, container)

        register_health(app, container.conn)
        register_auth(app, container)
        register_branches(app, container)
        register_employees(app, container)
        register_farmers(app, container)
        register_customers(app, container)
        register_shifts(app, container)
        register_collections(app, container)
        register_sales(app, container)
        register_payments(app, container)
        register_audit(app, container)
        register_reports(app, container)
    except Exception:
        logger.exception("Application configuration failed")
        return create_fallback_app(settings)

    app.extensions["dairy_container"] = container
    return app


def run() -> None:
    app = create_app()
    port = int(os.getenv("PORT") or app.config.get("PORT") or DEFAULT_PORT)
    logger.info("Starting on port %s", port)
    app.run(host="0.0.0.0", port=port, debug=bool(app.config.get("DEBUG")))


if __name__ == "__main__":
    run()
