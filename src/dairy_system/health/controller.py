from __future__ import annotations

from typing import Optional

from flask import Flask, current_app, jsonify

from ..common.datetime_utils import utc_now
from ..common.logger import get_logger
from ..core.constants import APP_VERSION
from ..database.bootstrap import check_connection
from ..database.connection import DatabaseConnection

logger = get_logger(__name__)


def register_liveness(app: Flask) -> None:
    """Only `/health`; the fallback app serves nothing else."""

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify(
            {
                "status": "healthy",
                "timestamp": utc_now().isoformat(),
                "environment": current_app.config.get("ENVIRONMENT"),
            }
        ), 200


def register(app: Flask, conn: Optional[DatabaseConnection] = None) -> None:
    """Health and diagnostics routes."""
    register_liveness(app)

    @app.route("/version", methods=["GET"], endpoint="version")
    def version():
        return jsonify({"version": APP_VERSION, "build": utc_now().strftime("%Y-%m-%d")})

    @app.route("/api/test-db", methods=["GET"], endpoint="test_db")
    @app.route("/db-test", methods=["GET"], endpoint="db_test")
    def test_db():
        if conn is None:
            return jsonify({"success": False, "error": "Database is not configured"}), 500
        try:
            result = check_connection(conn)
        except Exception as e:
            logger.exception("Database test failed")
            return jsonify({"success": False, "error": f"Database error: {e}"}), 500
        logger.info("Database test successful: %s", result)
        return jsonify({"success": True, "result": result})
