from __future__ import annotations

import importlib
import logging
from datetime import datetime, timezone
from types import ModuleType
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from pymongo.errors import PyMongoError
from werkzeug.exceptions import HTTPException, NotFound

from .assignments.controller import register as register_assignments
from .classes.controller import register as register_classes
from .config import get_settings_module
from .container import Container, build_container
from .core.constants import API_VERSION
from .core.exceptions import DataIntegrityError, NotFoundError, ValidationError
from .database.bootstrap import ensure_demo_users, ensure_indexes
from .reports.controller import register as register_reports
from .sessions.controller import register as register_sessions
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
}


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation_error(e: ValidationError):
        return jsonify({"message": str(e)}), 400

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return jsonify({"message": str(e)}), 404

    @app.errorhandler(DataIntegrityError)
    def _integrity_error(e: DataIntegrityError):
        logger.exception("data integrity violation on %s %s", request.method, request.path)
        payload = {"message": "Stored data is inconsistent"}
        if app.config["ENVIRONMENT"] != "production":
            payload["detail"] = str(e)
        return jsonify(payload), 500

    @app.errorhandler(PyMongoError)
    def _db_error(e: PyMongoError):
        logger.exception("%s %s failed due to MongoDB error", request.method, request.path)
        return jsonify({"message": "Database unavailable. Please try again later."}), 503

    @app.errorhandler(NotFound)
    def _route_not_found(e: NotFound):
        return (
            jsonify({"message": "Route not found", "requestedUrl": request.full_path.rstrip("?"), "method": request.method}),
            404,
        )

    @app.errorhandler(Exception)
    def _server_error(e: Exception):
        if isinstance(e, HTTPException):
            return jsonify({"message": e.description}), e.code
        logger.exception("unhandled error on %s %s", request.method, request.path)
        # Don't leak error details in production
        message = "Server error" if app.config["ENVIRONMENT"] == "production" else str(e)
        return jsonify({"message": message}), 500


def _bootstrap_database(container: Container, settings: ModuleType) -> None:
    if container.conn is None:
        return
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        ensure_indexes(container.conn)
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        ensure_demo_users(container.conn)


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["ENVIRONMENT"] = getattr(settings, "ENVIRONMENT", "development")
    app.config["MAX_CONTENT_LENGTH"] = getattr(settings, "MAX_CONTENT_LENGTH", None)

    if container is None:
        mongo_config = getattr(settings, "MONGO_CONFIG")
        container = build_container(mongo_config=mongo_config)
        logger.info("settings=%s db=%s/%s", settings_module, container.conn.config.redacted_uri, mongo_config["database"])
        _bootstrap_database(container, settings)

    @app.after_request
    def _security_headers(response):
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response

    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        return jsonify(
            {"message": "Class Management API", "version": API_VERSION, "environment": app.config["ENVIRONMENT"]}
        )

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify(
            {
                "status": "OK",
                "message": "Class Management API is running",
                "environment": app.config["ENVIRONMENT"],
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        )

    register_users(app, container)
    register_classes(app, container)
    register_sessions(app, container)
    register_assignments(app, container)
    register_reports(app, container)
    _register_error_handlers(app)

    return app
