"""Class attendance package.

Feature modules (reference, attendance, roll_call, recap, institutions) each
have a thin Flask controller layer over service/repository layers backed by
Firestore.
"""
from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .common.datetime_utils import configure_timezone
from .common.logging import setup_logging
from .container import Container, build_container
from .core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .database.connection import FirestoreConfig, FirestoreConnection
from .database.seed import seed_demo_data

from .attendance.controller import register as register_attendance
from .institutions.controller import register as register_institutions
from .recap.controller import register as register_recap
from .reference.controller import register as register_reference
from .roll_call.controller import register as register_roll_call

logger = logging.getLogger(__name__)


def _register_error_handlers(app: Flask) -> None:
    def _error(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    @app.errorhandler(ValidationError)
    def handle_validation(e: ValidationError):
        return _error(str(e), 400)

    @app.errorhandler(NotFoundError)
    def handle_not_found(e: NotFoundError):
        return _error(str(e), 404)

    @app.errorhandler(AuthorizationError)
    def handle_forbidden(e: AuthorizationError):
        return _error(str(e), 403)

    @app.errorhandler(HTTPException)
    def handle_http(e: HTTPException):
        return _error(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error: %s", e)
        return _error("Terjadi kesalahan pada sistem", 500)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["DEFAULT_INSTITUTION"] = getattr(settings, "DEFAULT_INSTITUTION", "formal")
    app.json.sort_keys = False

    setup_logging(level=getattr(settings, "LOG_LEVEL", "INFO"), fmt=getattr(settings, "LOG_FORMAT", "text"))
    configure_timezone(getattr(settings, "TIMEZONE", "Asia/Jakarta"))
    logger.info("Starting with settings=%s", settings_module)

    if container is None:
        fs_config = FirestoreConfig(**getattr(settings, "FIRESTORE_CONFIG"))
        client = FirestoreConnection.get_instance(fs_config).client()
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            seed_demo_data(client)
        container = build_container(client=client, default_institution=app.config["DEFAULT_INSTITUTION"])

    app.extensions["container"] = container

    register_institutions(app, container)
    register_reference(app, container)
    register_attendance(app, container)
    register_roll_call(app, container)
    register_recap(app, container)

    _register_error_handlers(app)
    return app
