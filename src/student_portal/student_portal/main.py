from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container, build_store
from .core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .dashboard.controller import register as register_dashboard
from .results.controller import register as register_results
from .storage.bootstrap import apply_schema
from .storage.connection import DatabaseConnection, DBConfig
from .storage.defaults import seed_defaults
from .students.controller import register as register_students
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def handle_validation(e):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.errorhandler(AuthenticationError)
    def handle_authentication(e):
        return jsonify({"success": False, "message": str(e)}), 401

    @app.errorhandler(AuthorizationError)
    def handle_authorization(e):
        return jsonify({"success": False, "message": str(e)}), 403


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    backend = getattr(settings, "STORE_BACKEND", "memory")
    if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(DatabaseConnection.get_instance(DBConfig.from_dict(settings.DB_CONFIG)))

    store = build_store(
        backend=backend,
        data_dir=getattr(settings, "DATA_DIR", None),
        db_config=getattr(settings, "DB_CONFIG", None),
    )
    logger.info("[student-portal] settings=%s store=%s", settings_module, backend)

    if bool(getattr(settings, "AUTO_SEED_STORE", False)):
        seed_defaults(store)

    container = build_container(store=store, at_risk_threshold=int(getattr(settings, "AT_RISK_THRESHOLD", 75)))
    app.extensions["student_portal"] = container

    _register_error_handlers(app)
    register_users(app, container)
    register_students(app, container)
    register_attendance(app, container)
    register_results(app, container)
    register_dashboard(app, container)

    return app
