from __future__ import annotations

import importlib
import logging
from datetime import datetime, timezone

from dotenv import load_dotenv
from flask import Flask, jsonify

from .attendance.controller import register as register_attendance
from .config import get_settings_module
from .container import Container, build_container
from .core.engine_config import EngineConfig
from .core.exceptions import StoreError, ValidationError
from .database.bootstrap import apply_schema, list_tables
from .students.controller import register as register_students

logger = logging.getLogger(__name__)


def _error_body(code: str, message: str) -> dict:
    return {
        "error": {"code": code, "message": message},
        "generated_at": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return jsonify(_error_body("VALIDATION_ERROR", str(exc))), 400

    @app.errorhandler(StoreError)
    def handle_store_error(exc: StoreError):
        logger.error("Store call failed: %s", exc)
        return jsonify(_error_body("STORE_ERROR", str(exc))), 502


def create_app(container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))

        container = build_container(db_config=db_config, config=EngineConfig.from_settings(settings))

    register_error_handlers(app)
    register_students(app, container)
    register_attendance(app, container)

    return app
