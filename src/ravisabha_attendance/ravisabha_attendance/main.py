from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import AppSettings, Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .database.connection import DBConfig
from .members.controller import register as register_members
from .ravisabha.controller import register as register_ravisabha

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s : %(message)s"
DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def setup_logging(app: Flask, level: Optional[str] = None) -> None:
    """Console logging for the Flask app logger and the package loggers."""

    level_no = logging.getLevelName((level or ("DEBUG" if app.debug else "INFO")).upper())
    if not isinstance(level_no, int):
        level_no = logging.INFO

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(level_no)

    package_logger = logging.getLogger(__package__)
    for logger in (app.logger, package_logger):
        logger.setLevel(level_no)
        if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
            logger.addHandler(handler)


def create_app(*, settings_module: Optional[str] = None, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.debug = app.config["DEBUG"]
    setup_logging(app, getattr(settings, "LOG_LEVEL", None))

    app_settings = AppSettings.from_module(settings)

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        app.logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            app.logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            app.logger.info("demo seed ready")

        container = build_container(db_config=db_config, settings=app_settings)

    register_attendance(app, container)
    register_ravisabha(app, container)
    register_members(app, container)

    @app.errorhandler(404)
    def _not_found(_e):
        return jsonify({"success": False, "message": "Not found"}), 404

    return app
