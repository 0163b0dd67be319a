from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.responses import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level_name).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _prepare_database(settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        ensure_demo_users(db_config)
        logger.info("demo seed ready")


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app; pass ``container`` to skip database wiring."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

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
        _prepare_database(settings, db_config)
        container = build_container(
            db_config=db_config,
            school_name=getattr(settings, "REPORT_SCHOOL_NAME", None) or None,
        )

    register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)

    return app
