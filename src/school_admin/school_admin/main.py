from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .common.logging_setup import configure_logging
from .container import Container, build_container
from .core.constants import (
    DEFAULT_MAX_LESSONS,
    DEFAULT_SHEETS_EXPORT_BASE_URL,
    ENROLLMENT_TAB,
    ENROLLMENT_TAB_GID,
    TEACHER_TAB,
    TEACHER_TAB_GID,
)
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig, DatabaseConnection
from .cli_commands import register as register_cli
from .schedules.controller import register as register_schedules
from .students.controller import register as register_students
from .teachers.controller import register as register_teachers

logger = logging.getLogger(__name__)


def _mask(value: str) -> str:
    if not value:
        return "EMPTY"
    return f"{value[:10]}..."


def _container_from_settings(settings) -> Container:
    return build_container(
        db_config=getattr(settings, "DB_CONFIG"),
        google_sheet_id=getattr(settings, "GOOGLE_SHEET_ID", ""),
        webhook_url=getattr(settings, "SHEETS_WEBHOOK_URL", ""),
        export_base_url=getattr(settings, "SHEETS_EXPORT_BASE_URL", DEFAULT_SHEETS_EXPORT_BASE_URL),
        teacher_tab=getattr(settings, "TEACHER_TAB", TEACHER_TAB),
        enrollment_tab=getattr(settings, "ENROLLMENT_TAB", ENROLLMENT_TAB),
        tab_gids={
            getattr(settings, "TEACHER_TAB", TEACHER_TAB): int(getattr(settings, "TEACHER_TAB_GID", TEACHER_TAB_GID)),
            getattr(settings, "ENROLLMENT_TAB", ENROLLMENT_TAB): int(getattr(settings, "ENROLLMENT_TAB_GID", ENROLLMENT_TAB_GID)),
        },
        http_timeout=getattr(settings, "SHEETS_HTTP_TIMEOUT", None),
        max_lessons=int(getattr(settings, "MAX_LESSONS_PER_CARD", DEFAULT_MAX_LESSONS)),
    )


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        fmt=getattr(settings, "LOG_FORMAT", "") or None,
        log_file=getattr(settings, "LOG_FILE", "") or None,
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.debug(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            conn = DatabaseConnection(DBConfig.from_dict(db_config))
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(conn, schema_path=schema_path)
            logger.info("Schema ready (tables=%s)", len(list_tables(conn)))

        container = _container_from_settings(settings)

    register_teachers(app, container)
    register_students(app, container)
    register_schedules(app, container)
    register_cli(app, container)

    @app.route("/api/check-env", methods=["GET"], endpoint="check_env")
    def check_env():
        sheet_config = {
            "googleSheetId": _mask(container.google_sheet_id),
            "webhookConfigured": container.sheet_connector.can_write,
        }
        all_present = bool(container.google_sheet_id) and container.sheet_connector.can_write
        return jsonify(
            {
                "status": "All sheet settings present" if all_present else "Some sheet settings missing",
                "config": sheet_config,
            }
        )

    return app
