from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import DEFAULT_AVERAGE_ZONE_MIN, DEFAULT_SAFE_ZONE_MIN, DEFAULT_TARGET_THRESHOLD
from .database.bootstrap import apply_schema, ensure_demo_student, list_tables
from .subjects.controller import register as register_subjects
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
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
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            user_id = ensure_demo_student(db_config)
            logger.info("demo student ready (user_id=%s)", user_id)

        container = build_container(
            db_config=db_config,
            target_threshold=float(getattr(settings, "ATTENDANCE_THRESHOLD", DEFAULT_TARGET_THRESHOLD)),
            safe_zone_min=int(getattr(settings, "SAFE_ZONE_MIN", DEFAULT_SAFE_ZONE_MIN)),
            average_zone_min=int(getattr(settings, "AVERAGE_ZONE_MIN", DEFAULT_AVERAGE_ZONE_MIN)),
        )

    register_users(app, container)
    register_subjects(app, container)
    register_attendance(app, container)

    return app
