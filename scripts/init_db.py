"""Create the tracker tables (and optionally the demo student).

Usage: python scripts/init_db.py [--seed]
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_tracker.attendance_tracker.database.bootstrap import apply_schema, ensure_demo_student, list_tables

logger = logging.getLogger("init_db")


def main(argv: list[str]) -> None:
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format="%(levelname)s %(message)s")
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    logger.info("tables in %s: %s", db_config.get("database"), ", ".join(sorted(list_tables(db_config))))

    if "--seed" in argv:
        user_id = ensure_demo_student(db_config)
        logger.info("demo student user_id=%s", user_id)


if __name__ == "__main__":
    main(sys.argv[1:])
