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
from .database.bootstrap import apply_schema, apply_sql_file, list_tables
from .fees.controller import register as register_fees
from .payments.controller import register as register_payments
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)

SQL_DIR = Path(__file__).resolve().parents[2] / "database"
SCHEMA_PATH = SQL_DIR / "schema.sql"
SEED_PATH = SQL_DIR / "seed.sql"


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
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            logger.info("seeded demo roster (%d statements)", apply_sql_file(db_config, sql_path=SEED_PATH))

        if not getattr(settings, "PAYMENT_KEY_SECRET", ""):
            logger.warning("PAYMENT_KEY_SECRET is empty; every payment confirmation will be rejected")

        container = build_container(
            db_config=db_config,
            payment_secret=getattr(settings, "PAYMENT_KEY_SECRET", ""),
            defaulter_threshold=float(getattr(settings, "DEFAULTER_THRESHOLD", 75.0)),
        )

    register_fees(app, container)
    register_payments(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
