from __future__ import annotations

import atexit
import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .core.logging_config import configure_logging, get_logger
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig

from .common.web import register_error_handlers
from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .leaves.controller import register as register_leaves
from .payroll.controller import register as register_payroll

logger = get_logger("main")


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    An injected ``container`` skips database bootstrap entirely (tests).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        json_lines=bool(getattr(settings, "LOG_JSON", False)),
    )

    if container is None:
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(db_config=db_config, settings=settings)
        atexit.register(container.close)

    app.extensions["hr_portal.container"] = container

    register_error_handlers(app)
    register_attendance(app, container)
    register_leaves(app, container)
    register_payroll(app, container)

    return app
