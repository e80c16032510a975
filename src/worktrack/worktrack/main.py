from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.datetime_utils import parse_clock
from .database.bootstrap import apply_schema, apply_sql_file, ensure_demo_users, list_tables
from .database.connection import DBConfig

from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .dashboard.controller import register as register_dashboard
from .leave.controller import register as register_leave
from .preferences.controller import register as register_preferences
from .tasks.controller import register as register_tasks
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format=LOG_FORMAT)

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    db_config = getattr(settings, "DB_CONFIG")

    if container is None:
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_users(db_config)
            apply_sql_file(db_config, path=DATABASE_DIR / "seed.sql")
            logger.info("Demo seed ready")

        container = build_container(
            db_config=db_config,
            secret_key=app.secret_key,
            mail=getattr(settings, "MAIL", None),
            workday_start=parse_clock(getattr(settings, "WORKDAY_START", "09:00")),
            reset_token_max_age=int(getattr(settings, "RESET_TOKEN_MAX_AGE", 3600)),
            default_theme=getattr(settings, "DEFAULT_THEME", "system"),
            default_language=getattr(settings, "DEFAULT_LANGUAGE", "en"),
        )

    app.extensions["worktrack"] = container

    register_preferences(app, container)
    register_users(app, container)
    register_dashboard(app, container)
    register_attendance(app, container)
    register_leave(app, container)
    register_tasks(app, container)

    return app
