from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .calendar.controller import register as register_calendar
from .common.http import fail
from .container import build_container
from .core.constants import CALENDAR_CACHE_TTL_SECONDS, REPORT_CACHE_TTL_SECONDS
from .core.exceptions import ConflictError, DataFetchError, DomainError, ValidationError
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .payroll.controller import register as register_payroll

logger = logging.getLogger(__name__)

_DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return fail(str(exc), 400)

    @app.errorhandler(ConflictError)
    def handle_conflict_error(exc: ConflictError):
        return fail(str(exc), 409)

    @app.errorhandler(DataFetchError)
    def handle_data_fetch_error(exc: DataFetchError):
        return fail(f"Data store error: {exc}", 502)

    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        return fail(str(exc), 400)


def register_routes(app: Flask, container) -> None:
    register_payroll(app, container)
    register_calendar(app, container)
    register_attendance(app, container)
    register_error_handlers(app)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=_DATABASE_DIR / "schema.sql")
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=_DATABASE_DIR / "seed.sql")

    container = build_container(
        db_config=db_config,
        report_cache_ttl=float(getattr(settings, "REPORT_CACHE_TTL_SECONDS", REPORT_CACHE_TTL_SECONDS)),
        calendar_cache_ttl=float(getattr(settings, "CALENDAR_CACHE_TTL_SECONDS", CALENDAR_CACHE_TTL_SECONDS)),
    )
    register_routes(app, container)
    return app
