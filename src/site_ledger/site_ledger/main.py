from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .expenses.controller import register as register_expenses
from .funds.controller import register as register_funds
from .projects.controller import register as register_projects
from .purchases.controller import register as register_purchases
from .reports.controller import register as register_reports
from .reports.export.print_html import format_money
from .summaries.controller import register as register_summaries
from .suppliers.controller import register as register_suppliers
from .transfers.controller import register as register_transfers
from .users.controller import register as register_users
from .workers.controller import register as register_workers

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"

_STATUS = {
    ValidationError: 400,
    AuthenticationError: 401,
    AuthorizationError: 403,
    NotFoundError: 404,
    ConflictError: 409,
}


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def domain_error(e: DomainError):
        status = next((code for cls, code in _STATUS.items() if isinstance(e, cls)), 400)
        return jsonify({"success": False, "message": str(e)}), status

    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        return jsonify({"success": False, "message": e.description}), e.code

    @app.errorhandler(Exception)
    def unexpected_error(e: Exception):
        app.logger.exception("unhandled error")
        message = f"Internal server error: {e}" if app.config.get("DEBUG") else "Internal server error"
        return jsonify({"success": False, "message": message}), 500


def _bootstrap_database(settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        ensure_demo_users(db_config)
        logger.info("demo seed ready")


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Pass a ready ``container`` (tests use in-memory repositories) to skip the
    database bootstrap and MySQL wiring.
    """

    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["COMPANY_NAME"] = getattr(settings, "COMPANY_NAME", "")
    app.config["CURRENCY"] = getattr(settings, "CURRENCY", "")
    app.config["JSON_SORT_KEYS"] = False
    app.jinja_env.filters["money"] = format_money

    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        _bootstrap_database(settings, db_config)
        container = build_container(db_config=db_config)

    _register_error_handlers(app)

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        database = container.conn.ping() if container.conn is not None else None
        return jsonify({"success": True, "data": {"status": "ok", "database": database}})

    register_users(app, container)
    register_projects(app, container)
    register_workers(app, container)
    register_attendance(app, container)
    register_transfers(app, container)
    register_funds(app, container)
    register_purchases(app, container)
    register_expenses(app, container)
    register_suppliers(app, container)
    register_summaries(app, container)
    register_reports(app, container)

    return app
