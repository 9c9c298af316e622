"""Flask application factory for the file API."""

from __future__ import annotations

import os
from typing import Any, Mapping
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from flask import Flask
from pytz import UnknownTimeZoneError

from .commands import register_commands
from .config import load_config
from .errors import register_error_handlers
from .extensions import db, init_extensions
from .registry import register_blueprints
from .storage import init_storage
from .telemetry import setup_logging
from .utils.formatting import resolve_timezone


def _normalize_db_url(raw: str | None) -> str:
    """
    Normalize DATABASE_URL:
    - postgres:// -> postgresql+psycopg://
    - SQLite drops any query string (?sslmode=...)
    - Postgres gets sslmode=require when missing
    """

    if not raw:
        return "sqlite:///dev.db"

    if raw.startswith("postgres://"):
        raw = raw.replace("postgres://", "postgresql+psycopg://", 1)
    elif raw.startswith("postgresql://"):
        raw = raw.replace("postgresql://", "postgresql+psycopg://", 1)

    parts = urlsplit(raw)
    scheme = parts.scheme

    if scheme.startswith("sqlite"):
        base = raw.split("?", 1)[0]
        return base.split("#", 1)[0]

    if scheme.startswith("postgresql"):
        query_params = dict(parse_qsl(parts.query))
        query_params.setdefault("sslmode", "require")
        return urlunsplit(
            (scheme, parts.netloc, parts.path, urlencode(query_params), parts.fragment)
        )

    return raw


def create_app(config_name: str | None = None, overrides: Mapping[str, Any] | None = None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(load_config(config_name))
    if overrides:
        app.config.update(overrides)

    app.config["SQLALCHEMY_DATABASE_URI"] = _normalize_db_url(
        str(app.config.get("SQLALCHEMY_DATABASE_URI", ""))
    )

    setup_logging(app)

    tz_name = app.config.get("APP_TZ", "UTC")
    try:
        app.extensions["timezone"] = resolve_timezone(tz_name)
    except UnknownTimeZoneError:
        app.extensions["timezone"] = resolve_timezone("UTC")
        app.logger.warning("Invalid APP_TZ '%s', falling back to UTC.", tz_name)

    db_uri = app.config["SQLALCHEMY_DATABASE_URI"]
    app.logger.info("DB URI -> %s", db_uri)
    if db_uri.startswith("sqlite:///") and not db_uri.endswith(":memory:"):
        os.makedirs(os.path.dirname(os.path.abspath(db_uri[len("sqlite:///"):])), exist_ok=True)

    init_extensions(app)
    init_storage(app)
    register_error_handlers(app)
    register_blueprints(app)
    register_commands(app)

    if app.config.get("DEBUG") and not app.config.get("TESTING"):
        with app.app_context():
            db.create_all()

    return app


__all__ = ["create_app", "db"]
