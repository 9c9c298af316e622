"""Shared Flask extensions."""

from __future__ import annotations

from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

# Database
db = SQLAlchemy()

migrate = Migrate()


def init_extensions(app) -> None:
    """Bind the database and migration support to ``app``."""

    db.init_app(app)
    migrate.init_app(app, db)
