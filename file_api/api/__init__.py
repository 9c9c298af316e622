"""JSON API blueprints."""

from __future__ import annotations

from flask import Blueprint, Flask
from werkzeug.utils import import_string

from file_api.api.files import bp as files_bp
from file_api.api.folders import bp as folders_bp


def build_api_blueprint(app: Flask) -> Blueprint:
    """Folder and file routes under ``ROUTE_PREFIX`` behind ``ROUTE_MIDDLEWARE``."""

    prefix = "/" + str(app.config.get("ROUTE_PREFIX") or "").strip("/")
    api = Blueprint("api", __name__, url_prefix=prefix.rstrip("/") or None)

    for dotted in app.config.get("ROUTE_MIDDLEWARE") or []:
        hook = import_string(dotted) if isinstance(dotted, str) else dotted
        api.before_request(hook)

    api.register_blueprint(folders_bp)
    api.register_blueprint(files_bp)
    return api
