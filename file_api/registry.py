"""Central blueprint registration."""

from __future__ import annotations

from flask import Blueprint, Flask

from file_api.api import build_api_blueprint
from file_api.api.health import bp as health_bp


def register_blueprints(app: Flask) -> dict[str, Blueprint]:
    """Register every blueprint and return them indexed by name."""

    entries: list[tuple[Blueprint, dict[str, object]]] = [
        (build_api_blueprint(app), {}),
        (health_bp, {}),
    ]

    registry: dict[str, Blueprint] = {}
    for blueprint, options in entries:
        app.register_blueprint(blueprint, **options)
        registry[blueprint.name] = blueprint

    return registry
