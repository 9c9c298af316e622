"""Request payload helpers shared by the API blueprints."""

from __future__ import annotations

from typing import Any, Mapping

from flask import request

from file_api.errors import ValidationError


def payload() -> dict[str, Any]:
    """JSON body when present, otherwise form fields."""

    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    out: dict[str, Any] = {}
    for key in request.form.keys():
        values = request.form.getlist(key)
        name = key[:-2] if key.endswith("[]") else key
        out[name] = values if key.endswith("[]") or len(values) > 1 else values[0]
    return out


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def require(data: Mapping[str, Any], *fields: str) -> None:
    """Raise :class:`ValidationError` listing every blank required field."""

    errors = {
        field: [f"The {field.replace('_', ' ')} field is required."]
        for field in fields
        if _is_blank(data.get(field))
    }
    if errors:
        raise ValidationError(errors)


def optional_int(data: Mapping[str, Any], field: str) -> int | None:
    value = data.get(field)
    if _is_blank(value):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError.single(field, f"The {field.replace('_', ' ')} must be an integer.")


def as_list(value: Any) -> list[Any]:
    if _is_blank(value):
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def int_list(data: Mapping[str, Any], field: str) -> list[int]:
    try:
        return [int(item) for item in as_list(data.get(field))]
    except (TypeError, ValueError):
        raise ValidationError.single(field, f"The {field.replace('_', ' ')} must be integers.")


def parse_positive_int(raw: str | None, default: int, *, upper: int | None = None) -> int:
    try:
        value = int(raw) if raw is not None else default
    except (TypeError, ValueError):
        return default
    if value <= 0:
        value = default
    if upper is not None and value > upper:
        value = upper
    return value
