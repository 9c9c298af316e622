"""Human-friendly renderings used in API listings."""

from __future__ import annotations

from datetime import datetime, tzinfo

import pytz

BYTE_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB")

_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def bytes_to_human(n: int | float | None) -> str:
    """Render a byte count with binary units, e.g. ``1536 -> "1.5 KiB"``."""

    try:
        size = float(n or 0)
    except (TypeError, ValueError):
        size = 0.0

    idx = 0
    while size >= 1024 and idx < len(BYTE_UNITS) - 1:
        size /= 1024
        idx += 1

    value = f"{round(size, 2):.2f}".rstrip("0").rstrip(".")
    return f"{value} {BYTE_UNITS[idx]}"


def resolve_timezone(name: str | None) -> tzinfo:
    """Return the pytz zone called ``name``; unknown names raise ``UnknownTimeZoneError``."""

    return pytz.timezone(name or "UTC")


def day_date_time(value: datetime | None, tz: tzinfo | None = None) -> str | None:
    """Format like ``"Mon, Jan 1, 2024 3:04 PM"``.

    Naive datetimes are taken as UTC. Names are always English so the
    output never depends on the process locale.
    """

    if value is None:
        return None
    if value.tzinfo is None:
        value = pytz.utc.localize(value)
    value = value.astimezone(tz or pytz.utc)

    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return (
        f"{_DAYS[value.weekday()]}, {_MONTHS[value.month - 1]} {value.day}, "
        f"{value.year} {hour}:{value.minute:02d} {meridiem}"
    )
