from __future__ import annotations

from datetime import date, datetime, timezone

from ..core.exceptions import InvalidDateError


def parse_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a calendar date."""
    parts = str(value or "").strip().split("-")
    if len(parts) != 3 or not all(p.isascii() and p.isdigit() for p in parts):
        raise InvalidDateError(f"Invalid date format: {value!r} (expected YYYY-MM-DD)")

    year, month, day = (int(p) for p in parts)
    try:
        return date(year, month, day)
    except ValueError:
        raise InvalidDateError(f"Invalid date: {value!r}")


def _calendar_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def format_date(value: date | datetime) -> str:
    """Format as ``DD-MM-YYYY`` (aware datetimes are taken in UTC)."""
    return _calendar_date(value).strftime("%d-%m-%Y")


def to_iso(value: date | datetime) -> str:
    """Wire format for attendance arrays: ``YYYY-MM-DD``, no time component."""
    return _calendar_date(value).isoformat()
