from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any, Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: Any, field_name: str = "date") -> date:
    """Parse YYYY-MM-DD string into date."""
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value), "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be in YYYY-MM-DD format")


def parse_optional_date(value: Any, field_name: str = "date") -> Optional[date]:
    if value is None or value == "":
        return None
    return parse_iso_date(value, field_name)


def parse_optional_time(value: Any, field_name: str = "time") -> Optional[time]:
    if value is None or value == "":
        return None
    if isinstance(value, time):
        return value
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(str(value), fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"{field_name} must be in HH:MM format")


def utc_now() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now(timezone.utc)
