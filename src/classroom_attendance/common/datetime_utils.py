from __future__ import annotations

import re
from datetime import date, datetime, timedelta

from ..core.exceptions import InvalidTimeFormat, ValidationError

_HHMM = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (expected YYYY-MM-DD): {value!r}")


def normalize_iso_date(value) -> str:
    """Canonical YYYY-MM-DD form for a date or date string."""
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    return parse_iso_date(str(value).strip()).strftime("%Y-%m-%d")


def parse_hhmm_minutes(value: str) -> int:
    """Minutes since midnight for a 24-hour HH:MM string."""
    m = _HHMM.match(value.strip()) if isinstance(value, str) else None
    if not m:
        raise InvalidTimeFormat(f"Invalid time (expected HH:MM): {value!r}")

    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeFormat(f"Invalid time (expected HH:MM): {value!r}")
    return hours * 60 + minutes


def week_of(day: date) -> list[date]:
    """Sunday..Saturday week containing ``day``."""
    # date.weekday(): Monday=0 .. Sunday=6
    start = day - timedelta(days=(day.weekday() + 1) % 7)
    return [start + timedelta(days=i) for i in range(7)]
