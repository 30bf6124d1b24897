"""Time range -> fractional hours."""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..common.datetime_utils import parse_hhmm_minutes
from .model import TimeRange


def round_half_up(value) -> int:
    """Round to the nearest integer, ties away from zero."""
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_hours(time_range: Optional[TimeRange]) -> float:
    """Hours between start and end, rounded to one decimal.

    Missing range or missing endpoint gives 0. End before start gives a
    negative value; callers decide whether that matters.
    """
    if time_range is None or not time_range.start_time or not time_range.end_time:
        return 0.0

    start = parse_hhmm_minutes(time_range.start_time)
    end = parse_hhmm_minutes(time_range.end_time)

    # tenths of an hour = minutes / 6, computed exactly
    tenths = round_half_up(Decimal(end - start) / Decimal(6))
    return tenths / 10
