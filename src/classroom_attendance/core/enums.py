from __future__ import annotations

from enum import Enum


class MarkStatus(str, Enum):
    """Status stored on a single period mark."""

    PRESENT = "present"
    ABSENT = "absent"


class DayStatus(str, Enum):
    """Classification of a student's day from accumulated hours."""

    FULL = "full"
    PARTIAL = "partial"
    ABSENT = "absent"


class ExportView(str, Enum):
    DAY = "day"
    WEEK = "week"
