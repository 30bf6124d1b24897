"""Pure aggregation over already-fetched marks.

Nothing here touches storage; every function takes a snapshot and returns
new values.
"""
from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Sequence

from ..core.constants import FULL_DAY_HOURS, PARTIAL_WEIGHT
from ..core.enums import DayStatus, MarkStatus
from .hours import round_half_up
from .model import AttendanceMark, ClassRate, DailyAttendanceView, PeriodSummary, StudentDay


def build_daily_view(marks: Iterable[AttendanceMark]) -> dict[str, dict[str, AttendanceMark]]:
    view: dict[str, dict[str, AttendanceMark]] = defaultdict(dict)
    for m in marks:
        view[m.period][m.student_id] = m
    return dict(view)


def total_hours_for_date(view: DailyAttendanceView, student_id: str) -> float:
    # Decimal keeps the sum independent of iteration order.
    total = sum(
        (Decimal(str(marks[student_id].hours)) for marks in view.values() if student_id in marks),
        Decimal(0),
    )
    return float(total)


def status_for_hours(hours: float, *, full_day_hours: float = FULL_DAY_HOURS) -> DayStatus:
    if hours >= full_day_hours:
        return DayStatus.FULL
    if hours > 0:
        return DayStatus.PARTIAL
    return DayStatus.ABSENT


def percentage_for_hours(hours: float, *, full_day_hours: float = FULL_DAY_HOURS) -> int:
    pct = round_half_up(Decimal(str(hours)) / Decimal(str(full_day_hours)) * 100)
    return max(0, min(pct, 100))


def student_day(
    view: DailyAttendanceView,
    student_id: str,
    date: str,
    *,
    full_day_hours: float = FULL_DAY_HOURS,
) -> StudentDay:
    hours = total_hours_for_date(view, student_id)
    return StudentDay(
        student_id=student_id,
        date=date,
        total_hours=hours,
        status=status_for_hours(hours, full_day_hours=full_day_hours),
        percentage=percentage_for_hours(hours, full_day_hours=full_day_hours),
    )


def class_rate_for_roster(
    roster: Sequence[str],
    view: DailyAttendanceView,
    date: Optional[str] = None,
    *,
    full_day_hours: float = FULL_DAY_HOURS,
) -> ClassRate:
    """Full/partial/absent counts for every student on the roster.

    ``view`` must already be the view for ``date``; the date is carried only
    for callers that log or label the result.
    """
    counts = {DayStatus.FULL: 0, DayStatus.PARTIAL: 0, DayStatus.ABSENT: 0}
    for student_id in roster:
        hours = total_hours_for_date(view, student_id)
        counts[status_for_hours(hours, full_day_hours=full_day_hours)] += 1

    total = len(roster)
    present = counts[DayStatus.FULL]
    partial = counts[DayStatus.PARTIAL]
    pct = 0
    if total > 0:
        weighted = Decimal(present) + Decimal(str(PARTIAL_WEIGHT)) * partial
        pct = round_half_up(weighted / total * 100)

    return ClassRate(
        present=present,
        partial=partial,
        absent=counts[DayStatus.ABSENT],
        total=total,
        present_percentage=pct,
    )


def merge_views(
    server_snapshot: Mapping[str, AttendanceMark],
    local_edits: Mapping[str, AttendanceMark],
) -> dict[str, AttendanceMark]:
    """Reconcile one period's marks with pending local edits.

    Keys are student ids; a local edit replaces the server mark for that
    student wholesale.
    """
    merged = dict(server_snapshot)
    merged.update(local_edits)
    return merged


def period_summary(
    roster: Sequence[str],
    period_marks: Mapping[str, AttendanceMark],
    view: DailyAttendanceView,
    *,
    full_day_hours: float = FULL_DAY_HOURS,
) -> PeriodSummary:
    on_roster = [period_marks[s] for s in roster if s in period_marks]
    present = sum(1 for m in on_roster if m.status == MarkStatus.PRESENT)
    absent = sum(1 for m in on_roster if m.status == MarkStatus.ABSENT)
    partial = sum(
        1
        for s in roster
        if status_for_hours(total_hours_for_date(view, s), full_day_hours=full_day_hours) == DayStatus.PARTIAL
    )

    total = len(roster)
    pct = round_half_up(Decimal(present) / total * 100) if total > 0 else 0
    return PeriodSummary(
        present=present,
        absent=absent,
        unmarked=total - (present + absent),
        partial=partial,
        total=total,
        present_percentage=pct,
    )
