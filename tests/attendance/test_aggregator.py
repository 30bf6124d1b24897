from __future__ import annotations

import itertools

import pytest

from classroom_attendance.attendance.aggregator import (
    build_daily_view,
    class_rate_for_roster,
    merge_views,
    percentage_for_hours,
    period_summary,
    status_for_hours,
    student_day,
    total_hours_for_date,
)
from classroom_attendance.core.enums import DayStatus, MarkStatus


@pytest.mark.parametrize(
    "hours,expected",
    [(8.0, DayStatus.FULL), (9.5, DayStatus.FULL), (4.0, DayStatus.PARTIAL), (0.1, DayStatus.PARTIAL), (0.0, DayStatus.ABSENT), (-1.0, DayStatus.ABSENT)],
)
def test_status_for_hours(hours, expected):
    assert status_for_hours(hours) == expected


def test_status_threshold_is_configurable():
    assert status_for_hours(6.0, full_day_hours=6) == DayStatus.FULL
    assert status_for_hours(6.0) == DayStatus.PARTIAL


@pytest.mark.parametrize("hours,expected", [(4.0, 50), (8.0, 100), (12.0, 100), (0.0, 0), (-2.0, 0), (1.0, 13), (0.2, 3)])
def test_percentage_for_hours(hours, expected):
    assert percentage_for_hours(hours) == expected


def test_total_hours_sums_all_periods(make_mark):
    view = build_daily_view([make_mark("s1", "1", 2.0), make_mark("s1", "2", 1.5), make_mark("s2", "1", 2.0)])
    assert total_hours_for_date(view, "s1") == 3.5
    assert total_hours_for_date(view, "s2") == 2.0
    assert total_hours_for_date(view, "nobody") == 0


def test_total_hours_is_order_independent(make_mark):
    marks = [make_mark("s1", "1", 0.1), make_mark("s1", "2", 0.2), make_mark("s1", "3", 0.7)]
    totals = set()
    for perm in itertools.permutations(marks):
        totals.add(total_hours_for_date(build_daily_view(perm), "s1"))
    assert totals == {1.0}


def test_build_daily_view_groups_by_period_then_student(make_mark):
    view = build_daily_view([make_mark("s1", "1", 2.0), make_mark("s2", "1", 1.0), make_mark("s1", "3", 1.0)])
    assert set(view) == {"1", "3"}
    assert set(view["1"]) == {"s1", "s2"}


def test_class_rate_weights_partial_as_half(make_mark):
    roster = [f"s{i}" for i in range(10)]
    marks = []
    for sid in roster[:6]:
        marks.append(make_mark(sid, "1", 8.0))
    for sid in roster[6:8]:
        marks.append(make_mark(sid, "1", 3.0))

    rate = class_rate_for_roster(roster, build_daily_view(marks), "2025-03-03")

    assert (rate.present, rate.partial, rate.absent, rate.total) == (6, 2, 2, 10)
    assert rate.present_percentage == 70


def test_class_rate_empty_roster_is_zero():
    rate = class_rate_for_roster([], {}, "2025-03-03")
    assert rate.total == 0
    assert rate.present_percentage == 0


def test_class_rate_counts_marks_across_periods(make_mark):
    view = build_daily_view([make_mark("s1", str(p), 2.0) for p in range(1, 5)])
    rate = class_rate_for_roster(["s1", "s2"], view, "2025-03-03")
    assert rate.present == 1
    assert rate.absent == 1
    assert rate.present_percentage == 50


def test_student_day(make_mark):
    view = build_daily_view([make_mark("s1", "1", 2.0), make_mark("s1", "2", 2.0)])
    day = student_day(view, "s1", "2025-03-03")
    assert day.total_hours == 4.0
    assert day.status == DayStatus.PARTIAL
    assert day.percentage == 50


def test_merge_views_local_edits_win(make_mark):
    server = {"s1": make_mark("s1", "1", 2.0), "s2": make_mark("s2", "1", 2.0)}
    local = {"s2": make_mark("s2", "1", 0.0, status=MarkStatus.ABSENT), "s3": make_mark("s3", "1", 1.0)}

    merged = merge_views(server, local)

    assert merged["s1"] is server["s1"]
    assert merged["s2"].status == MarkStatus.ABSENT
    assert "s3" in merged
    # inputs untouched
    assert server["s2"].status == MarkStatus.PRESENT
    assert "s3" not in server


def test_period_summary_counts(make_mark):
    period_marks = {
        "s1": make_mark("s1", "1", 2.0),
        "s2": make_mark("s2", "1", 0.0, status=MarkStatus.ABSENT),
        "outsider": make_mark("outsider", "1", 2.0),
    }
    view = {"1": period_marks}

    summary = period_summary(["s1", "s2", "s3", "s4"], period_marks, view)

    assert summary.present == 1
    assert summary.absent == 1
    assert summary.unmarked == 2
    assert summary.partial == 1
    assert summary.total == 4
    assert summary.present_percentage == 25
