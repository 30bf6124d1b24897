"""Example: attendance rules without Flask or a database.

Controllers are thin; the numbers all come from the pure functions below.
"""

from classroom_attendance.attendance.aggregator import (
    build_daily_view,
    class_rate_for_roster,
    percentage_for_hours,
    status_for_hours,
    total_hours_for_date,
)
from classroom_attendance.attendance.hours import compute_hours
from classroom_attendance.attendance.model import AttendanceMark, TimeRange
from classroom_attendance.core.enums import MarkStatus


def main():
    day = "2025-03-03"
    morning = TimeRange("08:00", "12:00")
    afternoon = TimeRange("13:00", "17:00")

    marks = [
        AttendanceMark("s1", day, "1", MarkStatus.PRESENT, morning, compute_hours(morning)),
        AttendanceMark("s1", day, "2", MarkStatus.PRESENT, afternoon, compute_hours(afternoon)),
        AttendanceMark("s2", day, "1", MarkStatus.PRESENT, morning, compute_hours(morning)),
        AttendanceMark("s3", day, "1", MarkStatus.ABSENT, None, 0.0),
    ]
    view = build_daily_view(marks)

    for sid in ("s1", "s2", "s3"):
        hours = total_hours_for_date(view, sid)
        print(sid, hours, status_for_hours(hours).value, f"{percentage_for_hours(hours)}%")

    print(class_rate_for_roster(["s1", "s2", "s3"], view, day).to_dict())


if __name__ == "__main__":
    main()
