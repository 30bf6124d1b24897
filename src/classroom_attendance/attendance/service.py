from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import normalize_iso_date, parse_iso_date, week_of
from ..common.validators import require_field
from ..core.constants import ALL_PERIODS, FULL_DAY_HOURS, PERIODS
from ..core.enums import ExportView, MarkStatus
from ..core.exceptions import MissingRequiredField, ValidationError
from ..students.repository import StudentRepository
from .aggregator import (
    build_daily_view,
    class_rate_for_roster,
    merge_views,
    period_summary,
    percentage_for_hours,
    status_for_hours,
    student_day,
    total_hours_for_date,
)
from .hours import compute_hours
from .model import AttendanceMark, BulkResult, ClassRate, MarkKey, StudentDay, TimeRange
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportData:
    fieldnames: list[str]
    rows: list[dict]
    filename: str


class AttendanceService:
    """Use cases around marks: write path, daily/weekly reads, export rows."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        *,
        full_day_hours: float = FULL_DAY_HOURS,
        periods: Sequence[str] = PERIODS,
    ):
        if full_day_hours <= 0:
            raise ValueError(f"full_day_hours must be greater than 0, got {full_day_hours}")
        self._attendance = attendance
        self._students = students
        self._full_day_hours = full_day_hours
        self._periods = tuple(str(p) for p in periods)

    # -- input normalisation ------------------------------------------------

    def _period(self, value: Any, *, allow_all: bool = False) -> Optional[str]:
        period = str(value).strip()
        if allow_all and period in ("", ALL_PERIODS):
            return None
        if period not in self._periods:
            raise ValidationError(f"Invalid period: {period!r}")
        return period

    @staticmethod
    def _status(value: Any) -> MarkStatus:
        try:
            return MarkStatus(str(value).strip().lower())
        except ValueError:
            raise ValidationError(f"Invalid status: {value!r}")

    @staticmethod
    def _hours_for(status: MarkStatus, time_range: Optional[TimeRange]) -> tuple[Optional[TimeRange], float]:
        if status != MarkStatus.PRESENT:
            return None, 0.0
        return time_range, compute_hours(time_range)

    # -- write path ---------------------------------------------------------

    def mark_attendance(
        self,
        *,
        student_id: Any,
        date: Any,
        period: Any,
        status: Any,
        time_range: Optional[TimeRange] = None,
    ) -> AttendanceMark:
        student_id = require_field(student_id, "studentId")
        date = require_field(date, "date")
        period = require_field(period, "period")
        status = require_field(status, "status")

        key = MarkKey(student_id=str(student_id), date=normalize_iso_date(date), period=self._period(period))
        mark_status = self._status(status)
        time_range, hours = self._hours_for(mark_status, time_range)

        mark = self._attendance.upsert_mark(key, status=mark_status, time_range=time_range, hours=hours)
        logger.info(
            "Marked %s: student=%s date=%s period=%s hours=%s",
            mark_status.value,
            key.student_id,
            key.date,
            key.period,
            hours,
        )
        return mark

    def mark_attendance_bulk(
        self,
        *,
        date: Any,
        period: Any,
        status_by_student: Optional[Mapping[str, Any]],
        time_range: Optional[TimeRange] = None,
    ) -> BulkResult:
        """Apply one status per student for a single period.

        The whole batch is validated first and written in one transaction,
        so either every entry lands or none does.
        """
        date = require_field(date, "date")
        period = require_field(period, "period")
        if status_by_student is None:
            raise MissingRequiredField("studentsStatus")
        if not isinstance(status_by_student, Mapping):
            raise ValidationError("studentsStatus must map student ids to statuses")

        day = normalize_iso_date(date)
        slot = self._period(period)
        entries = {
            str(require_field(sid, "studentId")): self._status(require_field(st, "status"))
            for sid, st in status_by_student.items()
        }

        # Shared by every present entry; absent entries store none.
        if any(status == MarkStatus.PRESENT for status in entries.values()):
            hours = compute_hours(time_range)
        else:
            time_range, hours = None, 0.0
        written = self._attendance.upsert_marks_bulk(
            date=day,
            period=slot,
            entries=entries,
            time_range=time_range,
            hours=hours,
        )
        logger.info("Bulk marked %d students: date=%s period=%s", written, day, slot)
        return BulkResult(date=day, period=slot, written=written, hours=hours)

    # -- read path ----------------------------------------------------------

    def get_marks(self, date: Any, period: Any = None) -> Sequence[AttendanceMark]:
        day = normalize_iso_date(require_field(date, "date"))
        slot = self._period(period if period is not None else ALL_PERIODS, allow_all=True)
        return self._attendance.fetch_marks(day, slot)

    def get_marks_with_students(self, date: Any, period: Any = None) -> list[dict]:
        marks = self.get_marks(date, period)
        ids = sorted({m.student_id for m in marks})
        by_id = {s.student_id: s for s in self._students.get_many(ids)}

        out = []
        for m in marks:
            row = m.to_dict()
            s = by_id.get(m.student_id)
            row["studentId"] = s.brief() if s else {"id": m.student_id}
            out.append(row)
        return out

    def get_daily_view(self, date: Any) -> dict[str, dict[str, AttendanceMark]]:
        return build_daily_view(self.get_marks(date))

    def _roster(self) -> list[str]:
        return [s.student_id for s in self._students.list_all()]

    def get_class_rate(self, date: Any) -> ClassRate:
        day = normalize_iso_date(require_field(date, "date"))
        view = self.get_daily_view(day)
        return class_rate_for_roster(self._roster(), view, day, full_day_hours=self._full_day_hours)

    def get_day_overview(self, date: Any) -> dict:
        day = normalize_iso_date(require_field(date, "date"))
        view = self.get_daily_view(day)
        roster = self._roster()
        return {
            "date": day,
            "rate": class_rate_for_roster(roster, view, day, full_day_hours=self._full_day_hours).to_dict(),
            "students": [
                student_day(view, sid, day, full_day_hours=self._full_day_hours).to_dict() for sid in roster
            ],
        }

    def get_student_day(self, date: Any, student_id: str) -> StudentDay:
        day = normalize_iso_date(require_field(date, "date"))
        view = self.get_daily_view(day)
        return student_day(view, str(student_id), day, full_day_hours=self._full_day_hours)

    def preview(
        self,
        *,
        date: Any,
        period: Any,
        local_edits: Mapping[str, Any],
        time_range: Optional[TimeRange] = None,
    ) -> dict:
        """Merge unsaved edits over stored marks and summarise; nothing is written."""
        day = normalize_iso_date(require_field(date, "date"))
        slot = self._period(require_field(period, "period"))

        view = dict(self.get_daily_view(day))
        edits = {}
        for sid, st in (local_edits or {}).items():
            status = self._status(st)
            tr, hours = self._hours_for(status, time_range)
            edits[str(sid)] = AttendanceMark(
                student_id=str(sid), date=day, period=slot, status=status, time_range=tr, hours=hours
            )

        merged = merge_views(view.get(slot, {}), edits)
        view[slot] = merged
        roster = self._roster()
        summary = period_summary(roster, merged, view, full_day_hours=self._full_day_hours)
        return {
            "date": day,
            "period": slot,
            "marks": {sid: m.to_dict() for sid, m in merged.items()},
            "summary": summary.to_dict(),
        }

    def get_week_summary(self, date: Any) -> dict:
        days = week_of(parse_iso_date(normalize_iso_date(require_field(date, "date"))))
        labels = [d.strftime("%Y-%m-%d") for d in days]
        marks = self._attendance.fetch_marks_between(labels[0], labels[-1])

        by_day: dict[str, list[AttendanceMark]] = {label: [] for label in labels}
        for m in marks:
            by_day.setdefault(m.date, []).append(m)
        views = {label: build_daily_view(by_day[label]) for label in labels}

        students = []
        for s in self._students.list_all():
            students.append(
                {
                    "student": s.brief(),
                    "days": [
                        student_day(views[label], s.student_id, label, full_day_hours=self._full_day_hours).to_dict()
                        for label in labels
                    ],
                }
            )
        return {"start": labels[0], "end": labels[-1], "days": labels, "students": students}

    # -- export -------------------------------------------------------------

    def build_export(self, *, view: Any, date: Any, period: Any = None) -> ExportData:
        try:
            export_view = ExportView(str(view or ExportView.DAY.value).lower())
        except ValueError:
            raise ValidationError(f"Invalid export view: {view!r}")

        day = normalize_iso_date(require_field(date, "date"))
        slot = self._period(period if period is not None else ALL_PERIODS, allow_all=True)
        students = list(self._students.list_all())
        base = ["id", "name", "rollNumber", "email"]

        if export_view == ExportView.WEEK:
            return self._export_week(day, base)

        daily = self.get_daily_view(day)
        label = slot or ALL_PERIODS
        filename = f"attendance_{day}_{export_view.value}_{label}.csv"

        if slot is None:
            fields = base + ["totalHours", "attendanceStatus"]
            for p in self._periods:
                fields += [f"Period {p}", f"Period {p} Hours"]

            rows = []
            for s in students:
                hours = total_hours_for_date(daily, s.student_id)
                row = {k: v for k, v in s.to_dict().items() if k in base}
                row["totalHours"] = hours
                row["attendanceStatus"] = status_for_hours(hours, full_day_hours=self._full_day_hours).value
                for p in self._periods:
                    m = daily.get(p, {}).get(s.student_id)
                    row[f"Period {p}"] = m.status.value if m else "N/A"
                    row[f"Period {p} Hours"] = m.hours if m else 0
                rows.append(row)
            return ExportData(fieldnames=fields, rows=rows, filename=filename)

        fields = base + ["status", "hours", "percentage", "timeRange"]
        rows = []
        for s in students:
            m = daily.get(slot, {}).get(s.student_id)
            row = {k: v for k, v in s.to_dict().items() if k in base}
            row["status"] = m.status.value if m else "N/A"
            row["hours"] = m.hours if m else 0
            row["percentage"] = percentage_for_hours(m.hours if m else 0, full_day_hours=self._full_day_hours)
            tr = m.time_range if m else None
            row["timeRange"] = f"{tr.start_time} - {tr.end_time}" if tr else "N/A"
            rows.append(row)
        return ExportData(fieldnames=fields, rows=rows, filename=filename)

    def _export_week(self, day: str, base: list[str]) -> ExportData:
        summary = self.get_week_summary(day)
        day_dates = [parse_iso_date(d) for d in summary["days"]]

        fields = list(base)
        for d in day_dates:
            fields += [d.strftime("%a (%m/%d)"), f"{d.strftime('%a')} Status"]

        rows = []
        for entry in summary["students"]:
            row = dict(entry["student"])
            for d, info in zip(day_dates, entry["days"]):
                row[d.strftime("%a (%m/%d)")] = info["totalHours"]
                row[f"{d.strftime('%a')} Status"] = info["status"]
            rows.append(row)

        return ExportData(fieldnames=fields, rows=rows, filename=f"attendance_{day}_week_{ALL_PERIODS}.csv")
