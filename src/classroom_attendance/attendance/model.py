from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.enums import DayStatus, MarkStatus
from ..core.exceptions import InvalidTimeFormat


@dataclass(frozen=True)
class TimeRange:
    start_time: Optional[str] = None
    end_time: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["TimeRange"]:
        """Accept {"startTime", "endTime"} (or snake_case) from JSON bodies."""
        if not payload:
            return None
        if isinstance(payload, TimeRange):
            return payload
        if not isinstance(payload, Mapping):
            raise InvalidTimeFormat("timeRange must be an object with startTime/endTime")
        start = payload.get("startTime", payload.get("start_time"))
        end = payload.get("endTime", payload.get("end_time"))
        return cls(start_time=start or None, end_time=end or None)

    def to_dict(self) -> dict:
        return {"startTime": self.start_time, "endTime": self.end_time}


@dataclass(frozen=True)
class MarkKey:
    student_id: str
    date: str
    period: str


@dataclass(frozen=True)
class AttendanceMark:
    """Domain entity: one student, one date, one period."""

    student_id: str
    date: str
    period: str
    status: MarkStatus
    time_range: Optional[TimeRange]
    hours: float

    @property
    def key(self) -> MarkKey:
        return MarkKey(student_id=self.student_id, date=self.date, period=self.period)

    def to_dict(self) -> dict:
        return {
            "studentId": self.student_id,
            "date": self.date,
            "period": self.period,
            "status": self.status.value,
            "timeRange": self.time_range.to_dict() if self.time_range else None,
            "hours": self.hours,
        }


# period -> (student_id -> mark)
DailyAttendanceView = Mapping[str, Mapping[str, AttendanceMark]]


@dataclass(frozen=True)
class ClassRate:
    present: int
    partial: int
    absent: int
    total: int
    present_percentage: int

    def to_dict(self) -> dict:
        return {
            "present": self.present,
            "partial": self.partial,
            "absent": self.absent,
            "total": self.total,
            "presentPercentage": self.present_percentage,
        }


@dataclass(frozen=True)
class PeriodSummary:
    """Counters shown while marking a single period."""

    present: int
    absent: int
    unmarked: int
    partial: int
    total: int
    present_percentage: int

    def to_dict(self) -> dict:
        return {
            "present": self.present,
            "absent": self.absent,
            "unmarked": self.unmarked,
            "partialPresent": self.partial,
            "total": self.total,
            "presentPercentage": self.present_percentage,
        }


@dataclass(frozen=True)
class StudentDay:
    student_id: str
    date: str
    total_hours: float
    status: DayStatus
    percentage: int

    def to_dict(self) -> dict:
        return {
            "studentId": self.student_id,
            "date": self.date,
            "totalHours": self.total_hours,
            "status": self.status.value,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class BulkResult:
    date: str
    period: str
    written: int
    hours: float
