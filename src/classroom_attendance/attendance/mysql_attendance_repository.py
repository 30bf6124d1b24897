from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.enums import MarkStatus
from ..core.exceptions import DuplicateKeyViolation, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, is_duplicate_key
from .model import AttendanceMark, MarkKey, TimeRange
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_SELECT = """
    SELECT student_id, mark_date, period, status, start_time, end_time, hours
    FROM attendance_marks
"""

# One statement: the UNIQUE KEY on (student_id, mark_date, period) turns the
# insert into a replace of status/time range/hours.
_UPSERT = """
    INSERT INTO attendance_marks(student_id, mark_date, period, status, start_time, end_time, hours)
    VALUES(%s,%s,%s,%s,%s,%s,%s)
    ON DUPLICATE KEY UPDATE
        status=VALUES(status),
        start_time=VALUES(start_time),
        end_time=VALUES(end_time),
        hours=VALUES(hours)
"""


def _row_to_mark(r: Dict[str, Any]) -> AttendanceMark:
    start, end = r.get("start_time"), r.get("end_time")
    mark_date = r["mark_date"]
    return AttendanceMark(
        student_id=str(r["student_id"]),
        date=mark_date.strftime("%Y-%m-%d") if hasattr(mark_date, "strftime") else str(mark_date),
        period=str(r["period"]),
        status=MarkStatus(r["status"]),
        time_range=TimeRange(start_time=start, end_time=end) if (start or end) else None,
        hours=float(r.get("hours") or 0),
    )


def _translate_integrity_error(exc: IntegrityError, what: str) -> Exception:
    if is_duplicate_key(exc):
        return DuplicateKeyViolation(f"Duplicate attendance key for {what}")
    if getattr(exc, "errno", None) == errorcode.ER_NO_REFERENCED_ROW_2:
        return NotFoundError(f"Student not found for {what}")
    return exc


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_marks(self, date: str, period: Optional[str] = None) -> Sequence[AttendanceMark]:
        clauses = ["mark_date=%s"]
        params: list[object] = [date]
        if period is not None:
            clauses.append("period=%s")
            params.append(period)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE {' AND '.join(clauses)} ORDER BY period ASC, student_id ASC",
                tuple(params),
            )
            return [_row_to_mark(r) for r in fetchall(cur)]

    def fetch_marks_between(self, start: str, end: str) -> Sequence[AttendanceMark]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE mark_date BETWEEN %s AND %s ORDER BY mark_date ASC, period ASC, student_id ASC",
                (start, end),
            )
            return [_row_to_mark(r) for r in fetchall(cur)]

    def upsert_mark(
        self,
        key: MarkKey,
        *,
        status: MarkStatus,
        time_range: Optional[TimeRange],
        hours: float,
    ) -> AttendanceMark:
        start = time_range.start_time if time_range else None
        end = time_range.end_time if time_range else None
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(_UPSERT, (key.student_id, key.date, key.period, status.value, start, end, hours))
        except IntegrityError as e:
            raise _translate_integrity_error(e, f"student={key.student_id}") from e

        return AttendanceMark(
            student_id=key.student_id,
            date=key.date,
            period=key.period,
            status=status,
            time_range=time_range,
            hours=hours,
        )

    def upsert_marks_bulk(
        self,
        *,
        date: str,
        period: str,
        entries: Mapping[str, MarkStatus],
        time_range: Optional[TimeRange],
        hours: float,
    ) -> int:
        if not entries:
            return 0

        rows = []
        for student_id, status in entries.items():
            present = status == MarkStatus.PRESENT
            rows.append(
                (
                    student_id,
                    date,
                    period,
                    status.value,
                    time_range.start_time if (present and time_range) else None,
                    time_range.end_time if (present and time_range) else None,
                    hours if present else 0,
                )
            )

        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.executemany(_UPSERT, rows)
        except IntegrityError as e:
            logger.warning("Bulk upsert rolled back: date=%s period=%s size=%d", date, period, len(rows))
            raise _translate_integrity_error(e, f"date={date} period={period}") from e

        return len(rows)

