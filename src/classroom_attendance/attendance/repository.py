from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence

from ..core.enums import MarkStatus
from .model import AttendanceMark, MarkKey, TimeRange


class AttendanceRepository(Protocol):
    """Storage contract for marks.

    Implementations must keep (student_id, date, period) unique and make
    ``upsert_mark`` a single atomic insert-or-replace. Concurrent writers to
    the same key get last-write-wins; callers assume a single writer per key.
    """

    def fetch_marks(self, date: str, period: Optional[str] = None) -> Sequence[AttendanceMark]:
        raise NotImplementedError

    def fetch_marks_between(self, start: str, end: str) -> Sequence[AttendanceMark]:
        raise NotImplementedError

    def upsert_mark(
        self,
        key: MarkKey,
        *,
        status: MarkStatus,
        time_range: Optional[TimeRange],
        hours: float,
    ) -> AttendanceMark:
        raise NotImplementedError

    def upsert_marks_bulk(
        self,
        *,
        date: str,
        period: str,
        entries: Mapping[str, MarkStatus],
        time_range: Optional[TimeRange],
        hours: float,
    ) -> int:
        """Write every entry in one transaction; all or nothing.

        Returns number of entries written.
        """

        raise NotImplementedError
