from __future__ import annotations

from typing import Mapping, Optional, Sequence

import pytest

from classroom_attendance.attendance.model import AttendanceMark, MarkKey, TimeRange
from classroom_attendance.core.enums import MarkStatus
from classroom_attendance.core.exceptions import NotFoundError, ValidationError
from classroom_attendance.students.model import Student


class InMemoryStudents:
    def __init__(self, students: Sequence[Student] = (), marks: Optional["InMemoryAttendance"] = None):
        self._by_id: dict[str, Student] = {s.student_id: s for s in students}
        self.marks = marks

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda s: (s.seat_row, s.seat_column))

    def get_by_id(self, student_id: str):
        return self._by_id.get(student_id)

    def get_many(self, student_ids):
        return [self._by_id[s] for s in student_ids if s in self._by_id]

    def create_many(self, students):
        taken_seats = {(s.seat_row, s.seat_column) for s in self._by_id.values()}
        taken_rolls = {s.roll_number for s in self._by_id.values()}
        for s in students:
            if s.student_id in self._by_id or s.roll_number in taken_rolls or (s.seat_row, s.seat_column) in taken_seats:
                raise ValidationError("Student id, roll number or seat already in use")
        for s in students:
            self._by_id[s.student_id] = s
        return list(students)

    def update(self, student: Student) -> bool:
        self._by_id[student.student_id] = student
        return True

    def delete_by_id(self, student_id: str) -> bool:
        if self.marks is not None:
            self.marks.drop_student(student_id)
        return self._by_id.pop(student_id, None) is not None

    def delete_all(self) -> int:
        n = len(self._by_id)
        self._by_id.clear()
        if self.marks is not None:
            self.marks.items.clear()
        return n


class InMemoryAttendance:
    """Dict keyed by (student_id, date, period), like the UNIQUE KEY."""

    def __init__(self):
        self.items: dict[tuple[str, str, str], AttendanceMark] = {}
        # set when wired to a student store; acts like the foreign key
        self.students: Optional[InMemoryStudents] = None

    def _check(self, student_id: str) -> None:
        if self.students is not None and self.students.get_by_id(student_id) is None:
            raise NotFoundError(f"Student not found for student={student_id}")

    def fetch_marks(self, date: str, period: Optional[str] = None):
        return [m for (s, d, p), m in self.items.items() if d == date and (period is None or p == period)]

    def fetch_marks_between(self, start: str, end: str):
        return [m for (s, d, p), m in self.items.items() if start <= d <= end]

    def upsert_mark(self, key: MarkKey, *, status: MarkStatus, time_range: Optional[TimeRange], hours: float):
        self._check(key.student_id)
        mark = AttendanceMark(
            student_id=key.student_id,
            date=key.date,
            period=key.period,
            status=status,
            time_range=time_range,
            hours=hours,
        )
        self.items[(key.student_id, key.date, key.period)] = mark
        return mark

    def upsert_marks_bulk(self, *, date: str, period: str, entries: Mapping[str, MarkStatus], time_range, hours):
        for student_id in entries:
            self._check(student_id)
        for student_id, status in entries.items():
            present = status == MarkStatus.PRESENT
            self.items[(student_id, date, period)] = AttendanceMark(
                student_id=student_id,
                date=date,
                period=period,
                status=status,
                time_range=time_range if present else None,
                hours=hours if present else 0.0,
            )
        return len(entries)

    def drop_student(self, student_id: str) -> None:
        for key in [k for k in self.items if k[0] == student_id]:
            del self.items[key]


def make_student(n: int, **overrides) -> Student:
    fields = dict(
        student_id=f"s{n}",
        name=f"Student {n}",
        roll_number=f"{100 + n}",
        email=f"student{n}@example.com",
        seat_row=(n - 1) // 8,
        seat_column=(n - 1) % 8,
    )
    fields.update(overrides)
    return Student(**fields)


@pytest.fixture
def make_mark():
    def _make(student_id: str, period: str, hours: float, *, date: str = "2025-03-03", status=MarkStatus.PRESENT):
        return AttendanceMark(
            student_id=student_id,
            date=date,
            period=period,
            status=status,
            time_range=None,
            hours=hours,
        )

    return _make


@pytest.fixture
def roster():
    return [make_student(n) for n in range(1, 4)]


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def students_repo(roster, attendance_repo):
    repo = InMemoryStudents(roster, marks=attendance_repo)
    attendance_repo.students = repo
    return repo


@pytest.fixture
def student_factory():
    return make_student


@pytest.fixture
def app(monkeypatch, students_repo, attendance_repo):
    from classroom_attendance.container import build_services
    from classroom_attendance.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    container = build_services(
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        auth={"name": "Teacher", "email": "teacher@example.com", "password": "secret123"},
    )
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(client):
    with client.session_transaction() as sess:
        sess["user"] = {"name": "Teacher", "email": "teacher@example.com"}
    return client
