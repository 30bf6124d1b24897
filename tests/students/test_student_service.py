from __future__ import annotations

import pytest

from classroom_attendance.core.exceptions import NotFoundError, ValidationError
from classroom_attendance.students.service import StudentService


@pytest.fixture
def svc(students_repo):
    return StudentService(students_repo)


def _payload(**overrides):
    p = {"name": "Ada", "rollNumber": "200", "email": "ada@example.com", "seatRow": 5, "seatColumn": 5}
    p.update(overrides)
    return p


def test_create_generates_id(svc):
    student = svc.create(_payload())
    assert student.student_id
    assert student.email == "ada@example.com"


def test_create_keeps_given_id(svc):
    assert svc.create(_payload(id="custom-1")).student_id == "custom-1"


@pytest.mark.parametrize("field", ["name", "rollNumber", "seatRow", "seatColumn"])
def test_create_requires_fields(svc, field):
    p = _payload()
    p.pop(field)
    with pytest.raises(ValidationError):
        svc.create(p)


@pytest.mark.parametrize("row,col", [(7, 0), (-1, 0), (0, 8), ("x", 1)])
def test_create_rejects_seat_outside_grid(svc, row, col):
    with pytest.raises(ValidationError):
        svc.create(_payload(seatRow=row, seatColumn=col))


def test_seat_zero_is_valid(svc, students_repo):
    students_repo.delete_all()
    assert svc.create(_payload(seatRow=0, seatColumn=0)).seat_row == 0


def test_create_many_rejects_duplicate_seat_in_batch(svc):
    with pytest.raises(ValidationError, match="Duplicate seat"):
        svc.create_many([_payload(), _payload(rollNumber="201")])


def test_create_many_rejects_duplicate_roll_in_batch(svc):
    with pytest.raises(ValidationError, match="Duplicate roll"):
        svc.create_many([_payload(), _payload(seatColumn=6)])


def test_create_many_rejects_oversized_class(svc):
    payloads = [_payload(rollNumber=str(i), seatRow=i // 8 % 7, seatColumn=i % 8) for i in range(57)]
    with pytest.raises(ValidationError):
        svc.create_many(payloads)


def test_update_keeps_blank_fields(svc):
    updated = svc.update("s1", {"name": "", "email": "new@example.com", "seatRow": 6})
    assert updated.name == "Student 1"
    assert updated.email == "new@example.com"
    assert updated.seat_row == 6


def test_update_accepts_numeric_fields(svc):
    updated = svc.update("s1", {"name": 42, "rollNumber": 305, "email": "   "})
    assert updated.name == "42"
    assert updated.roll_number == "305"
    assert updated.email == "student1@example.com"


def test_update_unknown_student(svc):
    with pytest.raises(NotFoundError):
        svc.update("ghost", {"name": "x"})


def test_delete_cascades_marks(svc, students_repo, attendance_repo):
    from classroom_attendance.attendance.service import AttendanceService

    AttendanceService(attendance_repo, students_repo).mark_attendance(
        student_id="s1", date="2025-03-03", period="1", status="absent"
    )
    svc.delete("s1")

    assert students_repo.get_by_id("s1") is None
    assert attendance_repo.items == {}


def test_delete_unknown_student(svc):
    with pytest.raises(NotFoundError):
        svc.delete("ghost")


def test_delete_all(svc):
    assert svc.delete_all() == 3
    with pytest.raises(NotFoundError):
        svc.delete_all()


def test_seat_matrix(svc):
    matrix = svc.seat_matrix()
    assert len(matrix) == 7
    assert all(len(row) == 8 for row in matrix)
    assert matrix[0][0].student_id == "s1"
    assert matrix[0][2].student_id == "s3"
    assert matrix[6][7] is None


def test_import_csv_skips_unusable_rows(svc, students_repo):
    students_repo.delete_all()
    text = (
        "Name,Roll No,Email,Seat Row,Seat Column\n"
        "Ada,1,ada@example.com,0,0\n"
        "Bob,2,,0,1\n"
        ",3,,0,2\n"
        "Cy,4,,9,9\n"
    )

    saved = svc.import_csv(text)

    assert [s.name for s in saved] == ["Ada", "Bob"]


def test_import_csv_with_nothing_usable(svc):
    with pytest.raises(ValidationError):
        svc.import_csv("name,rollNumber,seatRow,seatColumn\n,,,\n")
