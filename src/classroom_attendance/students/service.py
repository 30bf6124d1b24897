from __future__ import annotations

import logging
import uuid
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import require_int_in_range, require_non_empty
from ..core.constants import SEAT_COLUMNS, SEAT_ROWS
from ..core.exceptions import NotFoundError, ValidationError
from .csv_import import parse_student_csv
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)

MAX_STUDENTS = SEAT_ROWS * SEAT_COLUMNS


def _new_student_id() -> str:
    return uuid.uuid4().hex[:12]


def _seat_in_range(row: Optional[int], col: Optional[int]) -> bool:
    return row is not None and col is not None and 0 <= row < SEAT_ROWS and 0 <= col < SEAT_COLUMNS


def _keep_or_replace(value: Any, current: str, field_name: str) -> str:
    if value is None or not str(value).strip():
        return current
    return require_non_empty(value, field_name)


class StudentService:
    """Use case: manage the class roster and its seating."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def _build(self, payload: Mapping[str, Any]) -> Student:
        name = require_non_empty(payload.get("name"), "Name")
        roll_number = require_non_empty(payload.get("rollNumber"), "Roll number")
        if payload.get("seatRow") is None or payload.get("seatColumn") is None:
            raise ValidationError("Name, rollNumber, seatRow, and seatColumn are required")

        return Student(
            student_id=str(payload.get("id") or _new_student_id()),
            name=name,
            roll_number=roll_number,
            email=(payload.get("email") or "").strip(),
            seat_row=require_int_in_range(payload["seatRow"], "Seat row", 0, SEAT_ROWS - 1),
            seat_column=require_int_in_range(payload["seatColumn"], "Seat column", 0, SEAT_COLUMNS - 1),
        )

    def list_students(self) -> Sequence[Student]:
        return self._students.list_all()

    def create(self, payload: Mapping[str, Any]) -> Student:
        student = self._build(payload)
        self._students.create_many([student])
        logger.info("Student created: id=%s roll=%s", student.student_id, student.roll_number)
        return student

    def create_many(self, payloads: Sequence[Mapping[str, Any]]) -> Sequence[Student]:
        if not payloads:
            raise ValidationError("No students to add")
        if len(payloads) > MAX_STUDENTS:
            raise ValidationError(f"Cannot add more than {MAX_STUDENTS} students")

        students = [self._build(p) for p in payloads]

        seats: set[tuple[int, int]] = set()
        rolls: set[str] = set()
        for s in students:
            seat = (s.seat_row, s.seat_column)
            if seat in seats:
                raise ValidationError(f"Duplicate seat position found: ({s.seat_row},{s.seat_column})")
            if s.roll_number in rolls:
                raise ValidationError(f"Duplicate roll number found: {s.roll_number}")
            seats.add(seat)
            rolls.add(s.roll_number)

        saved = self._students.create_many(students)
        logger.info("Bulk created %d students", len(saved))
        return saved

    def import_csv(self, text: str) -> Sequence[Student]:
        payloads = [p for p in parse_student_csv(text) if _seat_in_range(p["seatRow"], p["seatColumn"])]
        if not payloads:
            raise ValidationError("No valid student records found")
        return self.create_many(payloads)

    def update(self, student_id: str, payload: Mapping[str, Any]) -> Student:
        current = self._students.get_by_id(student_id)
        if not current:
            raise NotFoundError("Student not found")

        # Blank values keep the current ones; seats are replaced when given.
        seat_row = payload.get("seatRow")
        seat_column = payload.get("seatColumn")
        updated = Student(
            student_id=current.student_id,
            name=_keep_or_replace(payload.get("name"), current.name, "Name"),
            roll_number=_keep_or_replace(payload.get("rollNumber"), current.roll_number, "Roll number"),
            email=_keep_or_replace(payload.get("email"), current.email, "Email"),
            seat_row=current.seat_row
            if seat_row is None
            else require_int_in_range(seat_row, "Seat row", 0, SEAT_ROWS - 1),
            seat_column=current.seat_column
            if seat_column is None
            else require_int_in_range(seat_column, "Seat column", 0, SEAT_COLUMNS - 1),
        )
        self._students.update(updated)
        return updated

    def delete(self, student_id: str) -> None:
        if not self._students.get_by_id(student_id):
            raise NotFoundError("Student not found")
        self._students.delete_by_id(student_id)
        logger.info("Student deleted with attendance: id=%s", student_id)

    def delete_all(self) -> int:
        deleted = self._students.delete_all()
        if deleted == 0:
            raise NotFoundError("No students found to delete")
        logger.info("Deleted %d students and all attendance records", deleted)
        return deleted

    def seat_matrix(self) -> list[list[Optional[Student]]]:
        matrix: list[list[Optional[Student]]] = [[None] * SEAT_COLUMNS for _ in range(SEAT_ROWS)]
        for s in self._students.list_all():
            if _seat_in_range(s.seat_row, s.seat_column):
                matrix[s.seat_row][s.seat_column] = s
        return matrix
