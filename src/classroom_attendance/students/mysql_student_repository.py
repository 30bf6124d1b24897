from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Student
from .repository import StudentRepository

_COLUMNS = "student_id, name, roll_number, email, seat_row, seat_column"


def _row_to_student(r: Dict[str, Any]) -> Student:
    return Student(
        student_id=str(r["student_id"]),
        name=r["name"],
        roll_number=r["roll_number"],
        email=r.get("email") or "",
        seat_row=int(r["seat_row"]),
        seat_column=int(r["seat_column"]),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY seat_row ASC, seat_column ASC")
            return [_row_to_student(r) for r in fetchall(cur)]

    def get_by_id(self, student_id: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (student_id,))
            r = fetchone(cur)
            return _row_to_student(r) if r else None

    def get_many(self, student_ids: Sequence[str]) -> Sequence[Student]:
        if not student_ids:
            return []
        placeholders = ",".join(["%s"] * len(student_ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM students WHERE student_id IN ({placeholders})",
                tuple(student_ids),
            )
            return [_row_to_student(r) for r in fetchall(cur)]

    def create_many(self, students: Sequence[Student]) -> Sequence[Student]:
        rows = [
            (s.student_id, s.name, s.roll_number, s.email, s.seat_row, s.seat_column)
            for s in students
        ]
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.executemany(
                    f"INSERT INTO students({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s)",
                    rows,
                )
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise ValidationError("Student id, roll number or seat already in use") from e
            raise
        return list(students)

    def update(self, student: Student) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE students
                    SET name=%s, roll_number=%s, email=%s, seat_row=%s, seat_column=%s
                    WHERE student_id=%s
                    """,
                    (
                        student.name,
                        student.roll_number,
                        student.email,
                        student.seat_row,
                        student.seat_column,
                        student.student_id,
                    ),
                )
                return cur.rowcount > 0
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise ValidationError("Roll number or seat already in use") from e
            raise

    def delete_by_id(self, student_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_marks WHERE student_id=%s", (student_id,))
            cur.execute("DELETE FROM students WHERE student_id=%s", (student_id,))
            return cur.rowcount > 0

    def delete_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_marks")
            cur.execute("DELETE FROM students")
            return int(cur.rowcount)
