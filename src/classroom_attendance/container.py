from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from werkzeug.security import generate_password_hash

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.service import AuthService
from .core.constants import FULL_DAY_HOURS, PERIODS
from .database.connection import DBConfig, DatabaseConnection
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    student_service: StudentService
    attendance_service: AttendanceService


def build_services(
    *,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    auth: dict,
    full_day_hours: float = FULL_DAY_HOURS,
    periods: Sequence[str] = PERIODS,
) -> Container:
    password = auth.get("password") or ""
    auth_service = AuthService(
        name=auth.get("name") or "",
        email=auth.get("email") or "",
        password_hash=generate_password_hash(password) if password else "",
    )
    return Container(
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        auth_service=auth_service,
        student_service=StudentService(students_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            students_repo,
            full_day_hours=full_day_hours,
            periods=periods,
        ),
    )


def build_container(*, db_config: dict, auth: dict, full_day_hours: float = FULL_DAY_HOURS, periods=PERIODS) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    return build_services(
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        auth=auth,
        full_day_hours=full_day_hours,
        periods=periods,
    )
