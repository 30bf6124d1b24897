from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def get_many(self, student_ids: Sequence[str]) -> Sequence[Student]:
        raise NotImplementedError

    def create_many(self, students: Sequence[Student]) -> Sequence[Student]:
        """Insert all students in one transaction."""

        raise NotImplementedError

    def update(self, student: Student) -> bool:
        raise NotImplementedError

    def delete_by_id(self, student_id: str) -> bool:
        """Delete the student and every attendance mark it owns."""

        raise NotImplementedError

    def delete_all(self) -> int:
        """Delete all students and all attendance marks. Returns students deleted."""

        raise NotImplementedError
