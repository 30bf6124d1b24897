from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Student:
    """Domain entity: a student and the seat they occupy."""

    student_id: str
    name: str
    roll_number: str
    email: str
    seat_row: int
    seat_column: int

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "name": self.name,
            "rollNumber": self.roll_number,
            "email": self.email,
            "seatRow": self.seat_row,
            "seatColumn": self.seat_column,
        }

    def brief(self) -> dict:
        return {"id": self.student_id, "name": self.name, "rollNumber": self.roll_number, "email": self.email}
