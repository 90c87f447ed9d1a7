from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student, StudentFields


class StudentRepository(Protocol):
    def find_many(self) -> Sequence[Student]:
        raise NotImplementedError

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def find_by_email(self, email: str) -> Sequence[Student]:
        raise NotImplementedError

    def create(self, fields: StudentFields) -> Student:
        raise NotImplementedError

    def update(self, student_id: int, fields: StudentFields) -> Optional[Student]:
        raise NotImplementedError

    def set_student_code(self, student_id: int, student_code: str) -> Optional[Student]:
        raise NotImplementedError

    def delete(self, student_id: int) -> bool:
        raise NotImplementedError
