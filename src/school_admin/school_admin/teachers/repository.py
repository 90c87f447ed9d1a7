from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Teacher, TeacherFields


class TeacherRepository(Protocol):
    """Repository interface for Teacher.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def find_many(self) -> Sequence[Teacher]:
        raise NotImplementedError

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        raise NotImplementedError

    def find_by_email(self, email: str) -> Sequence[Teacher]:
        """Case-insensitive lookup; may return several rows for legacy data."""

        raise NotImplementedError

    def create(self, fields: TeacherFields) -> Teacher:
        raise NotImplementedError

    def update(self, teacher_id: int, fields: TeacherFields) -> Optional[Teacher]:
        """Returns None when the teacher does not exist."""

        raise NotImplementedError

    def delete(self, teacher_id: int) -> bool:
        raise NotImplementedError
