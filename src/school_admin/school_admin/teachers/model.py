from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class TeacherFields:
    """Writable teacher attributes (what a form submission or sheet row carries)."""

    first_name: str
    last_name: str
    email: str
    call_name: str = ""
    date_of_birth: str = ""
    age: str = ""
    phone: str = ""
    address: str = ""
    zip_code: str = ""
    tin_number: str = ""
    instruments: str = ""


@dataclass(frozen=True)
class Teacher:
    """Domain entity: Teacher.

    Note: Plain data object, no DB access code here.
    """

    teacher_id: int
    first_name: str
    last_name: str
    email: str
    call_name: str = ""
    date_of_birth: str = ""
    age: str = ""
    phone: str = ""
    address: str = ""
    zip_code: str = ""
    tin_number: str = ""
    instruments: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def instrument_list(self) -> list[str]:
        return [i.strip() for i in self.instruments.split(",") if i.strip()]
