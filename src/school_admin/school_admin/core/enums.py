from __future__ import annotations

from enum import Enum


class StudentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class CardState(str, Enum):
    """Derived state of a lesson package card."""

    ACTIVE = "ACTIVE"
    RENEWAL_NEEDED = "RENEWAL_NEEDED"
    INACTIVE = "INACTIVE"


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @property
    def index(self) -> int:
        """Position in the week, Monday=0 (same as date.weekday())."""
        return list(Weekday).index(self)


class SheetAction(str, Enum):
    ADD_TEACHER = "addTeacher"
    UPDATE_TEACHER = "updateTeacher"
    ADD_STUDENT = "addStudent"
    UPDATE_STUDENT = "updateStudent"


class PushStatus(str, Enum):
    """Outcome of mirroring a local write to the external sheet."""

    OK = "ok"
    SKIPPED = "skipped"
    NOT_FOUND = "not_found"
    FAILED = "failed"
