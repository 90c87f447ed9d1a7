from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional, Tuple

from ..core.constants import DEFAULT_MAX_LESSONS
from ..core.enums import Weekday

LESSON_LEVELS = ("Preparatory", "Primary", "Intermediate", "Advance")


@dataclass(frozen=True)
class Recurrence:
    frequency: int
    days: Tuple[Weekday, ...]
    weeks: int


@dataclass(frozen=True)
class ScheduleDraft:
    """A lesson schedule not stored yet."""

    teacher_id: int
    student_name: str
    instrument: str
    day: Weekday
    start_time: time
    duration: str
    card_number: str
    start_date: date
    teacher_name: str = ""
    level: str = LESSON_LEVELS[0]
    room: str = ""
    current_lesson_number: int = 1
    max_lessons: int = DEFAULT_MAX_LESSONS
    is_active: bool = True
    recurrence: Optional[Recurrence] = None


@dataclass(frozen=True)
class LessonSchedule:
    schedule_id: int
    teacher_id: int
    student_name: str
    instrument: str
    day: Weekday
    start_time: time
    duration: str
    card_number: str
    start_date: date
    teacher_name: str = ""
    level: str = LESSON_LEVELS[0]
    room: str = ""
    current_lesson_number: int = 1
    max_lessons: int = DEFAULT_MAX_LESSONS
    is_active: bool = True
    recurrence: Optional[Recurrence] = None

    @property
    def is_completed(self) -> bool:
        return self.current_lesson_number >= self.max_lessons
