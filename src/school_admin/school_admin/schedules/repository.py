from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import LessonSchedule, ScheduleDraft


class LessonScheduleRepository(Protocol):
    def find_many(self, *, teacher_id: Optional[int] = None) -> Sequence[LessonSchedule]:
        """Ordered by start date, then start time."""

        raise NotImplementedError

    def get_by_id(self, schedule_id: int) -> Optional[LessonSchedule]:
        raise NotImplementedError

    def create(self, draft: ScheduleDraft) -> LessonSchedule:
        raise NotImplementedError

    def create_many(self, drafts: Sequence[ScheduleDraft]) -> Sequence[LessonSchedule]:
        """All-or-nothing insert of several drafts."""

        raise NotImplementedError

    def save_progress(self, schedule: LessonSchedule) -> LessonSchedule:
        """Persist card number, lesson counter and active flag."""

        raise NotImplementedError

    def delete(self, *, schedule_id: int) -> bool:
        raise NotImplementedError

    def delete_many(self, schedule_ids: Iterable[int]) -> int:
        raise NotImplementedError
