from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, timedelta
from typing import List, Optional, Sequence

from ..common.names import first_last
from ..common.validators import require_non_empty, require_positive_int
from ..core.constants import COMPLETED_SCHEDULE_RETENTION_DAYS, DEFAULT_MAX_LESSONS, SCHEDULE_RETENTION_DAYS
from ..core.exceptions import NotFoundError, ValidationError
from ..teachers.repository import TeacherRepository
from . import lifecycle
from .model import LESSON_LEVELS, LessonSchedule, Recurrence, ScheduleDraft
from .repository import LessonScheduleRepository

logger = logging.getLogger(__name__)


def is_stale(schedule: LessonSchedule, *, today: date) -> bool:
    if not schedule.is_active:
        return True
    if schedule.start_date < today - timedelta(days=SCHEDULE_RETENTION_DAYS):
        return True
    return schedule.is_completed and schedule.start_date < today - timedelta(
        days=COMPLETED_SCHEDULE_RETENTION_DAYS
    )


class ScheduleService:
    """Use case: lesson packages (schedules with a lesson card)."""

    def __init__(
        self,
        schedules: LessonScheduleRepository,
        teachers: TeacherRepository,
        *,
        max_lessons: int = DEFAULT_MAX_LESSONS,
    ):
        self._schedules = schedules
        self._teachers = teachers
        self._max_lessons = max_lessons

    def list_schedules(self, *, teacher_id: Optional[int] = None) -> Sequence[LessonSchedule]:
        return self._schedules.find_many(teacher_id=teacher_id)

    def get(self, schedule_id: int) -> LessonSchedule:
        schedule = self._schedules.get_by_id(int(schedule_id))
        if not schedule:
            raise NotFoundError("Schedule not found")
        return schedule

    def _prepare(self, draft: ScheduleDraft) -> ScheduleDraft:
        if not draft.teacher_id or int(draft.teacher_id) <= 0:
            raise ValidationError("Teacher is required")
        teacher = self._teachers.get_by_id(int(draft.teacher_id))
        if not teacher:
            raise NotFoundError("Teacher not found")

        level = (draft.level or "").strip() or LESSON_LEVELS[0]
        if level not in LESSON_LEVELS:
            raise ValidationError(f"Level must be one of: {', '.join(LESSON_LEVELS)}")
        if draft.start_time is None:
            raise ValidationError("Time is required")
        if draft.start_date is None:
            raise ValidationError("Start date is required")

        return replace(
            draft,
            teacher_id=teacher.teacher_id,
            teacher_name=(draft.teacher_name or "").strip() or first_last(teacher.first_name, teacher.last_name),
            student_name=require_non_empty(draft.student_name, "Student name"),
            instrument=require_non_empty(draft.instrument, "Instrument"),
            duration=require_non_empty(draft.duration, "Duration"),
            card_number=require_non_empty(draft.card_number, "Card number").upper(),
            level=level,
            room=(draft.room or "").strip(),
            current_lesson_number=require_positive_int(draft.current_lesson_number, "Lesson number"),
            max_lessons=self._max_lessons,
        )

    def create(self, draft: ScheduleDraft) -> LessonSchedule:
        schedule = self._schedules.create(self._prepare(draft))
        logger.info("Schedule %s created for teacher %s", schedule.schedule_id, schedule.teacher_id)
        return schedule

    def create_recurring(self, draft: ScheduleDraft, recurrence: Recurrence) -> List[LessonSchedule]:
        drafts = lifecycle.generate_recurring_schedules(self._prepare(draft), recurrence)
        if not drafts:
            raise ValidationError("No lessons left on this card; renew it first")
        created = list(self._schedules.create_many(drafts))
        logger.info(
            "Recurring schedules created for teacher %s: %s lesson(s) over %s week(s)",
            draft.teacher_id,
            len(created),
            recurrence.weeks,
        )
        return created

    def complete_lesson(self, schedule_id: int) -> lifecycle.LessonProgress:
        progress = lifecycle.complete_lesson(self.get(schedule_id))
        saved = self._schedules.save_progress(progress.schedule)
        if progress.renewal_needed:
            logger.warning("Card %s on schedule %s needs renewal", saved.card_number, saved.schedule_id)
        return lifecycle.LessonProgress(schedule=saved, renewal_needed=progress.renewal_needed)

    def renew_card(self, schedule_id: int, new_card_number: str) -> LessonSchedule:
        renewed = lifecycle.renew_card(self.get(schedule_id), new_card_number)
        logger.info("Schedule %s renewed with card %s", renewed.schedule_id, renewed.card_number)
        return self._schedules.save_progress(renewed)

    def deactivate(self, schedule_id: int) -> LessonSchedule:
        return self._schedules.save_progress(lifecycle.deactivate(self.get(schedule_id)))

    def delete(self, schedule_id: int) -> None:
        if not self._schedules.delete(schedule_id=int(schedule_id)):
            raise NotFoundError("Schedule not found")

    def cleanup_stale(self, today: date) -> int:
        stale = [s.schedule_id for s in self._schedules.find_many() if is_stale(s, today=today)]
        deleted = self._schedules.delete_many(stale)
        logger.info("Schedule cleanup removed %s record(s)", deleted)
        return deleted
