"""Lesson card rules.

States are derived from the record: ``INACTIVE`` when deactivated,
``RENEWAL_NEEDED`` once the lesson counter passed the card ceiling,
``ACTIVE`` otherwise. All functions return new values.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import List, Tuple

from ..core.enums import CardState, Weekday
from ..core.exceptions import InvalidTransitionError, ValidationError
from .model import LessonSchedule, Recurrence, ScheduleDraft


@dataclass(frozen=True)
class LessonProgress:
    schedule: LessonSchedule
    renewal_needed: bool

    @property
    def warning(self) -> str:
        if not self.renewal_needed:
            return ""
        return (
            f"Card {self.schedule.card_number} has used all {self.schedule.max_lessons} lessons. "
            "Renew the card before logging more lessons."
        )


def card_state(schedule: LessonSchedule) -> CardState:
    if not schedule.is_active:
        return CardState.INACTIVE
    if schedule.current_lesson_number > schedule.max_lessons:
        return CardState.RENEWAL_NEEDED
    return CardState.ACTIVE


def complete_lesson(schedule: LessonSchedule) -> LessonProgress:
    state = card_state(schedule)
    if state == CardState.RENEWAL_NEEDED:
        raise InvalidTransitionError("Card needs renewal before another lesson can be completed")
    if state != CardState.ACTIVE:
        raise InvalidTransitionError("Schedule is inactive")

    updated = replace(schedule, current_lesson_number=schedule.current_lesson_number + 1)
    return LessonProgress(schedule=updated, renewal_needed=card_state(updated) == CardState.RENEWAL_NEEDED)


def renew_card(schedule: LessonSchedule, new_card_number: str) -> LessonSchedule:
    card = (new_card_number or "").strip().upper()
    if not card:
        raise ValidationError("Card number is required")
    if card_state(schedule) == CardState.ACTIVE:
        raise InvalidTransitionError("Card is still active and does not need renewal")
    return replace(schedule, card_number=card, current_lesson_number=1, is_active=True)


def deactivate(schedule: LessonSchedule) -> LessonSchedule:
    return replace(schedule, is_active=False)


def validate_recurrence(recurrence: Recurrence) -> None:
    if not recurrence.days:
        raise ValidationError("Select at least one weekday")
    if len(set(recurrence.days)) != len(recurrence.days):
        raise ValidationError("Weekdays must not repeat")
    if recurrence.frequency != len(recurrence.days):
        raise ValidationError(f"Select exactly {recurrence.frequency} weekday(s) for this frequency")
    if recurrence.weeks < 1:
        raise ValidationError("Number of weeks must be at least 1")


def first_on_or_after(start: date, weekday_index: int) -> date:
    return start + timedelta(days=(weekday_index - start.weekday()) % 7)


def occurrence_dates(start: date, recurrence: Recurrence) -> List[Tuple[date, Weekday]]:
    occurrences = []
    for day in recurrence.days:
        first = first_on_or_after(start, day.index)
        for week in range(recurrence.weeks):
            occurrences.append((first + timedelta(weeks=week), day))
    occurrences.sort(key=lambda o: o[0])
    return occurrences


def generate_recurring_schedules(base: ScheduleDraft, recurrence: Recurrence) -> List[ScheduleDraft]:
    """One draft per (week, weekday) in date order, numbered from the base lesson.

    Stops at the card ceiling; going further needs a renewed card.
    """
    validate_recurrence(recurrence)

    drafts: List[ScheduleDraft] = []
    lesson_number = base.current_lesson_number
    for when, day in occurrence_dates(base.start_date, recurrence):
        if lesson_number > base.max_lessons:
            break
        drafts.append(
            replace(
                base,
                day=day,
                start_date=when,
                current_lesson_number=lesson_number,
                recurrence=recurrence,
            )
        )
        lesson_number += 1
    return drafts
