from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.enums import Weekday
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_placeholders, mysql_time, str_or_empty
from .model import LessonSchedule, Recurrence, ScheduleDraft
from .repository import LessonScheduleRepository

_COLUMNS = """
    schedule_id, teacher_id, teacher_name, student_name, instrument, level, room, day,
    start_time, duration, card_number, current_lesson_number, max_lessons, start_date,
    is_active, recurrence_frequency, recurrence_days, recurrence_weeks
"""

_INSERT = """
    INSERT INTO lesson_schedules(
        teacher_id, teacher_name, student_name, instrument, level, room, day, start_time,
        duration, card_number, current_lesson_number, max_lessons, start_date, is_active,
        recurrence_frequency, recurrence_days, recurrence_weeks
    )
    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
"""


def _row_to_recurrence(r: dict) -> Optional[Recurrence]:
    if r.get("recurrence_frequency") is None:
        return None
    days = tuple(Weekday(d) for d in str_or_empty(r.get("recurrence_days")).split(",") if d)
    return Recurrence(
        frequency=int(r["recurrence_frequency"]),
        days=days,
        weeks=int(r.get("recurrence_weeks") or 1),
    )


def _row_to_schedule(r: dict) -> LessonSchedule:
    return LessonSchedule(
        schedule_id=int(r["schedule_id"]),
        teacher_id=int(r["teacher_id"]),
        teacher_name=str_or_empty(r.get("teacher_name")),
        student_name=r["student_name"],
        instrument=r["instrument"],
        level=str_or_empty(r.get("level")),
        room=str_or_empty(r.get("room")),
        day=Weekday(r["day"]),
        start_time=mysql_time(r["start_time"]),
        duration=str_or_empty(r.get("duration")),
        card_number=r["card_number"],
        current_lesson_number=int(r["current_lesson_number"]),
        max_lessons=int(r["max_lessons"]),
        start_date=r["start_date"],
        is_active=bool(r["is_active"]),
        recurrence=_row_to_recurrence(r),
    )


def _insert_values(d: ScheduleDraft) -> tuple:
    rec = d.recurrence
    return (
        int(d.teacher_id),
        d.teacher_name,
        d.student_name,
        d.instrument,
        d.level,
        d.room,
        d.day.value,
        d.start_time,
        d.duration,
        d.card_number,
        int(d.current_lesson_number),
        int(d.max_lessons),
        d.start_date,
        1 if d.is_active else 0,
        rec.frequency if rec else None,
        ",".join(day.value for day in rec.days) if rec else None,
        rec.weeks if rec else None,
    )


class MySQLLessonScheduleRepository(LessonScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select_one(self, cur, schedule_id: int) -> Optional[LessonSchedule]:
        cur.execute(f"SELECT {_COLUMNS} FROM lesson_schedules WHERE schedule_id=%s", (int(schedule_id),))
        r = fetchone(cur)
        return _row_to_schedule(r) if r else None

    def find_many(self, *, teacher_id: Optional[int] = None) -> Sequence[LessonSchedule]:
        sql = f"SELECT {_COLUMNS} FROM lesson_schedules"
        params: list = []
        if teacher_id is not None:
            sql += " WHERE teacher_id=%s"
            params.append(int(teacher_id))
        sql += " ORDER BY start_date, start_time, schedule_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_schedule(r) for r in fetchall(cur)]

    def get_by_id(self, schedule_id: int) -> Optional[LessonSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._select_one(cur, schedule_id)

    def create(self, draft: ScheduleDraft) -> LessonSchedule:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_INSERT, _insert_values(draft))
            return self._select_one(cur, int(cur.lastrowid))

    def create_many(self, drafts: Sequence[ScheduleDraft]) -> Sequence[LessonSchedule]:
        # One connection/transaction: a failing insert rolls back the whole batch.
        with db_cursor(self._conn_factory) as (_, cur):
            ids = []
            for draft in drafts:
                cur.execute(_INSERT, _insert_values(draft))
                ids.append(int(cur.lastrowid))
            return [self._select_one(cur, schedule_id) for schedule_id in ids]

    def save_progress(self, schedule: LessonSchedule) -> LessonSchedule:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE lesson_schedules
                SET card_number=%s, current_lesson_number=%s, is_active=%s
                WHERE schedule_id=%s
                """,
                (
                    schedule.card_number,
                    int(schedule.current_lesson_number),
                    1 if schedule.is_active else 0,
                    int(schedule.schedule_id),
                ),
            )
            return self._select_one(cur, schedule.schedule_id) or schedule

    def delete(self, *, schedule_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM lesson_schedules WHERE schedule_id=%s", (int(schedule_id),))
            return cur.rowcount > 0

    def delete_many(self, schedule_ids: Iterable[int]) -> int:
        ids = [int(i) for i in schedule_ids]
        if not ids:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM lesson_schedules WHERE schedule_id IN ({in_placeholders(len(ids))})", tuple(ids))
            return int(cur.rowcount)
