from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests

from .core.constants import DEFAULT_MAX_LESSONS, DEFAULT_SHEETS_EXPORT_BASE_URL, ENROLLMENT_TAB, TEACHER_TAB
from .database.connection import DBConfig, DatabaseConnection
from .schedules.mysql_schedule_repository import MySQLLessonScheduleRepository
from .schedules.repository import LessonScheduleRepository
from .schedules.service import ScheduleService
from .sheets.connector import SheetConnector
from .sheets.push import SheetPusher
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.sequencer import StudentCodeSequencer
from .students.service import StudentService
from .sync.service import ReconciliationService
from .teachers.mysql_teacher_repository import MySQLTeacherRepository
from .teachers.repository import TeacherRepository
from .teachers.service import TeacherService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    teachers_repo: TeacherRepository
    students_repo: StudentRepository
    schedules_repo: LessonScheduleRepository

    sheet_connector: SheetConnector
    sheet_pusher: SheetPusher
    google_sheet_id: str

    teacher_service: TeacherService
    student_service: StudentService
    sync_service: ReconciliationService
    schedule_service: ScheduleService


def assemble(
    *,
    conn: Optional[DatabaseConnection],
    teachers_repo: TeacherRepository,
    students_repo: StudentRepository,
    schedules_repo: LessonScheduleRepository,
    sheet_connector: SheetConnector,
    google_sheet_id: str = "",
    max_lessons: int = DEFAULT_MAX_LESSONS,
) -> Container:
    """Wire services on top of already-built repositories and connector."""

    pusher = SheetPusher(connector=sheet_connector, default_sheet_id=google_sheet_id)
    sequencer = StudentCodeSequencer(students_repo, connector=sheet_connector)

    teacher_service = TeacherService(teachers_repo, pusher=pusher, connector=sheet_connector)
    student_service = StudentService(
        students_repo,
        sequencer=sequencer,
        pusher=pusher,
        connector=sheet_connector,
    )
    sync_service = ReconciliationService(
        students_repo,
        connector=sheet_connector,
        default_sheet_id=google_sheet_id,
    )
    schedule_service = ScheduleService(schedules_repo, teachers_repo, max_lessons=max_lessons)

    return Container(
        conn=conn,
        teachers_repo=teachers_repo,
        students_repo=students_repo,
        schedules_repo=schedules_repo,
        sheet_connector=sheet_connector,
        sheet_pusher=pusher,
        google_sheet_id=google_sheet_id,
        teacher_service=teacher_service,
        student_service=student_service,
        sync_service=sync_service,
        schedule_service=schedule_service,
    )


def build_container(
    *,
    db_config: dict,
    google_sheet_id: str = "",
    webhook_url: str = "",
    export_base_url: str = DEFAULT_SHEETS_EXPORT_BASE_URL,
    teacher_tab: str = TEACHER_TAB,
    enrollment_tab: str = ENROLLMENT_TAB,
    tab_gids: Optional[dict] = None,
    http_timeout: Optional[float] = None,
    max_lessons: int = DEFAULT_MAX_LESSONS,
    session: Optional[requests.Session] = None,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    connector = SheetConnector(
        session=session or requests.Session(),
        webhook_url=webhook_url,
        export_base_url=export_base_url,
        teacher_tab=teacher_tab,
        enrollment_tab=enrollment_tab,
        tab_gids=tab_gids,
        timeout=http_timeout,
    )

    return assemble(
        conn=conn,
        teachers_repo=MySQLTeacherRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        schedules_repo=MySQLLessonScheduleRepository(conn),
        sheet_connector=connector,
        google_sheet_id=google_sheet_id,
        max_lessons=max_lessons,
    )
