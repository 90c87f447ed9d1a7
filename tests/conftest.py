from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

import pytest
import requests

from src.school_admin.school_admin.container import assemble
from src.school_admin.school_admin.schedules.model import LessonSchedule, ScheduleDraft
from src.school_admin.school_admin.sheets.connector import SheetConnector
from src.school_admin.school_admin.students.model import Student, StudentFields
from src.school_admin.school_admin.teachers.model import Teacher, TeacherFields

SHEET_ID = "sheet-123"
WEBHOOK_URL = "https://hooks.example.test/exec"
CREATED_AT = datetime(2026, 2, 1, 10, 0, 0)


class InMemoryTeachers:
    def __init__(self):
        self.items: dict[int, Teacher] = {}
        self._next_id = 1

    def find_many(self):
        return list(self.items.values())

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        return self.items.get(int(teacher_id))

    def find_by_email(self, email: str):
        return [t for t in self.items.values() if t.email.lower() == email.strip().lower()]

    def create(self, fields: TeacherFields) -> Teacher:
        teacher = Teacher(teacher_id=self._next_id, created_at=CREATED_AT, updated_at=CREATED_AT, **vars(fields))
        self.items[teacher.teacher_id] = teacher
        self._next_id += 1
        return teacher

    def update(self, teacher_id: int, fields: TeacherFields) -> Optional[Teacher]:
        if int(teacher_id) not in self.items:
            return None
        teacher = replace(self.items[int(teacher_id)], **vars(fields))
        self.items[int(teacher_id)] = teacher
        return teacher

    def delete(self, teacher_id: int) -> bool:
        return self.items.pop(int(teacher_id), None) is not None


class InMemoryStudents:
    def __init__(self):
        self.items: dict[int, Student] = {}
        self._next_id = 1
        self.created_calls = 0
        self.fail_on_email: set[str] = set()

    def find_many(self):
        return list(self.items.values())

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self.items.get(int(student_id))

    def find_by_email(self, email: str):
        return [s for s in self.items.values() if s.email and s.email.lower() == email.strip().lower()]

    def create(self, fields: StudentFields) -> Student:
        if fields.email in self.fail_on_email:
            raise RuntimeError("store rejected the record")
        student = Student(student_id=self._next_id, created_at=CREATED_AT, updated_at=CREATED_AT, **vars(fields))
        self.items[student.student_id] = student
        self._next_id += 1
        self.created_calls += 1
        return student

    def update(self, student_id: int, fields: StudentFields) -> Optional[Student]:
        if int(student_id) not in self.items:
            return None
        student = replace(self.items[int(student_id)], **vars(fields))
        self.items[int(student_id)] = student
        return student

    def set_student_code(self, student_id: int, student_code: str) -> Optional[Student]:
        if int(student_id) not in self.items:
            return None
        student = replace(self.items[int(student_id)], student_code=student_code)
        self.items[int(student_id)] = student
        return student

    def delete(self, student_id: int) -> bool:
        return self.items.pop(int(student_id), None) is not None


class InMemorySchedules:
    def __init__(self):
        self.items: dict[int, LessonSchedule] = {}
        self._next_id = 1

    def find_many(self, *, teacher_id: Optional[int] = None):
        items = [s for s in self.items.values() if teacher_id is None or s.teacher_id == teacher_id]
        return sorted(items, key=lambda s: (s.start_date, s.start_time, s.schedule_id))

    def get_by_id(self, schedule_id: int) -> Optional[LessonSchedule]:
        return self.items.get(int(schedule_id))

    def create(self, draft: ScheduleDraft) -> LessonSchedule:
        schedule = LessonSchedule(schedule_id=self._next_id, **vars(draft))
        self.items[schedule.schedule_id] = schedule
        self._next_id += 1
        return schedule

    def create_many(self, drafts):
        return [self.create(d) for d in drafts]

    def save_progress(self, schedule: LessonSchedule) -> LessonSchedule:
        self.items[schedule.schedule_id] = schedule
        return schedule

    def delete(self, *, schedule_id: int) -> bool:
        return self.items.pop(int(schedule_id), None) is not None

    def delete_many(self, schedule_ids) -> int:
        return sum(1 for i in list(schedule_ids) if self.items.pop(int(i), None) is not None)


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "", json_body=None):
        self.status_code = status_code
        self.text = text
        self._json = json_body

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if self._json is None:
            raise ValueError("no json")
        return self._json


class FakeSession:
    """Stands in for requests.Session: canned GET responses by URL fragment, recorded POSTs."""

    def __init__(self):
        self.get_routes: list[tuple[str, object]] = []
        self.gets: list[str] = []
        self.posts: list[dict] = []
        self.post_result: object = FakeResponse(200, json_body={"success": True, "rowNumber": 2})

    def route_get(self, fragment: str, result) -> None:
        self.get_routes.append((fragment, result))

    def get(self, url, timeout=None):
        self.gets.append(url)
        for fragment, result in self.get_routes:
            if fragment in url:
                if isinstance(result, Exception):
                    raise result
                return result
        raise requests.ConnectionError(f"no route for {url}")

    def post(self, url, json=None, timeout=None):
        self.posts.append({"url": url, "json": json})
        if isinstance(self.post_result, Exception):
            raise self.post_result
        return self.post_result


ENROLLMENT_CSV_HEADER = (
    "Timestamp,Student Code,Full Name,Date of Birth,Age,Emergency Contact,Email,Contact Number,"
    "Social Media Consent,Status,Referral Source,Referral Detail\n"
)


def enrollment_csv(*lines: str) -> str:
    return ENROLLMENT_CSV_HEADER + "\n".join(lines) + "\n"


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def connector(session) -> SheetConnector:
    return SheetConnector(session=session, webhook_url=WEBHOOK_URL)


@pytest.fixture
def teachers_repo() -> InMemoryTeachers:
    return InMemoryTeachers()


@pytest.fixture
def students_repo() -> InMemoryStudents:
    return InMemoryStudents()


@pytest.fixture
def schedules_repo() -> InMemorySchedules:
    return InMemorySchedules()


@pytest.fixture
def container(teachers_repo, students_repo, schedules_repo, connector):
    return assemble(
        conn=None,
        teachers_repo=teachers_repo,
        students_repo=students_repo,
        schedules_repo=schedules_repo,
        sheet_connector=connector,
        google_sheet_id=SHEET_ID,
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.school_admin.school_admin.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()
