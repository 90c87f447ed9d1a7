from __future__ import annotations

import pytest
import requests

from src.school_admin.school_admin.core.enums import PushStatus
from src.school_admin.school_admin.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.school_admin.school_admin.teachers.model import TeacherFields

from conftest import SHEET_ID, FakeResponse


def _fields(**kw) -> TeacherFields:
    base = dict(first_name="Ana", last_name="Cruz", email="ana@x.com", instruments="Piano")
    base.update(kw)
    return TeacherFields(**base)


def test_create_stores_teacher_and_pushes_add_teacher(container, teachers_repo, session):
    result = container.teacher_service.create(_fields())

    assert [t.email for t in teachers_repo.find_many()] == ["ana@x.com"]
    assert result.push.status == PushStatus.OK

    sent = session.posts[0]["json"]
    assert sent["action"] == "addTeacher"
    assert sent["sheetId"] == SHEET_ID
    assert sent["teacherData"]["fullName"] == "Ana Cruz"
    assert sent["teacherData"]["emailAddress"] == "ana@x.com"
    assert sent["teacherData"]["instruments"] == "Piano"


def test_push_network_failure_does_not_block_create(container, teachers_repo, session):
    session.post_result = requests.ConnectionError("network down")

    result = container.teacher_service.create(_fields())

    assert result.teacher.teacher_id == 1
    assert result.push.status == PushStatus.FAILED
    assert teachers_repo.get_by_id(1) is not None


def test_push_failure_does_not_block_update(container, session):
    teacher = container.teacher_service.create(_fields()).teacher
    session.post_result = FakeResponse(200, json_body={"success": False, "error": "Teacher not found"})

    result = container.teacher_service.update(teacher.teacher_id, _fields(phone="0917"))

    assert result.teacher.phone == "0917"
    assert result.push.status == PushStatus.NOT_FOUND
    assert session.posts[-1]["json"]["action"] == "updateTeacher"


def test_duplicate_email_conflicts_case_insensitive(container):
    container.teacher_service.create(_fields())

    with pytest.raises(ConflictError):
        container.teacher_service.create(_fields(first_name="Other", email="ANA@X.COM"))


def test_update_may_keep_own_email(container):
    teacher = container.teacher_service.create(_fields()).teacher

    result = container.teacher_service.update(teacher.teacher_id, _fields(call_name="Miss Ana"))

    assert result.teacher.call_name == "Miss Ana"


def test_invalid_email_is_rejected(container):
    with pytest.raises(ValidationError):
        container.teacher_service.create(_fields(email="not-an-email"))


def test_age_is_derived_from_iso_birth_date(container):
    teacher = container.teacher_service.create(_fields(date_of_birth="1990-01-01", age="1")).teacher

    assert int(teacher.age) >= 36


def test_instruments_are_normalized(container):
    teacher = container.teacher_service.create(_fields(instruments="Piano, , Violin, Piano")).teacher

    assert teacher.instruments == "Piano, Violin"
    assert teacher.instrument_list == ["Piano", "Violin"]


def test_update_and_delete_unknown_teacher(container):
    with pytest.raises(NotFoundError):
        container.teacher_service.update(99, _fields())
    with pytest.raises(NotFoundError):
        container.teacher_service.delete(99)


def test_delete_is_local_only(container, session):
    teacher = container.teacher_service.create(_fields()).teacher
    posts_before = len(session.posts)

    container.teacher_service.delete(teacher.teacher_id)

    assert len(session.posts) == posts_before
    assert container.teacher_service.list_teachers() == []


def test_update_unknown_teacher_is_not_found_even_when_email_is_taken(container):
    container.teacher_service.create(_fields(email="taken@x.com"))

    with pytest.raises(NotFoundError):
        container.teacher_service.update(99, _fields(email="taken@x.com"))
