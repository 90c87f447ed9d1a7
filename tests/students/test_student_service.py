from __future__ import annotations

from datetime import date

import pytest

from src.school_admin.school_admin.core.enums import PushStatus, StudentStatus
from src.school_admin.school_admin.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.school_admin.school_admin.students.model import StudentFields

from conftest import FakeResponse, enrollment_csv


def _fields(first="Ana", last="Cruz", email="", **kw) -> StudentFields:
    return StudentFields(first_name=first, last_name=last, email=email, **kw)


def _sheet_from_posts(session) -> str:
    lines = []
    for post in session.posts:
        data = post["json"]["data"]
        lines.append(f'{data["timestamp"]},{data["studentId"]},"{data["fullName"]}"')
    return enrollment_csv(*lines)


def test_create_assigns_code_then_pushes_add_student(container, session):
    result = container.student_service.create(_fields(email="ana@x.com"))

    assert result.student.student_code == "DMS-00001"
    assert result.push.status == PushStatus.OK
    sent = session.posts[-1]["json"]
    assert sent["action"] == "addStudent"
    assert sent["data"]["studentId"] == "DMS-00001"
    assert sent["data"]["fullName"] == "Cruz, Ana"


def test_codes_are_not_reused_after_local_deletions(container, students_repo, session):
    service = container.student_service
    created = [service.create(_fields(first=f"S{i}", last="X")).student for i in range(1, 6)]
    assert [s.student_code for s in created] == [f"DMS-0000{i}" for i in range(1, 6)]

    service.delete(created[2].student_id)

    assert service.create(_fields(first="New", last="X")).student.student_code == "DMS-00006"


def test_sheet_ledger_keeps_deleted_highest_code(container, session):
    service = container.student_service
    created = [service.create(_fields(first=f"S{i}", last="X")).student for i in range(1, 6)]
    session.route_get("gviz/tq", FakeResponse(200, text=_sheet_from_posts(session)))

    service.delete(created[-1].student_id)

    assert service.create(_fields(first="New", last="X")).student.student_code == "DMS-00006"


def test_create_defaults_enrollment_date_and_derives_age(container):
    result = container.student_service.create(_fields(date_of_birth="2010-01-01"))

    assert result.student.enrollment_date is not None
    assert int(result.student.age) >= 16


def test_create_normalizes_referral(container):
    student = container.student_service.create(
        _fields(referral_source="Social Media"), referral_platform="TikTok"
    ).student

    assert student.referral_details == "TikTok"


def test_duplicate_email_among_active_students_conflicts(container):
    container.student_service.create(_fields(email="ana@x.com"))

    with pytest.raises(ConflictError):
        container.student_service.create(_fields(first="Other", email="ANA@x.com"))


def test_inactive_student_email_does_not_conflict(container):
    container.student_service.create(_fields(email="ana@x.com", status=StudentStatus.INACTIVE))

    result = container.student_service.create(_fields(first="Again", email="ana@x.com"))

    assert result.student.email == "ana@x.com"


def test_blank_emails_never_collide(container):
    container.student_service.create(_fields(first="One"))
    container.student_service.create(_fields(first="Two"))

    assert len(container.student_service.list_students()) == 2


def test_missing_first_name_is_rejected(container):
    with pytest.raises(ValidationError):
        container.student_service.create(_fields(first=" "))


def test_update_keeps_assigned_code_and_pushes_update(container, session):
    student = container.student_service.create(_fields(email="ana@x.com")).student

    result = container.student_service.update(
        student.student_id,
        _fields(last="Reyes", email="ana@x.com", student_code="DMS-99999", enrollment_date=date(2026, 1, 5)),
    )

    assert result.student.student_code == student.student_code
    assert result.student.last_name == "Reyes"
    assert session.posts[-1]["json"]["action"] == "updateStudent"
    assert session.posts[-1]["json"]["data"]["studentId"] == student.student_code


def test_update_push_failure_is_reported_not_raised(container, session):
    student = container.student_service.create(_fields()).student
    session.post_result = FakeResponse(500)

    result = container.student_service.update(student.student_id, _fields(last="Reyes"))

    assert result.push.status == PushStatus.FAILED
    assert result.student.last_name == "Reyes"


def test_update_and_delete_unknown_student(container):
    with pytest.raises(NotFoundError):
        container.student_service.update(404, _fields())
    with pytest.raises(NotFoundError):
        container.student_service.delete(404)
