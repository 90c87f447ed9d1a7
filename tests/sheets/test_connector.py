from __future__ import annotations

import pytest
import requests

from src.school_admin.school_admin.core.enums import PushStatus, SheetAction
from src.school_admin.school_admin.core.exceptions import ConnectivityError
from src.school_admin.school_admin.sheets.connector import SheetConnector
from src.school_admin.school_admin.sheets.model import AddStudent, SheetAck, UpdateTeacher, build_envelope
from src.school_admin.school_admin.sheets.push import SheetPusher

from conftest import SHEET_ID, WEBHOOK_URL, FakeResponse, enrollment_csv


def _teacher_payload():
    from src.school_admin.school_admin.sheets.model import TeacherPayload

    return TeacherPayload(
        teacher_call_name="Teacher Ana",
        full_name="Ana Cruz",
        date_of_birth="1990-05-01",
        age="35",
        contact_number="0917",
        email_address="ana@x.com",
        address="Main St",
        zip_code="1000",
        tin_number="123",
        instruments="Piano",
    )


def test_read_tab_uses_gviz_export_first(session, connector):
    session.route_get("gviz/tq", FakeResponse(200, text=enrollment_csv("01/02/2026 10:00:00,DMS-00001,\"Cruz, Ana\"")))

    rows = connector.read_enrollment_rows(SHEET_ID)

    assert len(rows) == 1
    assert rows[0].student_code == "DMS-00001"
    assert rows[0].full_name == "Cruz, Ana"
    assert rows[0].row_number == 2
    assert "sheet=ENROLLMENT" in session.gets[0]


def test_read_tab_falls_back_to_gid_export(session, connector):
    session.route_get("gviz/tq", FakeResponse(400))
    session.route_get("export?format=csv&gid=0", FakeResponse(200, text=enrollment_csv(",DMS-00007,Ben Lee")))

    rows = connector.read_enrollment_rows(SHEET_ID)

    assert [r.student_code for r in rows] == ["DMS-00007"]
    assert len(session.gets) == 2


def test_teacher_tab_falls_back_to_its_own_gid(session, connector):
    session.route_get("gviz/tq", requests.ConnectionError("boom"))
    session.route_get("export?format=csv&gid=1", FakeResponse(200, text="header\nTeacher Ana,Ana Cruz\n"))

    rows = connector.read_teacher_rows(SHEET_ID)

    assert rows[0].call_name == "Teacher Ana"
    assert rows[0].instruments == ""


def test_read_tab_raises_connectivity_with_status_when_both_fail(session, connector):
    session.route_get("gviz/tq", FakeResponse(500))
    session.route_get("export?format=csv", FakeResponse(403))

    with pytest.raises(ConnectivityError) as exc:
        connector.read_enrollment_rows(SHEET_ID)

    assert exc.value.status_code == 403
    assert "403" in str(exc.value)


def test_rows_without_name_or_code_are_discarded(session, connector):
    session.route_get("gviz/tq", FakeResponse(200, text=enrollment_csv(
        "01/02/2026,,,2001-01-01",
        "01/02/2026,,Ben Lee",
    )))

    rows = connector.read_enrollment_rows(SHEET_ID)

    assert [r.full_name for r in rows] == ["Ben Lee"]


def test_envelope_carries_action_sheet_and_payload_key():
    envelope = build_envelope(UpdateTeacher(sheet_id=SHEET_ID, teacher=_teacher_payload()))

    assert envelope["action"] == SheetAction.UPDATE_TEACHER.value
    assert envelope["sheetId"] == SHEET_ID
    assert envelope["teacherData"]["emailAddress"] == "ana@x.com"
    assert "data" not in envelope


def test_send_posts_envelope_and_parses_ack(session, connector):
    session.post_result = FakeResponse(200, json_body={"success": True, "rowNumber": 7})

    ack = connector.send(UpdateTeacher(sheet_id=SHEET_ID, teacher=_teacher_payload()))

    assert ack == SheetAck(success=True, row_number=7)
    assert session.posts[0]["url"] == WEBHOOK_URL
    assert session.posts[0]["json"]["action"] == "updateTeacher"


def test_send_non_2xx_raises_connectivity(session, connector):
    session.post_result = FakeResponse(502)

    with pytest.raises(ConnectivityError) as exc:
        connector.send(UpdateTeacher(sheet_id=SHEET_ID, teacher=_teacher_payload()))

    assert exc.value.status_code == 502


def test_pusher_maps_not_found_ack(session, connector):
    session.post_result = FakeResponse(200, json_body={"success": False, "error": "Error: Teacher not found in sheet"})
    pusher = SheetPusher(connector=connector, default_sheet_id=SHEET_ID)

    result = pusher.push(UpdateTeacher(sheet_id=SHEET_ID, teacher=_teacher_payload()))

    assert result.status == PushStatus.NOT_FOUND
    assert "not found" in result.reason


def test_pusher_never_raises_on_network_error(session, connector):
    session.post_result = requests.ConnectionError("network down")
    pusher = SheetPusher(connector=connector, default_sheet_id=SHEET_ID)

    result = pusher.push(UpdateTeacher(sheet_id=SHEET_ID, teacher=_teacher_payload()))

    assert result.status == PushStatus.FAILED
    assert "network down" in result.reason


def test_pusher_skips_without_webhook(session):
    pusher = SheetPusher(connector=SheetConnector(session=session), default_sheet_id=SHEET_ID)

    result = pusher.push(UpdateTeacher(sheet_id=SHEET_ID, teacher=_teacher_payload()))

    assert result.status == PushStatus.SKIPPED
    assert session.posts == []


def test_pusher_skips_without_sheet_id(session, connector):
    from src.school_admin.school_admin.sheets.model import StudentPayload

    payload = StudentPayload(*([""] * 12))
    result = SheetPusher(connector=connector).push(AddStudent(sheet_id="", student=payload))

    assert result.status == PushStatus.SKIPPED
    assert session.posts == []
