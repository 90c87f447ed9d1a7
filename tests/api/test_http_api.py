from __future__ import annotations

from conftest import SHEET_ID, FakeResponse, enrollment_csv


def _teacher_body(**kw):
    body = {"firstName": "Ana", "lastName": "Cruz", "email": "ana@x.com", "instrument": "Piano"}
    body.update(kw)
    return body


def test_create_teacher_returns_entity_and_sheet_sync(client, session, teachers_repo):
    resp = client.post("/api/teachers", json=_teacher_body())

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["teacher"]["email"] == "ana@x.com"
    assert body["teacher"]["instruments"] == ["Piano"]
    assert body["sheetSync"] == {"status": "ok", "reason": None, "rowNumber": 2}
    assert len(teachers_repo.find_many()) == 1
    assert session.posts[0]["json"]["action"] == "addTeacher"


def test_create_teacher_succeeds_when_sheet_push_fails(client, session):
    session.post_result = FakeResponse(503)

    resp = client.post("/api/teachers", json=_teacher_body())

    assert resp.status_code == 201
    assert resp.get_json()["sheetSync"]["status"] == "failed"


def test_duplicate_teacher_email_is_400(client):
    client.post("/api/teachers", json=_teacher_body())

    resp = client.post("/api/teachers", json=_teacher_body(firstName="Other"))

    assert resp.status_code == 400
    assert "already exists" in resp.get_json()["error"]


def test_update_and_delete_teacher(client):
    teacher_id = client.post("/api/teachers", json=_teacher_body()).get_json()["teacher"]["id"]

    resp = client.put("/api/teachers", json=_teacher_body(id=teacher_id, phone="0917"))
    assert resp.status_code == 200
    assert resp.get_json()["teacher"]["phone"] == "0917"

    assert client.delete(f"/api/teachers?id={teacher_id}").status_code == 200
    assert client.delete(f"/api/teachers?id={teacher_id}").status_code == 404


def test_teacher_sheet_preview(client, session):
    session.route_get("gviz/tq", FakeResponse(200, text="h\nMiss Ana,Ana Cruz,,,,ana@x.com,,,,Piano\n"))

    resp = client.get("/api/teachers/google-sheets")

    assert resp.status_code == 200
    assert resp.get_json()["teachers"][0]["firstName"] == "Ana"


def test_student_crud_and_next_code(client, session):
    assert client.get("/api/students/next-code").get_json() == {"studentCode": "DMS-00001"}

    created = client.post("/api/students", json={"firstName": "Ben", "lastName": "Lee", "email": "ben@x.com"})
    assert created.status_code == 201
    student = created.get_json()["student"]
    assert student["studentCode"] == "DMS-00001"
    assert session.posts[-1]["json"]["action"] == "addStudent"

    updated = client.put("/api/students", json={"id": student["id"], "firstName": "Ben", "lastName": "Ong"})
    assert updated.get_json()["student"]["lastName"] == "Ong"

    assert client.get("/api/students").get_json()["students"][0]["studentCode"] == "DMS-00001"
    assert client.delete(f"/api/students?id={student['id']}").status_code == 200


def test_student_bad_status_is_400(client):
    resp = client.post("/api/students", json={"firstName": "Ben", "status": "graduated"})

    assert resp.status_code == 400


def test_sync_endpoint_reports_counts(client, session):
    session.route_get("gviz/tq", FakeResponse(200, text=enrollment_csv(",DMS-00001,Ben Lee,,,,ben@x.com")))

    resp = client.post("/api/students/sync", json={"sheetId": SHEET_ID})

    body = resp.get_json()
    assert resp.status_code == 200
    assert (body["success"], body["created"], body["updated"], body["failures"]) == (True, 1, 0, [])


def test_sync_connectivity_failure_is_502_with_details(client, session):
    session.route_get("gviz/tq", FakeResponse(500))
    session.route_get("export", FakeResponse(401))

    resp = client.post("/api/students/sync", json={})

    assert resp.status_code == 502
    assert "401" in resp.get_json()["details"]


def _schedule_body(teacher_id, **kw):
    body = {
        "teacherId": teacher_id,
        "studentName": "Ben Lee",
        "instrument": "Piano",
        "day": "Monday",
        "time": "15:00",
        "duration": "60 min",
        "cardNumber": "card-001",
        "startDate": "2026-10-05",
    }
    body.update(kw)
    return body


def test_schedule_lifecycle_over_http(client):
    teacher_id = client.post("/api/teachers", json=_teacher_body()).get_json()["teacher"]["id"]

    created = client.post("/api/schedules", json=_schedule_body(teacher_id, currentLessonNumber=10))
    assert created.status_code == 201
    schedule = created.get_json()["schedule"]
    assert schedule["cardNumber"] == "CARD-001"
    assert schedule["time"] == "15:00"

    completed = client.post(f"/api/schedules/{schedule['id']}/complete")
    assert completed.status_code == 200
    body = completed.get_json()
    assert body["renewalNeeded"] is True
    assert body["warning"]
    assert body["schedule"]["cardState"] == "RENEWAL_NEEDED"

    again = client.post(f"/api/schedules/{schedule['id']}/complete")
    assert again.status_code == 400

    renewed = client.post(f"/api/schedules/{schedule['id']}/renew", json={"cardNumber": "CARD-099"})
    assert renewed.get_json()["schedule"]["currentLessonNumber"] == 1

    deactivated = client.post(f"/api/schedules/{schedule['id']}/deactivate")
    assert deactivated.get_json()["schedule"]["isActive"] is False

    assert client.delete(f"/api/schedules?id={schedule['id']}").status_code == 200


def test_recurring_schedules_over_http(client):
    teacher_id = client.post("/api/teachers", json=_teacher_body()).get_json()["teacher"]["id"]
    body = _schedule_body(teacher_id, recurrence={"frequency": 2, "days": ["Monday", "Wednesday"], "weeks": 10})

    resp = client.post("/api/schedules/recurring", json=body)

    assert resp.status_code == 201
    assert resp.get_json()["count"] == 10
    listed = client.get(f"/api/schedules?teacherId={teacher_id}").get_json()["schedules"]
    assert [s["currentLessonNumber"] for s in listed] == list(range(1, 11))


def test_recurrence_frequency_mismatch_is_400(client):
    teacher_id = client.post("/api/teachers", json=_teacher_body()).get_json()["teacher"]["id"]
    body = _schedule_body(teacher_id, recurrence={"frequency": 3, "days": ["Monday"], "weeks": 2})

    assert client.post("/api/schedules/recurring", json=body).status_code == 400


def test_unknown_schedule_is_404(client):
    assert client.post("/api/schedules/77/complete").status_code == 404


def test_check_env_masks_sheet_id(client):
    body = client.get("/api/check-env").get_json()

    assert body["config"]["googleSheetId"] == f"{SHEET_ID[:10]}..."
    assert body["config"]["webhookConfigured"] is True


def test_cli_sync_students(app, session):
    session.route_get("gviz/tq", FakeResponse(200, text=enrollment_csv(",DMS-00001,Ben Lee")))

    result = app.test_cli_runner().invoke(args=["sync-students"])

    assert result.exit_code == 0
    assert "1 created" in result.output


def test_cli_cleanup_schedules(app):
    result = app.test_cli_runner().invoke(args=["cleanup-schedules"])

    assert result.exit_code == 0
    assert "Removed 0 schedule(s)." in result.output
