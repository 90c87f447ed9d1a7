from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import try_parse_iso_date
from ..common.http import domain_error_response, error_response, int_arg, isoformat, json_body, text
from ..core.enums import StudentStatus
from ..core.exceptions import DomainError, ValidationError
from ..container import Container
from .model import Student, StudentFields

logger = logging.getLogger(__name__)


def _fields_json(s) -> dict:
    return {
        "firstName": s.first_name,
        "lastName": s.last_name,
        "email": s.email,
        "phone": s.phone,
        "dateOfBirth": s.date_of_birth,
        "age": s.age,
        "address": s.address,
        "parentName": s.parent_name,
        "parentPhone": s.parent_phone,
        "enrollmentDate": isoformat(s.enrollment_date),
        "studentCode": s.student_code,
        "status": s.status.value,
        "socialMediaConsent": s.social_media_consent,
        "referralSource": s.referral_source,
        "referralDetails": s.referral_details,
    }


def student_json(s: Student) -> dict:
    body = {"id": s.student_id}
    body.update(_fields_json(s))
    body["createdAt"] = isoformat(s.created_at)
    body["updatedAt"] = isoformat(s.updated_at)
    return body


def fields_from_json(data: dict) -> StudentFields:
    raw_status = text(data, "status", StudentStatus.ACTIVE.value).lower()
    try:
        status = StudentStatus(raw_status)
    except ValueError:
        raise ValidationError("Status must be 'active' or 'inactive'")

    raw_enrollment = text(data, "enrollmentDate")
    enrollment_date = try_parse_iso_date(raw_enrollment)
    if raw_enrollment and not enrollment_date:
        raise ValidationError("Enrollment date must be YYYY-MM-DD")

    return StudentFields(
        first_name=text(data, "firstName"),
        last_name=text(data, "lastName"),
        email=text(data, "email"),
        phone=text(data, "phone"),
        date_of_birth=text(data, "dateOfBirth"),
        age=text(data, "age"),
        address=text(data, "address"),
        parent_name=text(data, "parentName"),
        parent_phone=text(data, "parentPhone"),
        enrollment_date=enrollment_date,
        student_code=text(data, "studentCode"),
        status=status,
        social_media_consent=text(data, "socialMediaConsent"),
        referral_source=text(data, "referralSource"),
        referral_details=text(data, "referralDetails"),
    )


def register(app: Flask, container: Container) -> None:
    service = container.student_service

    @app.route("/api/students", methods=["GET"], endpoint="students_list")
    def students_list():
        try:
            return jsonify({"students": [student_json(s) for s in service.list_students()]})
        except Exception:
            logger.exception("Error fetching students")
            return error_response("Failed to fetch students", 500)

    @app.route("/api/students", methods=["POST"], endpoint="students_create")
    def students_create():
        try:
            data = json_body()
            result = service.create(fields_from_json(data), referral_platform=text(data, "referralPlatform"))
            return jsonify({"student": student_json(result.student), "sheetSync": result.push.to_json()}), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error creating student")
            return error_response("Failed to create student", 500)

    @app.route("/api/students", methods=["PUT"], endpoint="students_update")
    def students_update():
        try:
            data = json_body()
            result = service.update(int_arg(data.get("id"), "id"), fields_from_json(data))
            return jsonify({"student": student_json(result.student), "sheetSync": result.push.to_json()})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error updating student")
            return error_response("Failed to update student", 500)

    @app.route("/api/students", methods=["DELETE"], endpoint="students_delete")
    def students_delete():
        try:
            service.delete(int_arg(request.args.get("id"), "id"))
            return jsonify({"message": "Student deleted successfully"})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error deleting student")
            return error_response("Failed to delete student", 500)

    @app.route("/api/students/google-sheets", methods=["GET"], endpoint="students_sheet_preview")
    def students_sheet_preview():
        try:
            candidates = service.preview_sheet(request.args.get("sheetId") or None)
            return jsonify({"students": [_fields_json(c) for c in candidates], "count": len(candidates)})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error reading enrollment tab")
            return error_response("Failed to read enrollment tab", 500)

    @app.route("/api/students/sync", methods=["POST"], endpoint="students_sync")
    def students_sync():
        try:
            data = request.get_json(silent=True) or {}
            sheet_id = text(data, "sheetId") if isinstance(data, dict) else ""
            report = container.sync_service.pull_students(sheet_id or None)
            body = {"success": True}
            body.update(report.to_json())
            return jsonify(body)
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error syncing students from sheet")
            return error_response("Failed to sync students", 500)

    @app.route("/api/students/next-code", methods=["GET"], endpoint="students_next_code")
    def students_next_code():
        try:
            return jsonify({"studentCode": service.next_code(request.args.get("sheetId") or None)})
        except Exception:
            logger.exception("Error computing next student code")
            return error_response("Failed to compute next student code", 500)
