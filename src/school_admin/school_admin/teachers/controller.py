from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.http import domain_error_response, error_response, int_arg, isoformat, json_body, text
from ..core.exceptions import DomainError
from ..container import Container
from .model import Teacher, TeacherFields

logger = logging.getLogger(__name__)


def teacher_json(t: Teacher) -> dict:
    return {
        "id": t.teacher_id,
        "firstName": t.first_name,
        "lastName": t.last_name,
        "callName": t.call_name,
        "dateOfBirth": t.date_of_birth,
        "age": t.age,
        "email": t.email,
        "phone": t.phone,
        "address": t.address,
        "zipCode": t.zip_code,
        "tinNumber": t.tin_number,
        "instruments": t.instrument_list,
        "createdAt": isoformat(t.created_at),
        "updatedAt": isoformat(t.updated_at),
    }


def candidate_json(f: TeacherFields) -> dict:
    return {
        "firstName": f.first_name,
        "lastName": f.last_name,
        "callName": f.call_name,
        "dateOfBirth": f.date_of_birth,
        "age": f.age,
        "email": f.email,
        "phone": f.phone,
        "address": f.address,
        "zipCode": f.zip_code,
        "tinNumber": f.tin_number,
        "instruments": f.instruments,
    }


def fields_from_json(data: dict) -> TeacherFields:
    instruments = data.get("instruments", data.get("instrument", ""))
    if isinstance(instruments, (list, tuple)):
        instruments = ", ".join(str(i) for i in instruments)
    return TeacherFields(
        first_name=text(data, "firstName"),
        last_name=text(data, "lastName"),
        email=text(data, "email"),
        call_name=text(data, "callName"),
        date_of_birth=text(data, "dateOfBirth"),
        age=text(data, "age"),
        phone=text(data, "phone"),
        address=text(data, "address"),
        zip_code=text(data, "zipCode"),
        tin_number=text(data, "tinNumber"),
        instruments=str(instruments or ""),
    )


def register(app: Flask, container: Container) -> None:
    service = container.teacher_service

    @app.route("/api/teachers", methods=["GET"], endpoint="teachers_list")
    def teachers_list():
        try:
            return jsonify({"teachers": [teacher_json(t) for t in service.list_teachers()]})
        except Exception:
            logger.exception("Error fetching teachers")
            return error_response("Failed to fetch teachers", 500)

    @app.route("/api/teachers", methods=["POST"], endpoint="teachers_create")
    def teachers_create():
        try:
            result = service.create(fields_from_json(json_body()))
            return jsonify({"teacher": teacher_json(result.teacher), "sheetSync": result.push.to_json()}), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error creating teacher")
            return error_response("Failed to create teacher", 500)

    @app.route("/api/teachers", methods=["PUT"], endpoint="teachers_update")
    def teachers_update():
        try:
            data = json_body()
            result = service.update(int_arg(data.get("id"), "id"), fields_from_json(data))
            return jsonify({"teacher": teacher_json(result.teacher), "sheetSync": result.push.to_json()})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error updating teacher")
            return error_response("Failed to update teacher", 500)

    @app.route("/api/teachers", methods=["DELETE"], endpoint="teachers_delete")
    def teachers_delete():
        try:
            service.delete(int_arg(request.args.get("id"), "id"))
            return jsonify({"message": "Teacher deleted successfully"})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error deleting teacher")
            return error_response("Failed to delete teacher", 500)

    @app.route("/api/teachers/google-sheets", methods=["GET"], endpoint="teachers_sheet_preview")
    def teachers_sheet_preview():
        try:
            candidates = service.preview_sheet(request.args.get("sheetId") or None)
            return jsonify({"teachers": [candidate_json(c) for c in candidates], "count": len(candidates)})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error reading teacher tab")
            return error_response("Failed to read teacher tab", 500)
