from __future__ import annotations

import logging
from datetime import datetime

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, try_parse_iso_date
from ..common.http import domain_error_response, error_response, int_arg, isoformat, json_body, text
from ..core.exceptions import DomainError, ValidationError
from ..core.enums import Weekday
from ..container import Container
from .lifecycle import card_state
from .model import LessonSchedule, Recurrence, ScheduleDraft

logger = logging.getLogger(__name__)


def schedule_json(s: LessonSchedule) -> dict:
    body = {
        "id": s.schedule_id,
        "teacherId": s.teacher_id,
        "teacherName": s.teacher_name,
        "studentName": s.student_name,
        "instrument": s.instrument,
        "level": s.level,
        "room": s.room,
        "day": s.day.value,
        "time": isoformat(s.start_time),
        "duration": s.duration,
        "cardNumber": s.card_number,
        "currentLessonNumber": s.current_lesson_number,
        "maxLessons": s.max_lessons,
        "startDate": isoformat(s.start_date),
        "isActive": s.is_active,
        "cardState": card_state(s).value,
        "recurrence": None,
    }
    if s.recurrence:
        body["recurrence"] = {
            "frequency": s.recurrence.frequency,
            "days": [d.value for d in s.recurrence.days],
            "weeks": s.recurrence.weeks,
        }
    return body


def _weekday(value: str) -> Weekday:
    try:
        return Weekday(value.strip().capitalize())
    except ValueError:
        raise ValidationError(f"Unknown weekday: {value}")


def draft_from_json(data: dict) -> ScheduleDraft:
    day = text(data, "day")
    if not day:
        raise ValidationError("Day is required")

    raw_time = text(data, "time")
    if not raw_time:
        raise ValidationError("Time is required")
    try:
        start_time = datetime.strptime(raw_time[:5], "%H:%M").time()
    except ValueError:
        raise ValidationError("Time must be HH:MM")

    raw_start = text(data, "startDate")
    start_date = try_parse_iso_date(raw_start)
    if not start_date:
        raise ValidationError("Start date is required (YYYY-MM-DD)")

    return ScheduleDraft(
        teacher_id=int_arg(data.get("teacherId"), "Teacher"),
        teacher_name=text(data, "teacherName"),
        student_name=text(data, "studentName"),
        instrument=text(data, "instrument"),
        level=text(data, "level"),
        room=text(data, "room"),
        day=_weekday(day),
        start_time=start_time,
        duration=text(data, "duration"),
        card_number=text(data, "cardNumber"),
        current_lesson_number=int_arg(data.get("currentLessonNumber") or 1, "Lesson number"),
        start_date=start_date,
    )


def recurrence_from_json(data: dict) -> Recurrence:
    raw = data.get("recurrence")
    if not isinstance(raw, dict):
        raise ValidationError("Recurrence is required")
    days = raw.get("days") or []
    if not isinstance(days, list):
        raise ValidationError("Recurrence days must be a list")
    return Recurrence(
        frequency=int_arg(raw.get("frequency"), "Frequency"),
        days=tuple(_weekday(str(d)) for d in days),
        weeks=int_arg(raw.get("weeks"), "Weeks"),
    )


def register(app: Flask, container: Container) -> None:
    service = container.schedule_service

    @app.route("/api/schedules", methods=["GET"], endpoint="schedules_list")
    def schedules_list():
        try:
            teacher_id_s = request.args.get("teacherId")
            teacher_id = int_arg(teacher_id_s, "teacherId") if teacher_id_s else None
            schedules = service.list_schedules(teacher_id=teacher_id)
            return jsonify({"schedules": [schedule_json(s) for s in schedules]})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error fetching schedules")
            return error_response("Failed to fetch schedules", 500)

    @app.route("/api/schedules", methods=["POST"], endpoint="schedules_create")
    def schedules_create():
        try:
            schedule = service.create(draft_from_json(json_body()))
            return jsonify({"schedule": schedule_json(schedule)}), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error creating schedule")
            return error_response("Failed to create schedule", 500)

    @app.route("/api/schedules/recurring", methods=["POST"], endpoint="schedules_create_recurring")
    def schedules_create_recurring():
        try:
            data = json_body()
            created = service.create_recurring(draft_from_json(data), recurrence_from_json(data))
            return jsonify({"schedules": [schedule_json(s) for s in created], "count": len(created)}), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error creating recurring schedules")
            return error_response("Failed to create recurring schedules", 500)

    @app.route("/api/schedules/<int:schedule_id>/complete", methods=["POST"], endpoint="schedules_complete")
    def schedules_complete(schedule_id: int):
        try:
            progress = service.complete_lesson(schedule_id)
            body = {"schedule": schedule_json(progress.schedule), "renewalNeeded": progress.renewal_needed}
            if progress.renewal_needed:
                body["warning"] = progress.warning
            return jsonify(body)
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error completing lesson")
            return error_response("Failed to complete lesson", 500)

    @app.route("/api/schedules/<int:schedule_id>/renew", methods=["POST"], endpoint="schedules_renew")
    def schedules_renew(schedule_id: int):
        try:
            schedule = service.renew_card(schedule_id, text(json_body(), "cardNumber"))
            return jsonify({"schedule": schedule_json(schedule)})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error renewing card")
            return error_response("Failed to renew card", 500)

    @app.route("/api/schedules/<int:schedule_id>/deactivate", methods=["POST"], endpoint="schedules_deactivate")
    def schedules_deactivate(schedule_id: int):
        try:
            return jsonify({"schedule": schedule_json(service.deactivate(schedule_id))})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error deactivating schedule")
            return error_response("Failed to deactivate schedule", 500)

    @app.route("/api/schedules", methods=["DELETE"], endpoint="schedules_delete")
    def schedules_delete():
        try:
            service.delete(int_arg(request.args.get("id"), "id"))
            return jsonify({"message": "Schedule deleted successfully"})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error deleting schedule")
            return error_response("Failed to delete schedule", 500)

    @app.route("/api/schedules/cleanup", methods=["POST"], endpoint="schedules_cleanup")
    def schedules_cleanup():
        try:
            deleted = service.cleanup_stale(now_local().date())
            return jsonify({"deleted": deleted})
        except Exception:
            logger.exception("Error cleaning up schedules")
            return error_response("Failed to clean up schedules", 500)
