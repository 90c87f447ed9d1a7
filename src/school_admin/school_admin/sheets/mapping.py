"""Translation between store entities and the sheet's flat row shape."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_sheet_timestamp, now_local, parse_sheet_timestamp
from ..common.names import first_last, last_comma_first, split_full_name
from ..core.constants import INACTIVE_SHEET_STATUSES
from ..core.enums import StudentStatus
from ..students.model import Student, StudentFields
from ..teachers.model import Teacher, TeacherFields
from .model import EnrollmentSheetRow, StudentPayload, TeacherPayload, TeacherSheetRow


def normalize_instruments(value: str) -> str:
    seen: list[str] = []
    for item in (value or "").split(","):
        name = item.strip()
        if name and name not in seen:
            seen.append(name)
    return ", ".join(seen)


def sheet_status_to_student_status(value: str) -> StudentStatus:
    if (value or "").strip().lower() in INACTIVE_SHEET_STATUSES:
        return StudentStatus.INACTIVE
    return StudentStatus.ACTIVE


def teacher_to_payload(teacher: Teacher) -> TeacherPayload:
    return TeacherPayload(
        teacher_call_name=teacher.call_name,
        full_name=first_last(teacher.first_name, teacher.last_name),
        date_of_birth=teacher.date_of_birth,
        age=teacher.age,
        contact_number=teacher.phone,
        email_address=teacher.email,
        address=teacher.address,
        zip_code=teacher.zip_code,
        tin_number=teacher.tin_number,
        instruments=teacher.instruments,
    )


def student_to_payload(student: Student, *, now: Optional[datetime] = None) -> StudentPayload:
    return StudentPayload(
        timestamp=format_sheet_timestamp(now or now_local()),
        student_id=student.student_code,
        full_name=last_comma_first(student.first_name, student.last_name),
        date_of_birth=student.date_of_birth,
        age=student.age,
        emergency_contact=student.parent_name,
        email=student.email,
        contact_number=student.phone,
        social_media_consent=student.social_media_consent,
        status=student.status.value.upper(),
        referral_source=student.referral_source,
        referral_details=student.referral_details,
    )


def enrollment_row_to_candidate(row: EnrollmentSheetRow, *, today: Optional[date] = None) -> StudentFields:
    first_name, last_name = split_full_name(row.full_name)
    enrollment_date = parse_sheet_timestamp(row.timestamp) or today or now_local().date()
    return StudentFields(
        first_name=first_name,
        last_name=last_name,
        email=row.email,
        phone=row.contact_number,
        date_of_birth=row.date_of_birth,
        age=row.age,
        parent_name=row.emergency_contact,
        enrollment_date=enrollment_date,
        student_code=row.student_code,
        status=sheet_status_to_student_status(row.status),
        social_media_consent=row.social_media_consent,
        referral_source=row.referral_source,
        referral_details=row.referral_detail,
    )


def teacher_row_to_candidate(row: TeacherSheetRow) -> TeacherFields:
    first_name, last_name = split_full_name(row.full_name)
    return TeacherFields(
        first_name=first_name,
        last_name=last_name,
        email=row.email,
        call_name=row.call_name,
        date_of_birth=row.date_of_birth,
        age=row.age,
        phone=row.contact_number,
        address=row.address,
        zip_code=row.zip_code,
        tin_number=row.tin_number,
        instruments=normalize_instruments(row.instruments),
    )
