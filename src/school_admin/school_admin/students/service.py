from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

from ..common.datetime_utils import compute_age, now_local, try_parse_iso_date
from ..common.logging_setup import mask_email
from ..common.validators import optional_email, require_non_empty
from ..core.exceptions import ConflictError, NotFoundError
from ..sheets.connector import SheetConnector
from ..sheets.mapping import enrollment_row_to_candidate, student_to_payload
from ..sheets.model import AddStudent, PushResult, UpdateStudent
from ..sheets.push import SheetPusher
from .model import Student, StudentFields, normalize_referral_details
from .repository import StudentRepository
from .sequencer import StudentCodeSequencer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StudentWriteResult:
    student: Student
    push: PushResult


class StudentService:
    """Use case: manage students.

    Creation is two-step: the record is stored with an empty code, then patched
    with the next sequential code, and only then pushed to the ENROLLMENT tab.
    """

    def __init__(
        self,
        students: StudentRepository,
        *,
        sequencer: StudentCodeSequencer,
        pusher: SheetPusher,
        connector: SheetConnector,
    ):
        self._students = students
        self._sequencer = sequencer
        self._pusher = pusher
        self._connector = connector

    def list_students(self) -> Sequence[Student]:
        return self._students.find_many()

    def get(self, student_id: int) -> Student:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError("Student not found")
        return student

    def _clean(self, fields: StudentFields) -> StudentFields:
        dob = (fields.date_of_birth or "").strip()
        parsed_dob = try_parse_iso_date(dob)
        return replace(
            fields,
            first_name=require_non_empty(fields.first_name, "First name"),
            last_name=(fields.last_name or "").strip(),
            email=optional_email(fields.email),
            phone=(fields.phone or "").strip(),
            date_of_birth=dob,
            age=str(compute_age(parsed_dob)) if parsed_dob else (fields.age or "").strip(),
            address=(fields.address or "").strip(),
            parent_name=(fields.parent_name or "").strip(),
            parent_phone=(fields.parent_phone or "").strip(),
            student_code=(fields.student_code or "").strip(),
        )

    def _ensure_email_free(self, email: str, *, exclude_id: Optional[int] = None) -> None:
        if not email:
            return
        for other in self._students.find_by_email(email):
            if other.is_active and other.student_id != exclude_id:
                raise ConflictError("A student with this email already exists")

    def create(self, fields: StudentFields, *, referral_platform: str = "") -> StudentWriteResult:
        clean = self._clean(fields)
        clean = replace(
            clean,
            student_code="",
            enrollment_date=clean.enrollment_date or now_local().date(),
            referral_details=normalize_referral_details(
                clean.referral_source, platform=referral_platform, details=clean.referral_details
            ),
        )
        self._ensure_email_free(clean.email)

        created = self._students.create(clean)
        code = self._sequencer.next_student_code(self._pusher.default_sheet_id)
        student = self._students.set_student_code(created.student_id, code) or replace(created, student_code=code)
        logger.info("Student %s created with code %s (%s)", student.student_id, code, mask_email(student.email))

        push = self._pusher.push(
            AddStudent(sheet_id=self._pusher.default_sheet_id, student=student_to_payload(student))
        )
        return StudentWriteResult(student=student, push=push)

    def update(self, student_id: int, fields: StudentFields) -> StudentWriteResult:
        existing = self.get(student_id)
        clean = self._clean(fields)
        # An assigned code never changes.
        clean = replace(clean, student_code=existing.student_code or clean.student_code)
        self._ensure_email_free(clean.email, exclude_id=existing.student_id)

        student = self._students.update(existing.student_id, clean)
        if not student:
            raise NotFoundError("Student not found")
        logger.info("Student %s updated", student.student_id)

        push = self._pusher.push(
            UpdateStudent(sheet_id=self._pusher.default_sheet_id, student=student_to_payload(student))
        )
        return StudentWriteResult(student=student, push=push)

    def delete(self, student_id: int) -> None:
        if not self._students.delete(int(student_id)):
            raise NotFoundError("Student not found")
        logger.info("Student %s deleted", student_id)

    def next_code(self, sheet_id: Optional[str] = None) -> str:
        return self._sequencer.next_student_code(sheet_id or self._pusher.default_sheet_id)

    def preview_sheet(self, sheet_id: Optional[str] = None) -> List[StudentFields]:
        rows = self._connector.read_enrollment_rows(sheet_id or self._pusher.default_sheet_id)
        today = now_local().date()
        return [enrollment_row_to_candidate(r, today=today) for r in rows]
