from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

from ..common.datetime_utils import compute_age, try_parse_iso_date
from ..common.logging_setup import mask_email
from ..common.validators import require_email, require_non_empty
from ..core.exceptions import ConflictError, NotFoundError
from ..sheets.connector import SheetConnector
from ..sheets.mapping import normalize_instruments, teacher_row_to_candidate, teacher_to_payload
from ..sheets.model import AddTeacher, PushResult, UpdateTeacher
from ..sheets.push import SheetPusher
from .model import Teacher, TeacherFields
from .repository import TeacherRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TeacherWriteResult:
    """Persisted teacher plus the outcome of mirroring it to the sheet."""

    teacher: Teacher
    push: PushResult


class TeacherService:
    """Use case: manage teachers; every create/update is mirrored to the TEACHERS tab."""

    def __init__(self, teachers: TeacherRepository, *, pusher: SheetPusher, connector: SheetConnector):
        self._teachers = teachers
        self._pusher = pusher
        self._connector = connector

    def list_teachers(self) -> Sequence[Teacher]:
        return self._teachers.find_many()

    def get(self, teacher_id: int) -> Teacher:
        teacher = self._teachers.get_by_id(int(teacher_id))
        if not teacher:
            raise NotFoundError("Teacher not found")
        return teacher

    def _clean(self, fields: TeacherFields) -> TeacherFields:
        first_name = require_non_empty(fields.first_name, "First name")
        email = require_email(fields.email)
        dob = (fields.date_of_birth or "").strip()
        parsed_dob = try_parse_iso_date(dob)
        age = str(compute_age(parsed_dob)) if parsed_dob else (fields.age or "").strip()
        return replace(
            fields,
            first_name=first_name,
            last_name=(fields.last_name or "").strip(),
            email=email,
            call_name=(fields.call_name or "").strip(),
            date_of_birth=dob,
            age=age,
            phone=(fields.phone or "").strip(),
            address=(fields.address or "").strip(),
            zip_code=(fields.zip_code or "").strip(),
            tin_number=(fields.tin_number or "").strip(),
            instruments=normalize_instruments(fields.instruments),
        )

    def _ensure_email_free(self, email: str, *, exclude_id: Optional[int] = None) -> None:
        for other in self._teachers.find_by_email(email):
            if other.teacher_id != exclude_id:
                raise ConflictError("A teacher with this email already exists")

    def create(self, fields: TeacherFields) -> TeacherWriteResult:
        clean = self._clean(fields)
        self._ensure_email_free(clean.email)

        teacher = self._teachers.create(clean)
        logger.info("Teacher %s created (%s)", teacher.teacher_id, mask_email(teacher.email))

        push = self._pusher.push(
            AddTeacher(sheet_id=self._pusher.default_sheet_id, teacher=teacher_to_payload(teacher))
        )
        return TeacherWriteResult(teacher=teacher, push=push)

    def update(self, teacher_id: int, fields: TeacherFields) -> TeacherWriteResult:
        self.get(teacher_id)
        clean = self._clean(fields)
        self._ensure_email_free(clean.email, exclude_id=int(teacher_id))

        teacher = self._teachers.update(int(teacher_id), clean)
        if not teacher:
            raise NotFoundError("Teacher not found")
        logger.info("Teacher %s updated", teacher.teacher_id)

        push = self._pusher.push(
            UpdateTeacher(sheet_id=self._pusher.default_sheet_id, teacher=teacher_to_payload(teacher))
        )
        return TeacherWriteResult(teacher=teacher, push=push)

    def delete(self, teacher_id: int) -> None:
        # Local only: the sheet row is kept.
        if not self._teachers.delete(int(teacher_id)):
            raise NotFoundError("Teacher not found")
        logger.info("Teacher %s deleted", teacher_id)

    def preview_sheet(self, sheet_id: Optional[str] = None) -> List[TeacherFields]:
        """Teacher tab rows mapped to candidates; nothing is written."""
        rows = self._connector.read_teacher_rows(sheet_id or self._pusher.default_sheet_id)
        return [teacher_row_to_candidate(r) for r in rows]
