"""Sheet-side types: typed row views (column contract by index), webhook requests and results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Union

from ..core.enums import PushStatus, SheetAction


def _cell(cells: Sequence[str], index: int) -> str:
    return cells[index].strip() if index < len(cells) and cells[index] is not None else ""


@dataclass(frozen=True)
class TeacherSheetRow:
    row_number: int
    call_name: str
    full_name: str
    date_of_birth: str
    age: str
    contact_number: str
    email: str
    address: str
    zip_code: str
    tin_number: str
    instruments: str
    added_date: str
    last_updated: str

    @classmethod
    def from_cells(cls, cells: Sequence[str], *, row_number: int) -> "TeacherSheetRow":
        return cls(
            row_number=row_number,
            call_name=_cell(cells, 0),
            full_name=_cell(cells, 1),
            date_of_birth=_cell(cells, 2),
            age=_cell(cells, 3),
            contact_number=_cell(cells, 4),
            email=_cell(cells, 5),
            address=_cell(cells, 6),
            zip_code=_cell(cells, 7),
            tin_number=_cell(cells, 8),
            instruments=_cell(cells, 9),
            added_date=_cell(cells, 10),
            last_updated=_cell(cells, 11),
        )

    @property
    def is_identifiable(self) -> bool:
        return bool(self.full_name or self.email)


@dataclass(frozen=True)
class EnrollmentSheetRow:
    row_number: int
    timestamp: str
    student_code: str
    full_name: str
    date_of_birth: str
    age: str
    emergency_contact: str
    email: str
    contact_number: str
    social_media_consent: str
    status: str
    referral_source: str
    referral_detail: str

    @classmethod
    def from_cells(cls, cells: Sequence[str], *, row_number: int) -> "EnrollmentSheetRow":
        return cls(
            row_number=row_number,
            timestamp=_cell(cells, 0),
            student_code=_cell(cells, 1),
            full_name=_cell(cells, 2),
            date_of_birth=_cell(cells, 3),
            age=_cell(cells, 4),
            emergency_contact=_cell(cells, 5),
            email=_cell(cells, 6),
            contact_number=_cell(cells, 7),
            social_media_consent=_cell(cells, 8),
            status=_cell(cells, 9),
            referral_source=_cell(cells, 10),
            referral_detail=_cell(cells, 11),
        )

    @property
    def is_identifiable(self) -> bool:
        return bool(self.full_name or self.student_code)


@dataclass(frozen=True)
class TeacherPayload:
    teacher_call_name: str
    full_name: str
    date_of_birth: str
    age: str
    contact_number: str
    email_address: str
    address: str
    zip_code: str
    tin_number: str
    instruments: str

    def to_json(self) -> dict:
        return {
            "teacherCallName": self.teacher_call_name,
            "fullName": self.full_name,
            "dateOfBirth": self.date_of_birth,
            "age": self.age,
            "contactNumber": self.contact_number,
            "emailAddress": self.email_address,
            "address": self.address,
            "zipCode": self.zip_code,
            "tinNumber": self.tin_number,
            "instruments": self.instruments,
        }


@dataclass(frozen=True)
class StudentPayload:
    timestamp: str
    student_id: str
    full_name: str
    date_of_birth: str
    age: str
    emergency_contact: str
    email: str
    contact_number: str
    social_media_consent: str
    status: str
    referral_source: str
    referral_details: str

    def to_json(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "studentId": self.student_id,
            "fullName": self.full_name,
            "dateOfBirth": self.date_of_birth,
            "age": self.age,
            "emergencyContact": self.emergency_contact,
            "email": self.email,
            "contactNumber": self.contact_number,
            "socialMediaConsent": self.social_media_consent,
            "status": self.status,
            "referralSource": self.referral_source,
            "referralDetails": self.referral_details,
        }


@dataclass(frozen=True)
class AddTeacher:
    sheet_id: str
    teacher: TeacherPayload


@dataclass(frozen=True)
class UpdateTeacher:
    sheet_id: str
    teacher: TeacherPayload


@dataclass(frozen=True)
class AddStudent:
    sheet_id: str
    student: StudentPayload


@dataclass(frozen=True)
class UpdateStudent:
    sheet_id: str
    student: StudentPayload


SheetRequest = Union[AddTeacher, UpdateTeacher, AddStudent, UpdateStudent]


def request_action(request: SheetRequest) -> SheetAction:
    if isinstance(request, AddTeacher):
        return SheetAction.ADD_TEACHER
    if isinstance(request, UpdateTeacher):
        return SheetAction.UPDATE_TEACHER
    if isinstance(request, AddStudent):
        return SheetAction.ADD_STUDENT
    if isinstance(request, UpdateStudent):
        return SheetAction.UPDATE_STUDENT
    raise TypeError(f"Unsupported sheet request: {type(request).__name__}")


def build_envelope(request: SheetRequest) -> dict:
    """JSON body for the webhook: ``{action, sheetId, teacherData|data}``."""
    envelope = {"action": request_action(request).value, "sheetId": request.sheet_id}
    if isinstance(request, (AddTeacher, UpdateTeacher)):
        envelope["teacherData"] = request.teacher.to_json()
    else:
        envelope["data"] = request.student.to_json()
    return envelope


@dataclass(frozen=True)
class SheetAck:
    success: bool
    row_number: Optional[int] = None
    error: Optional[str] = None

    @property
    def is_not_found(self) -> bool:
        return not self.success and "not found" in (self.error or "").lower()

    @classmethod
    def from_json(cls, body: object) -> "SheetAck":
        if not isinstance(body, dict):
            return cls(success=False, error="Unexpected response from sheet webhook")
        row = body.get("rowNumber")
        try:
            row_number = int(row) if row is not None else None
        except (TypeError, ValueError):
            row_number = None
        error = body.get("error")
        return cls(success=bool(body.get("success")), row_number=row_number, error=str(error) if error else None)


@dataclass(frozen=True)
class PushResult:
    status: PushStatus
    reason: Optional[str] = None
    row_number: Optional[int] = None

    def to_json(self) -> dict:
        return {"status": self.status.value, "reason": self.reason, "rowNumber": self.row_number}
