from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import StudentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, str_or_empty
from .model import Student, StudentFields
from .repository import StudentRepository

_COLUMNS = """
    student_id, first_name, last_name, email, phone, date_of_birth, age, address,
    parent_name, parent_phone, enrollment_date, student_code, status,
    social_media_consent, referral_source, referral_details, created_at, updated_at
"""


def _row_to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        first_name=r["first_name"],
        last_name=str_or_empty(r.get("last_name")),
        email=str_or_empty(r.get("email")),
        phone=str_or_empty(r.get("phone")),
        date_of_birth=str_or_empty(r.get("date_of_birth")),
        age=str_or_empty(r.get("age")),
        address=str_or_empty(r.get("address")),
        parent_name=str_or_empty(r.get("parent_name")),
        parent_phone=str_or_empty(r.get("parent_phone")),
        enrollment_date=r.get("enrollment_date"),
        student_code=str_or_empty(r.get("student_code")),
        status=StudentStatus(r.get("status") or StudentStatus.ACTIVE.value),
        social_media_consent=str_or_empty(r.get("social_media_consent")),
        referral_source=str_or_empty(r.get("referral_source")),
        referral_details=str_or_empty(r.get("referral_details")),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _values(fields: StudentFields) -> tuple:
    return (
        fields.first_name,
        fields.last_name,
        fields.email,
        fields.phone,
        fields.date_of_birth,
        fields.age,
        fields.address,
        fields.parent_name,
        fields.parent_phone,
        fields.enrollment_date,
        fields.student_code,
        fields.status.value,
        fields.social_media_consent,
        fields.referral_source,
        fields.referral_details,
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select_one(self, cur, student_id: int) -> Optional[Student]:
        cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (int(student_id),))
        r = fetchone(cur)
        return _row_to_student(r) if r else None

    def find_many(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY created_at DESC, student_id DESC")
            return [_row_to_student(r) for r in fetchall(cur)]

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._select_one(cur, student_id)

    def find_by_email(self, email: str) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM students WHERE email <> '' AND LOWER(email)=LOWER(%s)",
                (email.strip(),),
            )
            return [_row_to_student(r) for r in fetchall(cur)]

    def create(self, fields: StudentFields) -> Student:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(
                    first_name, last_name, email, phone, date_of_birth, age, address,
                    parent_name, parent_phone, enrollment_date, student_code, status,
                    social_media_consent, referral_source, referral_details
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _values(fields),
            )
            return self._select_one(cur, int(cur.lastrowid))

    def update(self, student_id: int, fields: StudentFields) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            if not self._select_one(cur, student_id):
                return None
            cur.execute(
                """
                UPDATE students
                SET first_name=%s, last_name=%s, email=%s, phone=%s, date_of_birth=%s, age=%s,
                    address=%s, parent_name=%s, parent_phone=%s, enrollment_date=%s,
                    student_code=%s, status=%s, social_media_consent=%s,
                    referral_source=%s, referral_details=%s
                WHERE student_id=%s
                """,
                _values(fields) + (int(student_id),),
            )
            return self._select_one(cur, student_id)

    def set_student_code(self, student_id: int, student_code: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE students SET student_code=%s WHERE student_id=%s",
                (student_code, int(student_id)),
            )
            return self._select_one(cur, student_id)

    def delete(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE student_id=%s", (int(student_id),))
            return cur.rowcount > 0
