from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, str_or_empty
from .model import Teacher, TeacherFields
from .repository import TeacherRepository

_COLUMNS = """
    teacher_id, first_name, last_name, call_name, date_of_birth, age, email, phone,
    address, zip_code, tin_number, instruments, created_at, updated_at
"""


def _row_to_teacher(r: dict) -> Teacher:
    return Teacher(
        teacher_id=int(r["teacher_id"]),
        first_name=r["first_name"],
        last_name=str_or_empty(r.get("last_name")),
        email=str_or_empty(r.get("email")),
        call_name=str_or_empty(r.get("call_name")),
        date_of_birth=str_or_empty(r.get("date_of_birth")),
        age=str_or_empty(r.get("age")),
        phone=str_or_empty(r.get("phone")),
        address=str_or_empty(r.get("address")),
        zip_code=str_or_empty(r.get("zip_code")),
        tin_number=str_or_empty(r.get("tin_number")),
        instruments=str_or_empty(r.get("instruments")),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _values(fields: TeacherFields) -> tuple:
    return (
        fields.first_name,
        fields.last_name,
        fields.call_name,
        fields.date_of_birth,
        fields.age,
        fields.email,
        fields.phone,
        fields.address,
        fields.zip_code,
        fields.tin_number,
        fields.instruments,
    )


class MySQLTeacherRepository(TeacherRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_many(self) -> Sequence[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM teachers ORDER BY created_at DESC, teacher_id DESC")
            return [_row_to_teacher(r) for r in fetchall(cur)]

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM teachers WHERE teacher_id=%s", (int(teacher_id),))
            r = fetchone(cur)
            return _row_to_teacher(r) if r else None

    def find_by_email(self, email: str) -> Sequence[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM teachers WHERE LOWER(email)=LOWER(%s)",
                (email.strip(),),
            )
            return [_row_to_teacher(r) for r in fetchall(cur)]

    def create(self, fields: TeacherFields) -> Teacher:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO teachers(
                    first_name, last_name, call_name, date_of_birth, age, email, phone,
                    address, zip_code, tin_number, instruments
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _values(fields),
            )
            teacher_id = int(cur.lastrowid)
            cur.execute(f"SELECT {_COLUMNS} FROM teachers WHERE teacher_id=%s", (teacher_id,))
            return _row_to_teacher(fetchone(cur))

    def update(self, teacher_id: int, fields: TeacherFields) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT teacher_id FROM teachers WHERE teacher_id=%s", (int(teacher_id),))
            if not fetchone(cur):
                return None

            cur.execute(
                """
                UPDATE teachers
                SET first_name=%s, last_name=%s, call_name=%s, date_of_birth=%s, age=%s, email=%s,
                    phone=%s, address=%s, zip_code=%s, tin_number=%s, instruments=%s
                WHERE teacher_id=%s
                """,
                _values(fields) + (int(teacher_id),),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM teachers WHERE teacher_id=%s", (int(teacher_id),))
            return _row_to_teacher(fetchone(cur))

    def delete(self, teacher_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM teachers WHERE teacher_id=%s", (int(teacher_id),))
            return cur.rowcount > 0
