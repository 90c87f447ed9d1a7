from __future__ import annotations

import logging
import re
from typing import Iterable, Optional

from ..core.constants import STUDENT_CODE_DIGITS, STUDENT_CODE_PREFIX
from ..core.exceptions import ConnectivityError
from ..sheets.connector import SheetConnector
from .repository import StudentRepository

logger = logging.getLogger(__name__)

_CODE_RE = re.compile(rf"^{re.escape(STUDENT_CODE_PREFIX)}(\d+)$")


def code_number(code: str) -> Optional[int]:
    m = _CODE_RE.match((code or "").strip())
    return int(m.group(1)) if m else None


def format_student_code(number: int) -> str:
    return f"{STUDENT_CODE_PREFIX}{number:0{STUDENT_CODE_DIGITS}d}"


def _max_number(codes: Iterable[str]) -> int:
    numbers = [n for n in (code_number(c) for c in codes) if n is not None]
    return max(numbers, default=0)


class StudentCodeSequencer:
    """Next DMS-##### code from the union of sheet and store codes.

    The sheet keeps codes of students deleted locally, so codes are never reused.
    """

    def __init__(self, students: StudentRepository, *, connector: SheetConnector):
        self._students = students
        self._connector = connector

    def _sheet_max(self, sheet_id: str) -> int:
        if not sheet_id:
            return 0
        try:
            rows = self._connector.read_enrollment_rows(sheet_id)
        except ConnectivityError as exc:
            logger.warning("Enrollment tab unavailable for code sequencing, using store only: %s", exc)
            return 0
        return _max_number(r.student_code for r in rows)

    def next_student_code(self, sheet_id: str = "") -> str:
        store_max = _max_number(s.student_code for s in self._students.find_many())
        return format_student_code(max(self._sheet_max(sheet_id), store_max) + 1)
