from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from datetime import date
from typing import List, Optional

from ..common.validators import require_non_empty
from ..sheets.connector import SheetConnector
from ..sheets.mapping import enrollment_row_to_candidate
from ..students.model import Student, StudentFields
from ..students.repository import StudentRepository
from .matching import STUDENT_MATCH_STRATEGIES, MatchStrategy, find_match

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowFailure:
    row_number: int
    reason: str


@dataclass
class SyncReport:
    total_rows: int = 0
    created: int = 0
    updated: int = 0
    failures: List[RowFailure] = field(default_factory=list)

    def to_json(self) -> dict:
        return {
            "totalRows": self.total_rows,
            "created": self.created,
            "updated": self.updated,
            "failures": [{"rowNumber": f.row_number, "reason": f.reason} for f in self.failures],
        }


def overlay(existing: Student, candidate: StudentFields) -> StudentFields:
    """Candidate values over the stored record.

    Blank candidate values keep what is stored; an assigned code and enrollment
    date are kept as they are.
    """
    merged = {}
    for f in fields(StudentFields):
        new = getattr(candidate, f.name)
        old = getattr(existing, f.name)
        if f.name in ("student_code", "enrollment_date"):
            merged[f.name] = old or new
        elif isinstance(new, str) and not new.strip():
            merged[f.name] = old
        else:
            merged[f.name] = new
    return StudentFields(**merged)


class ReconciliationService:
    """Pull direction: ENROLLMENT tab rows into the student store.

    Row by row and best-effort. Never pushes back to the sheet.
    """

    def __init__(
        self,
        students: StudentRepository,
        *,
        connector: SheetConnector,
        default_sheet_id: str = "",
        strategies: tuple[MatchStrategy, ...] = tuple(STUDENT_MATCH_STRATEGIES),
    ):
        self._students = students
        self._connector = connector
        self._default_sheet_id = default_sheet_id
        self._strategies = strategies

    def pull_students(self, sheet_id: Optional[str] = None, *, today: Optional[date] = None) -> SyncReport:
        rows = self._connector.read_enrollment_rows(sheet_id or self._default_sheet_id)
        working: List[Student] = list(self._students.find_many())
        report = SyncReport(total_rows=len(rows))

        for row in rows:
            try:
                candidate = enrollment_row_to_candidate(row, today=today)
                require_non_empty(candidate.first_name, "Full name")

                match = find_match(candidate, working, self._strategies)
                if match:
                    updated = self._students.update(match.student.student_id, overlay(match.student, candidate))
                    if not updated:
                        raise LookupError(f"Student {match.student.student_id} disappeared during sync")
                    working[working.index(match.student)] = updated
                    report.updated += 1
                else:
                    working.append(self._students.create(candidate))
                    report.created += 1
            except Exception as exc:
                logger.warning("Sync row %s skipped: %s", row.row_number, exc)
                report.failures.append(RowFailure(row_number=row.row_number, reason=str(exc)))

        logger.info(
            "Student pull finished: %s rows, %s created, %s updated, %s failed",
            report.total_rows,
            report.created,
            report.updated,
            len(report.failures),
        )
        return report
