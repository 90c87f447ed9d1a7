"""Ordered match strategies used to pair a sheet candidate with a stored student.

Precedence is the order of ``STUDENT_MATCH_STRATEGIES``; the first hit wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

from ..students.model import Student, StudentFields

MatchPredicate = Callable[[StudentFields, Student], bool]


@dataclass(frozen=True)
class MatchStrategy:
    name: str
    predicate: MatchPredicate


@dataclass(frozen=True)
class Match:
    strategy: str
    student: Student


def _norm(value: str) -> str:
    return (value or "").strip()


def same_email(candidate: StudentFields, student: Student) -> bool:
    email = _norm(candidate.email).lower()
    return bool(email) and email == _norm(student.email).lower()


def same_student_code(candidate: StudentFields, student: Student) -> bool:
    code = _norm(candidate.student_code)
    return bool(code) and code == _norm(student.student_code)


def same_full_name(candidate: StudentFields, student: Student) -> bool:
    first, last = _norm(candidate.first_name), _norm(candidate.last_name)
    if not first:
        return False
    return first == _norm(student.first_name) and last == _norm(student.last_name)


STUDENT_MATCH_STRATEGIES: Sequence[MatchStrategy] = (
    MatchStrategy("email", same_email),
    MatchStrategy("student_code", same_student_code),
    MatchStrategy("full_name", same_full_name),
)


def find_match(
    candidate: StudentFields,
    students: Iterable[Student],
    strategies: Sequence[MatchStrategy] = STUDENT_MATCH_STRATEGIES,
) -> Optional[Match]:
    pool = list(students)
    for strategy in strategies:
        for student in pool:
            if strategy.predicate(candidate, student):
                return Match(strategy=strategy.name, student=student)
    return None
