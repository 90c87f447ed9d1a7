from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import StudentStatus


@dataclass(frozen=True)
class StudentFields:
    """Writable student attributes, shared by form submissions and sheet rows."""

    first_name: str
    last_name: str
    email: str = ""
    phone: str = ""
    date_of_birth: str = ""
    age: str = ""
    address: str = ""
    parent_name: str = ""
    parent_phone: str = ""
    enrollment_date: Optional[date] = None
    student_code: str = ""
    status: StudentStatus = StudentStatus.ACTIVE
    social_media_consent: str = ""
    referral_source: str = ""
    referral_details: str = ""


@dataclass(frozen=True)
class Student:
    student_id: int
    first_name: str
    last_name: str
    email: str = ""
    phone: str = ""
    date_of_birth: str = ""
    age: str = ""
    address: str = ""
    parent_name: str = ""
    parent_phone: str = ""
    enrollment_date: Optional[date] = None
    student_code: str = ""
    status: StudentStatus = StudentStatus.ACTIVE
    social_media_consent: str = ""
    referral_source: str = ""
    referral_details: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == StudentStatus.ACTIVE


def normalize_referral_details(source: str, *, platform: str = "", details: str = "") -> str:
    src = (source or "").strip()
    platform = (platform or "").strip()
    details = (details or "").strip()

    if src == "Social Media":
        return platform or details or "Social Media"
    if src in ("Referred", "Friend Referred"):
        return details or "Referred"
    if src in ("Walk-in", "Walked By"):
        return "Walk-in"
    return details
