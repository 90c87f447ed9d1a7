from __future__ import annotations

from datetime import date, datetime
from typing import Optional

_SHEET_TIMESTAMP_FORMATS = (
    "%d/%m/%Y %H:%M:%S",
    "%d/%m/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d",
)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def try_parse_iso_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_date(value.strip())
    except ValueError:
        return None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def format_sheet_timestamp(value: datetime) -> str:
    """DD/MM/YYYY HH:MM:SS, zero-padded, no comma."""
    return value.strftime("%d/%m/%Y %H:%M:%S")


def parse_sheet_timestamp(value: str) -> Optional[date]:
    """Date part of a sheet timestamp, or None when no known format matches.

    Day-first is tried before month-first, matching how the sheet is written.
    """
    v = (value or "").strip()
    if not v:
        return None
    for fmt in _SHEET_TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(v, fmt).date()
        except ValueError:
            continue
    return None


def compute_age(date_of_birth: date, *, today: Optional[date] = None) -> int:
    today = today or now_local().date()
    years = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        years -= 1
    return max(years, 0)
