"""Sheet sync settings shared by every environment."""

import os


def _optional_float(name: str):
    value = os.getenv(name, "").strip()
    return float(value) if value else None


GOOGLE_SHEET_ID = os.getenv("GOOGLE_SHEET_ID", "")
SHEETS_WEBHOOK_URL = os.getenv("SHEETS_WEBHOOK_URL", "")
SHEETS_EXPORT_BASE_URL = os.getenv("SHEETS_EXPORT_BASE_URL", "https://docs.google.com/spreadsheets/d")

TEACHER_TAB = os.getenv("TEACHER_TAB", "TEACHERS")
ENROLLMENT_TAB = os.getenv("ENROLLMENT_TAB", "ENROLLMENT")
TEACHER_TAB_GID = int(os.getenv("TEACHER_TAB_GID", "1"))
ENROLLMENT_TAB_GID = int(os.getenv("ENROLLMENT_TAB_GID", "0"))

# Unset: no explicit timeout, the HTTP client default applies.
SHEETS_HTTP_TIMEOUT = _optional_float("SHEETS_HTTP_TIMEOUT")

MAX_LESSONS_PER_CARD = int(os.getenv("MAX_LESSONS_PER_CARD", "10"))
