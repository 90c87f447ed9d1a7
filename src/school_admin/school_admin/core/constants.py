"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STUDENT_CODE_PREFIX = "DMS-"
STUDENT_CODE_DIGITS = 5

DEFAULT_MAX_LESSONS = 10

TEACHER_TAB = "TEACHERS"
ENROLLMENT_TAB = "ENROLLMENT"
TEACHER_TAB_GID = 1
ENROLLMENT_TAB_GID = 0

DEFAULT_SHEETS_EXPORT_BASE_URL = "https://docs.google.com/spreadsheets/d"

DEFAULT_AUTO_SYNC_MINUTES = 5

SCHEDULE_RETENTION_DAYS = 30
COMPLETED_SCHEDULE_RETENTION_DAYS = 7

INACTIVE_SHEET_STATUSES = frozenset({"inactive", "suspended", "withdrawn"})
