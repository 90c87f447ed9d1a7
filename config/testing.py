import os

from ._sheets import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_admin_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

GOOGLE_SHEET_ID = ""
SHEETS_WEBHOOK_URL = ""

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
LOG_FORMAT = ""
LOG_FILE = ""
