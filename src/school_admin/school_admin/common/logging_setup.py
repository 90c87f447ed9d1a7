"""Logging setup for the application.

Handlers are attached to the package logger so every module logger
(``logging.getLogger(__name__)``) inherits them.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "src.school_admin.school_admin"
DEFAULT_LOG_FORMAT = "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"


def mask_email(email: Optional[str]) -> str:
    """Mask an email address for logs, e.g. "u***@example.com"."""
    if not email or "@" not in email:
        return "***"
    local, domain = email.split("@", 1)
    masked_local = local[0] + "***" if local else "***"
    return f"{masked_local}@{domain}"


def configure_logging(
    *,
    level: str = "INFO",
    fmt: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    logger = logging.getLogger(PACKAGE_LOGGER)
    log_level = getattr(logging, str(level).upper(), logging.INFO)
    formatter = logging.Formatter(fmt or DEFAULT_LOG_FORMAT)

    # Prevent duplicate log entries when the app factory runs more than once.
    logger.handlers.clear()
    logger.setLevel(log_level)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(log_level)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
