from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidTransitionError(ValidationError):
    """Raised when a lesson card operation is not allowed in its current state."""


class ConflictError(DomainError):
    """Raised when an email collides with an existing active record."""


class NotFoundError(DomainError):
    """Raised when the target entity does not exist."""


class ConnectivityError(DomainError):
    """Raised when the external sheet cannot be reached or answers with non-2xx."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
