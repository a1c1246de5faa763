"""
Domain exceptions raised by services.

Routes let them propagate; the global handler in src.api.main turns each into
the standard ErrorResponse envelope using the exception's status_code.
"""
from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base class for business-rule violations."""

    status_code: int = 400
    error_type: str = "domain_error"

    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(DomainError):
    status_code = 404
    error_type = "not_found"


class PermissionDeniedError(DomainError):
    status_code = 403
    error_type = "permission_denied"


class ConflictError(DomainError):
    """Uniqueness violation (duplicate username, duplicate color/size, ...)."""
    status_code = 400
    error_type = "conflict"


class InvalidStateError(DomainError):
    """Operation not allowed in the record's current state."""
    status_code = 400
    error_type = "invalid_state"


class InsufficientInventoryError(DomainError):
    """Raised when stock cannot cover requirements; details lists every short line."""
    status_code = 400
    error_type = "insufficient_inventory"
