"""Failure kinds and the exception raised for them at the HTTP boundary"""
import enum
from typing import Optional


class FailureKind(str, enum.Enum):
    """Expected failure categories with their HTTP status and default message."""

    VALIDATION_ERROR = "validation_error"
    INVALID_CREDENTIALS = "invalid_credentials"
    AUTHENTICATION_REQUIRED = "authentication_required"
    INVALID_OR_EXPIRED_TOKEN = "invalid_or_expired_token"
    ACCOUNT_INACTIVE = "account_inactive"
    INSUFFICIENT_PERMISSIONS = "insufficient_permissions"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]

    @property
    def default_message(self) -> str:
        return _DEFAULT_MESSAGES[self]


_STATUS_CODES = {
    FailureKind.VALIDATION_ERROR: 400,
    FailureKind.INVALID_CREDENTIALS: 401,
    FailureKind.AUTHENTICATION_REQUIRED: 401,
    FailureKind.INVALID_OR_EXPIRED_TOKEN: 401,
    FailureKind.ACCOUNT_INACTIVE: 401,
    FailureKind.INSUFFICIENT_PERMISSIONS: 403,
    FailureKind.NOT_FOUND: 404,
    FailureKind.CONFLICT: 409,
}

_DEFAULT_MESSAGES = {
    FailureKind.VALIDATION_ERROR: "Invalid request",
    FailureKind.INVALID_CREDENTIALS: "Invalid credentials",
    FailureKind.AUTHENTICATION_REQUIRED: "Authentication required",
    FailureKind.INVALID_OR_EXPIRED_TOKEN: "Invalid or expired token",
    FailureKind.ACCOUNT_INACTIVE: "Admin account is inactive",
    FailureKind.INSUFFICIENT_PERMISSIONS: "Insufficient permissions",
    FailureKind.NOT_FOUND: "Not found",
    FailureKind.CONFLICT: "Conflict",
}


class AppError(Exception):
    """Operation failure rendered as ``{"status": "error", "message": ...}``."""

    status = "error"

    def __init__(self, kind: FailureKind, message: Optional[str] = None):
        self.kind = kind
        self.message = message or kind.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code
