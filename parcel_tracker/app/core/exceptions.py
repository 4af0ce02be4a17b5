"""
Custom exceptions for consistent error reporting.

Provides standardized error codes so callers can branch on the kind of
failure: a missing parcel, a mutation the parcel's state forbids, or an
unknown status token. Storage errors from SQLAlchemy are not wrapped.
"""

from typing import Any, Dict


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, error_code: str, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)


class ParcelNotFoundError(AppException):
    """Raised when no parcel row matches the given number."""

    def __init__(self, number: int):
        self.number = number
        super().__init__(
            message=f"Parcel with number {number} not found",
            error_code="ERR_NOT_FOUND_001",
            details={"resource": "parcel", "number": number}
        )


class ParcelStateError(AppException):
    """Raised when a guarded mutation is attempted on a parcel that left 'registered'."""

    def __init__(self, number: int, status: str, action: str):
        self.number = number
        self.status = status
        self.action = action
        super().__init__(
            message=f"Cannot {action} parcel {number} in status '{status}'",
            error_code="ERR_STATE_001",
            details={"number": number, "status": status, "action": action}
        )


class InvalidParcelStatusError(AppException, ValueError):
    """Raised for a status value outside the parcel status vocabulary."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            message=f"Unknown parcel status: {value!r}",
            error_code="ERR_VALIDATION_001",
            details={"status": value}
        )
