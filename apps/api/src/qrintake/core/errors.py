"""
Service Errors

Shared exception hierarchy raised by the service layer. Each error carries
a machine-readable code and the HTTP status the routers translate it to.
"""

from fastapi import HTTPException


class IntakeServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class InvalidInputError(IntakeServiceError):
    """Raised when request data fails validation."""

    def __init__(self, message: str, error_code: str = "VALIDATION_ERROR"):
        super().__init__(message=message, error_code=error_code, status_code=400)


class NotFoundError(IntakeServiceError):
    """Raised when a code or record does not exist (or is not visible to the caller)."""

    def __init__(self, message: str, error_code: str = "NOT_FOUND"):
        super().__init__(message=message, error_code=error_code, status_code=404)


class ConflictError(IntakeServiceError):
    """Raised on uniqueness violations and invalid state changes."""

    def __init__(self, message: str, error_code: str = "CONFLICT"):
        super().__init__(message=message, error_code=error_code, status_code=409)


class ForbiddenError(IntakeServiceError):
    """Raised when the caller's identity does not match the target owner."""

    def __init__(self, message: str, error_code: str = "FORBIDDEN"):
        super().__init__(message=message, error_code=error_code, status_code=403)


class GeofenceRejectedError(IntakeServiceError):
    """Raised when a submission fails the server-side geofence check."""

    def __init__(self, message: str, reason: str):
        self.reason = reason
        super().__init__(message=message, error_code="GEOFENCE_REJECTED", status_code=403)


class InfrastructureError(IntakeServiceError):
    """Raised when storage or an external dependency fails."""

    def __init__(self, message: str = "An unexpected error occurred. Please try again later."):
        super().__init__(message=message, error_code="INTERNAL_ERROR", status_code=500)


def http_exception_from(e: IntakeServiceError) -> HTTPException:
    """Convert a service error to the structured HTTPException routers raise."""
    return HTTPException(
        status_code=e.status_code,
        detail={
            "error": e.error_code,
            "message": e.message,
        },
    )
