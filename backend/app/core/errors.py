"""Domain errors.

Services raise these when a business rule is violated. The HTTP layer turns
each one into ``{"success": false, "message": ...}`` with the class status.
"""


class AppError(Exception):
    status_code = 500
    message = "Server Error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationFailed(AppError):
    status_code = 400
    message = "Validation failed"


class AuthenticationRequired(AppError):
    """Any failure to resolve a caller; the reason is never sent to the client."""

    status_code = 401
    message = "Authentication required"


class PermissionDenied(AppError):
    status_code = 403
    message = "You do not have permission to perform this action"


class NotFound(AppError):
    """Covers both a missing record and one outside the caller's scope."""

    status_code = 404
    message = "Not found"


class InsufficientStock(AppError):
    status_code = 409
    message = "Insufficient stock"


class InvalidStatusTransition(AppError):
    status_code = 409
    message = "Invalid status transition"
