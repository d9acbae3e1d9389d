"""Base exception types for domain failures.

Domain code raises these with a human-readable message; the global exception
handler in ``libs.common.error_handler`` turns them into JSON responses.
"""

from typing import Optional


class GymError(Exception):
    """Base exception for business-rule failures."""

    status_code: int = 400
    code: str = "error"
    default_message: str = "request failed"

    def __init__(self, message: Optional[str] = None, *, status_code: int = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(GymError):
    status_code = 404
    code = "not_found"
    default_message = "not found"


class ConflictError(GymError):
    status_code = 409
    code = "conflict"
    default_message = "conflict"


class PermissionDenied(GymError):
    status_code = 403
    code = "forbidden"
    default_message = "permission denied"
