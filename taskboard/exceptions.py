"""
Error taxonomy for the Taskboard API.

Services raise these typed errors; the handlers registered in ``main.create_app``
turn them into ``{"error": <message>}`` responses with the matching status code.
"""

from fastapi import status


class TaskboardError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TaskboardError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ConflictError(ValidationError):
    """Duplicate resource. Reported as 400 rather than 409."""

    default_message = "Resource already exists"


class AuthenticationError(TaskboardError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication token is missing or invalid."


class NotFoundError(TaskboardError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not Found"


class InternalError(TaskboardError):
    pass
