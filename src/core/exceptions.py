"""Domain error taxonomy shared by services.

Services raise these; the HTTP layer maps ``code`` to a status code.
"""

from fastapi import HTTPException, status


class AppError(Exception):
    """Base application error."""

    def __init__(self, message: str, code: str = "app_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Malformed input (empty text, parent on another post, bad paging)."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, "validation_error")


class NotFoundError(AppError):
    """Referenced entity does not exist."""

    def __init__(self, message: str = "Not found"):
        super().__init__(message, "not_found")


class PostNotFoundError(NotFoundError):
    """Post not found."""

    def __init__(self, message: str = "Post not found"):
        super().__init__(message)


class ForbiddenError(AppError):
    """Operation not allowed for the requesting user."""

    def __init__(self, message: str = "Permission denied"):
        super().__init__(message, "forbidden")


class CounterConflictError(AppError):
    """Compare-and-set on a counter kept losing to concurrent writers."""

    def __init__(self, message: str = "Counter update conflict"):
        super().__init__(message, "counter_conflict")


STATUS_BY_CODE = {
    "validation_error": status.HTTP_400_BAD_REQUEST,
    "not_found": status.HTTP_404_NOT_FOUND,
    "forbidden": status.HTTP_403_FORBIDDEN,
    "counter_conflict": status.HTTP_409_CONFLICT,
}


def handle_app_error(error: AppError) -> HTTPException:
    """Convert a domain error to an HTTP exception.

    Args:
        error: Domain error raised by a service

    Returns:
        HTTPException with the mapped status code
    """
    status_code = STATUS_BY_CODE.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return HTTPException(status_code=status_code, detail=error.message)
