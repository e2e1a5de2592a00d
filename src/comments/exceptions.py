"""Comment errors."""

from uuid import UUID

from src.core.exceptions import NotFoundError


class CommentNotFoundError(NotFoundError):
    """Comment not found."""

    def __init__(self, message: str = "Comment not found"):
        super().__init__(message)


class DispatchFailure(Exception):
    """A new-comment notification could not be delivered.

    Raised inside the background dispatch and logged there; never reaches
    the caller of create_comment.
    """

    def __init__(self, comment_id: UUID, reason: str):
        self.comment_id = comment_id
        self.reason = reason
        super().__init__(f"Notification for comment {comment_id} failed: {reason}")
