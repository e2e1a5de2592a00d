"""Capabilities the comment service consumes.

CommentService only talks to these protocols, so any store or post
backend (and the in-memory fakes used in tests) can be plugged in.
"""

from typing import Protocol
from uuid import UUID

from .models import Comment


class CommentStore(Protocol):
    """Durable storage of comment records."""

    async def insert(self, comment: Comment) -> None: ...

    async def find_by_id(self, comment_id: UUID) -> Comment:
        """Return the comment or raise CommentNotFoundError."""
        ...

    async def list_by_post(self, post_id: UUID, page: int, limit: int) -> list[Comment]:
        """Comments of a post, oldest first, 1-based page."""
        ...

    async def count_by_post(self, post_id: UUID) -> int: ...

    async def list_replies(self, parent_id: UUID) -> list[Comment]: ...

    async def delete_by_id(self, comment_id: UUID) -> None:
        """Remove the comment or raise CommentNotFoundError."""
        ...


class PostLookup(Protocol):
    """Read access to posts."""

    async def post_exists(self, post_id: UUID) -> bool: ...

    async def get_post_owner(self, post_id: UUID) -> UUID: ...


class PostCounter(Protocol):
    """Atomic mutation of a post's comments_count."""

    async def adjust_comment_count(self, post_id: UUID, delta: int) -> None: ...


class NotificationDispatcher(Protocol):
    """Best-effort notification of post owners."""

    async def notify_new_comment(
        self,
        post_owner_id: UUID,
        comment_id: UUID,
        post_id: UUID,
        actor_id: UUID,
    ) -> object: ...
