"""Comment service layer.

Business logic for:
- Comment creation with threading (replies on the same post)
- Paginated listing, oldest first
- Author-only deletion, cascading to replies
- Keeping the post's comments_count in step with create/delete
- Best-effort notification of the post owner
"""

import asyncio
from collections.abc import AsyncIterator
from uuid import UUID

import structlog

from src.core.exceptions import ForbiddenError, PostNotFoundError, ValidationError

from .exceptions import CommentNotFoundError, DispatchFailure
from .models import Comment, CommentPage, create_comment
from .protocols import CommentStore, NotificationDispatcher, PostCounter, PostLookup


logger = structlog.get_logger(__name__)


class CommentService:
    """Orchestrates the comment store, post counter and notifier."""

    def __init__(
        self,
        store: CommentStore,
        posts: PostLookup,
        counter: PostCounter,
        notifier: NotificationDispatcher | None = None,
        max_length: int = 2000,
        max_page_limit: int = 100,
        max_offset: int = 10_000,
        notification_timeout: float = 5.0,
    ):
        """Initialize with injected collaborators.

        Args:
            store: Comment persistence
            posts: Post existence and owner lookup
            counter: Atomic comments_count adjustment
            notifier: Post owner notifications (None disables them)
            max_length: Maximum comment text length
            max_page_limit: Largest accepted page size
            max_offset: Largest accepted page * limit
            notification_timeout: Seconds a dispatch may take before it is cancelled
        """
        self.store = store
        self.posts = posts
        self.counter = counter
        self.notifier = notifier
        self.max_length = max_length
        self.max_page_limit = max_page_limit
        self.max_offset = max_offset
        self.notification_timeout = notification_timeout
        self._pending: set[asyncio.Task] = set()

    # ==========================================================================
    # Create
    # ==========================================================================

    async def create_comment(
        self,
        post_id: UUID,
        author_id: UUID,
        text: str,
        parent_id: UUID | None = None,
    ) -> Comment:
        """Create a comment on a post.

        The counter increment is attempted exactly once after a successful
        insert. The notification is scheduled in the background and its
        outcome never affects the returned comment.

        Raises:
            ValidationError: Empty or too long text, or a bad parent
            PostNotFoundError: Post does not exist
        """
        self._validate_text(text)

        if not await self.posts.post_exists(post_id):
            raise PostNotFoundError

        if parent_id is not None:
            await self._validate_parent(post_id, parent_id)

        comment = create_comment(
            post_id=post_id,
            author_id=author_id,
            text=text,
            parent_id=parent_id,
        )
        await self.store.insert(comment)

        # Not rolled back on failure: an orphaned comment is reconciled later
        await self.counter.adjust_comment_count(post_id, 1)

        logger.info(
            "comment_created",
            comment_id=str(comment.comment_id),
            post_id=str(post_id),
            author_id=str(author_id),
            is_reply=parent_id is not None,
        )

        self._schedule_notification(comment)
        return comment

    def _validate_text(self, text: str) -> None:
        if not text or not text.strip():
            raise ValidationError("Comment text cannot be empty")
        if len(text) > self.max_length:
            raise ValidationError(
                f"Comment text exceeds {self.max_length} characters"
            )

    async def _validate_parent(self, post_id: UUID, parent_id: UUID) -> None:
        try:
            parent = await self.store.find_by_id(parent_id)
        except CommentNotFoundError as e:
            raise ValidationError("Parent comment not found") from e

        if parent.post_id != post_id:
            raise ValidationError("Parent comment belongs to a different post")

    # ==========================================================================
    # Read
    # ==========================================================================

    async def list_comments(self, post_id: UUID, page: int, limit: int) -> CommentPage:
        """Get one page of a post's comments with the total count.

        Raises:
            ValidationError: page < 1, limit outside 1..max_page_limit, or
                page * limit beyond max_offset
        """
        if page < 1:
            raise ValidationError("Page must be at least 1")
        if limit < 1 or limit > self.max_page_limit:
            raise ValidationError(f"Limit must be between 1 and {self.max_page_limit}")
        if page * limit > self.max_offset:
            raise ValidationError(
                f"Page out of range: page * limit must not exceed {self.max_offset}"
            )

        items = await self.store.list_by_post(post_id, page, limit)
        total = await self.store.count_by_post(post_id)
        return CommentPage(items=items, total=total, page=page, limit=limit)

    async def get_comment(self, comment_id: UUID) -> Comment:
        """Get a single comment."""
        return await self.store.find_by_id(comment_id)

    async def get_replies(self, comment_id: UUID) -> list[Comment]:
        """Get direct replies to an existing comment."""
        await self.store.find_by_id(comment_id)
        return await self.store.list_replies(comment_id)

    # ==========================================================================
    # Delete
    # ==========================================================================

    async def delete_comment(self, comment_id: UUID, requesting_user_id: UUID) -> dict:
        """Delete a comment and all of its replies.

        Only the author may delete. The post counter is decremented by the
        number of comments actually removed, also when the cascade is
        interrupted by a store error.

        Raises:
            CommentNotFoundError: Comment does not exist (or is already deleted)
            ForbiddenError: Requester is not the author
        """
        comment = await self.store.find_by_id(comment_id)

        if comment.author_id != requesting_user_id:
            logger.warning(
                "comment_delete_forbidden",
                comment_id=str(comment_id),
                requesting_user_id=str(requesting_user_id),
            )
            raise ForbiddenError("Only the author can delete this comment")

        await self.store.delete_by_id(comment_id)
        removed = 1
        try:
            async for _ in self._delete_replies(comment_id):
                removed += 1
        except Exception:
            logger.warning(
                "comment_cascade_interrupted",
                comment_id=str(comment_id),
                removed=removed,
            )
            raise
        finally:
            await self.counter.adjust_comment_count(comment.post_id, -removed)

        logger.info(
            "comment_deleted",
            comment_id=str(comment_id),
            post_id=str(comment.post_id),
            removed=removed,
        )
        return {"deleted": True}

    async def _delete_replies(self, root_id: UUID) -> AsyncIterator[UUID]:
        """Remove the reply subtree under root_id, yielding each removed id.

        Walks depth-first with an explicit stack so thread depth is unbounded.
        """
        stack = [root_id]
        while stack:
            parent_id = stack.pop()
            for reply in await self.store.list_replies(parent_id):
                try:
                    await self.store.delete_by_id(reply.comment_id)
                except CommentNotFoundError:
                    # Deleted concurrently; its own delete already adjusted the counter
                    continue
                stack.append(reply.comment_id)
                yield reply.comment_id

    # ==========================================================================
    # Notifications
    # ==========================================================================

    def _schedule_notification(self, comment: Comment) -> None:
        if self.notifier is None:
            return
        task = asyncio.create_task(self._dispatch_notification(comment))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _dispatch_notification(self, comment: Comment) -> None:
        try:
            await self._deliver_notification(comment)
        except DispatchFailure as failure:
            logger.warning(
                "comment_notification_failed",
                comment_id=str(failure.comment_id),
                reason=failure.reason,
                error_type=type(failure.__cause__).__name__,
            )

    async def _deliver_notification(self, comment: Comment) -> None:
        """Notify the post owner within the timeout.

        Raises:
            DispatchFailure: Lookup or delivery failed or timed out
        """
        try:
            await asyncio.wait_for(self._notify_owner(comment), self.notification_timeout)
        except TimeoutError as e:
            raise DispatchFailure(comment.comment_id, "timed out") from e
        except Exception as e:
            raise DispatchFailure(comment.comment_id, str(e)) from e

    async def _notify_owner(self, comment: Comment) -> None:
        owner_id = await self.posts.get_post_owner(comment.post_id)
        if owner_id == comment.author_id:
            return
        await self.notifier.notify_new_comment(
            post_owner_id=owner_id,
            comment_id=comment.comment_id,
            post_id=comment.post_id,
            actor_id=comment.author_id,
        )

    async def drain(self) -> None:
        """Wait for in-flight notification dispatches to finish."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
