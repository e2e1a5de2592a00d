# ruff: noqa: S608 - All CQL queries use keyspace from config, not user input
"""Post service layer.

Business logic for:
- Post creation and lookup (existence, owner)
- Atomic adjustment of the denormalized comments_count
"""

from typing import TYPE_CHECKING
from uuid import UUID

import structlog

from src.core.exceptions import CounterConflictError, PostNotFoundError

from .models import Post, create_post


if TYPE_CHECKING:
    from cassandra.cluster import Session


logger = structlog.get_logger(__name__)


class PostService:
    """Service for posts and their comment counters."""

    def __init__(self, session: "Session", keyspace: str, max_retries: int = 10):
        """Initialize with Cassandra session.

        Args:
            session: Cassandra session with aexecute()
            keyspace: Keyspace holding the posts table
            max_retries: Compare-and-set attempts before giving up
        """
        self.session = session
        self.keyspace = keyspace
        self.max_retries = max_retries
        self._prepare_statements()

    def _prepare_statements(self) -> None:
        """Prepare CQL statements for efficient queries."""
        self._insert_post = self.session.prepare(f"""
            INSERT INTO {self.keyspace}.posts
            (post_id, author_id, caption, comments_count, created_at)
            VALUES (?, ?, ?, ?, ?)
        """)

        self._get_post = self.session.prepare(f"""
            SELECT * FROM {self.keyspace}.posts WHERE post_id = ?
        """)

        self._get_owner = self.session.prepare(f"""
            SELECT author_id FROM {self.keyspace}.posts WHERE post_id = ?
        """)

        self._get_comments_count = self.session.prepare(f"""
            SELECT comments_count FROM {self.keyspace}.posts WHERE post_id = ?
        """)

        # Lightweight transaction: only applies if nobody changed it meanwhile
        self._cas_comments_count = self.session.prepare(f"""
            UPDATE {self.keyspace}.posts
            SET comments_count = ?
            WHERE post_id = ?
            IF comments_count = ?
        """)

    # ==========================================================================
    # Posts
    # ==========================================================================

    async def create_post(self, author_id: UUID, caption: str) -> Post:
        """Create a new post owned by ``author_id``."""
        post = create_post(author_id=author_id, caption=caption)

        await self.session.aexecute(
            self._insert_post,
            [
                post.post_id,
                post.author_id,
                post.caption,
                post.comments_count,
                post.created_at,
            ],
        )

        logger.info("post_created", post_id=str(post.post_id))
        return post

    async def get_post(self, post_id: UUID) -> Post:
        """Fetch a post.

        Raises:
            PostNotFoundError: If the post does not exist
        """
        result = await self.session.aexecute(self._get_post, [post_id])
        row = result.one()
        if row is None:
            raise PostNotFoundError
        return Post.from_row(row)

    async def post_exists(self, post_id: UUID) -> bool:
        """Check whether a post exists."""
        result = await self.session.aexecute(self._get_owner, [post_id])
        return result.one() is not None

    async def get_post_owner(self, post_id: UUID) -> UUID:
        """Return the author of a post.

        Raises:
            PostNotFoundError: If the post does not exist
        """
        result = await self.session.aexecute(self._get_owner, [post_id])
        row = result.one()
        if row is None:
            raise PostNotFoundError
        return row.author_id

    # ==========================================================================
    # Comment counter
    # ==========================================================================

    async def adjust_comment_count(self, post_id: UUID, delta: int) -> None:
        """Atomically add ``delta`` to a post's comments_count, floored at 0.

        Uses a compare-and-set loop over a lightweight transaction so
        concurrent comment creation/deletion never loses an update.

        Raises:
            PostNotFoundError: If the post does not exist
            CounterConflictError: If every attempt lost the race
        """
        for attempt in range(1, self.max_retries + 1):
            result = await self.session.aexecute(self._get_comments_count, [post_id])
            row = result.one()
            if row is None:
                raise PostNotFoundError

            current = row.comments_count or 0
            new_count = max(0, current + delta)
            if new_count == current:
                # Decrement of an already-zero counter
                return

            applied = await self.session.aexecute(
                self._cas_comments_count,
                [new_count, post_id, row.comments_count],
            )
            if applied.was_applied:
                logger.debug(
                    "post_comment_count_adjusted",
                    post_id=str(post_id),
                    delta=delta,
                    comments_count=new_count,
                    attempt=attempt,
                )
                return

            logger.debug(
                "post_comment_count_conflict",
                post_id=str(post_id),
                attempt=attempt,
            )

        logger.warning(
            "post_comment_count_retries_exhausted",
            post_id=str(post_id),
            delta=delta,
            max_retries=self.max_retries,
        )
        raise CounterConflictError

    async def increment_comment_count(self, post_id: UUID) -> None:
        """Add one comment to the post's counter."""
        await self.adjust_comment_count(post_id, 1)

    async def decrement_comment_count(self, post_id: UUID) -> None:
        """Remove one comment from the post's counter (never below zero)."""
        await self.adjust_comment_count(post_id, -1)
