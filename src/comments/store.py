# ruff: noqa: S608 - All CQL queries use keyspace from config, not user input
"""Cassandra-backed comment store.

Every comment is written to three tables (see models). Listing pages by
offset reads ``page * limit`` rows from the post partition and keeps the
tail, which is fine for the comment volumes a single post gets.
"""

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING
from uuid import UUID

import structlog

from .exceptions import CommentNotFoundError
from .models import Comment


if TYPE_CHECKING:
    from cassandra.cluster import Session

    from .protocols import CommentStore


logger = structlog.get_logger(__name__)


class CassandraCommentStore:
    """CommentStore implementation over Cassandra."""

    def __init__(self, session: "Session", keyspace: str):
        """Initialize with Cassandra session."""
        self.session = session
        self.keyspace = keyspace
        self._prepare_statements()

    def _prepare_statements(self) -> None:
        """Prepare CQL statements for efficient queries."""
        self._insert_by_post = self.session.prepare(f"""
            INSERT INTO {self.keyspace}.comments_by_post
            (post_id, created_at, comment_id, author_id, parent_id, text)
            VALUES (?, ?, ?, ?, ?, ?)
        """)

        self._insert_by_id = self.session.prepare(f"""
            INSERT INTO {self.keyspace}.comments_by_id
            (comment_id, post_id, author_id, parent_id, text, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            IF NOT EXISTS
        """)

        self._insert_by_parent = self.session.prepare(f"""
            INSERT INTO {self.keyspace}.comments_by_parent
            (parent_id, created_at, comment_id, post_id, author_id, text)
            VALUES (?, ?, ?, ?, ?, ?)
        """)

        self._get_by_id = self.session.prepare(f"""
            SELECT * FROM {self.keyspace}.comments_by_id
            WHERE comment_id = ?
        """)

        self._get_by_post = self.session.prepare(f"""
            SELECT * FROM {self.keyspace}.comments_by_post
            WHERE post_id = ?
            ORDER BY created_at ASC
            LIMIT ?
        """)

        self._count_by_post = self.session.prepare(f"""
            SELECT COUNT(*) FROM {self.keyspace}.comments_by_post
            WHERE post_id = ?
        """)

        self._get_replies = self.session.prepare(f"""
            SELECT * FROM {self.keyspace}.comments_by_parent
            WHERE parent_id = ?
            ORDER BY created_at ASC
        """)

        # IF EXISTS makes a second delete fail instead of silently succeeding
        self._delete_by_id = self.session.prepare(f"""
            DELETE FROM {self.keyspace}.comments_by_id
            WHERE comment_id = ?
            IF EXISTS
        """)

        self._delete_by_post = self.session.prepare(f"""
            DELETE FROM {self.keyspace}.comments_by_post
            WHERE post_id = ? AND created_at = ? AND comment_id = ?
        """)

        self._delete_by_parent = self.session.prepare(f"""
            DELETE FROM {self.keyspace}.comments_by_parent
            WHERE parent_id = ? AND created_at = ? AND comment_id = ?
        """)

    async def insert(self, comment: Comment) -> None:
        """Persist a new comment to all comment tables."""
        # Lookup table first: it is the source of truth for existence
        await self.session.aexecute(
            self._insert_by_id,
            [
                comment.comment_id,
                comment.post_id,
                comment.author_id,
                comment.parent_id,
                comment.text,
                comment.created_at,
            ],
        )

        await self.session.aexecute(
            self._insert_by_post,
            [
                comment.post_id,
                comment.created_at,
                comment.comment_id,
                comment.author_id,
                comment.parent_id,
                comment.text,
            ],
        )

        if comment.parent_id:
            await self.session.aexecute(
                self._insert_by_parent,
                [
                    comment.parent_id,
                    comment.created_at,
                    comment.comment_id,
                    comment.post_id,
                    comment.author_id,
                    comment.text,
                ],
            )

    async def find_by_id(self, comment_id: UUID) -> Comment:
        """Fetch a comment by ID.

        Raises:
            CommentNotFoundError: If the comment does not exist
        """
        result = await self.session.aexecute(self._get_by_id, [comment_id])
        row = result.one()
        if row is None:
            raise CommentNotFoundError
        return Comment.from_row(row)

    async def list_by_post(self, post_id: UUID, page: int, limit: int) -> list[Comment]:
        """Get one page of a post's comments, oldest first."""
        offset = (page - 1) * limit
        rows = await self.session.aexecute(self._get_by_post, [post_id, offset + limit])
        return [Comment.from_row(row) for row in list(rows)[offset:]]

    async def count_by_post(self, post_id: UUID) -> int:
        """Count all comments of a post."""
        result = await self.session.aexecute(self._count_by_post, [post_id])
        row = result.one()
        return row.count if row else 0

    async def list_replies(self, parent_id: UUID) -> list[Comment]:
        """Get direct replies to a comment, oldest first."""
        rows = await self.session.aexecute(self._get_replies, [parent_id])
        return [Comment.from_row(row) for row in rows]

    async def delete_by_id(self, comment_id: UUID) -> None:
        """Delete a comment from all comment tables.

        Raises:
            CommentNotFoundError: If the comment does not exist, including
                when a concurrent delete won the race
        """
        comment = await self.find_by_id(comment_id)

        result = await self.session.aexecute(self._delete_by_id, [comment_id])
        if not result.was_applied:
            raise CommentNotFoundError

        await self.session.aexecute(
            self._delete_by_post,
            [comment.post_id, comment.created_at, comment.comment_id],
        )

        if comment.parent_id:
            await self.session.aexecute(
                self._delete_by_parent,
                [comment.parent_id, comment.created_at, comment.comment_id],
            )

        logger.debug("comment_rows_deleted", comment_id=str(comment_id))


async def iter_comment_pages(
    store: "CommentStore",
    post_id: UUID,
    limit: int,
) -> AsyncIterator[list[Comment]]:
    """Lazily walk a post's comments page by page.

    Each call starts over from the first page, so the sequence can be
    restarted by simply iterating again.
    """
    page = 1
    while True:
        items = await store.list_by_post(post_id, page, limit)
        if not items:
            return
        yield items
        if len(items) < limit:
            return
        page += 1
