"""Database models for post comments.

Cassandra table definitions for:
- comments_by_post: all comments of a post, oldest first (listing)
- comments_by_id: O(1) lookup and the not-idempotent delete
- comments_by_parent: direct replies of a comment (threading, cascade)

Architecture: Adjacency List pattern for threading
- parent_id references the parent comment (NULL for top-level comments)
- Records are immutable once written; delete removes all three rows
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4


# ==============================================================================
# CQL Table Definitions
# ==============================================================================

# Partition by post_id, clustering ascending so pages come out oldest first
COMMENTS_BY_POST_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.comments_by_post (
    post_id UUID,
    created_at TIMESTAMP,
    comment_id UUID,
    author_id UUID,
    parent_id UUID,
    text TEXT,
    PRIMARY KEY ((post_id), created_at, comment_id)
) WITH CLUSTERING ORDER BY (created_at ASC, comment_id ASC)
"""

# Written and deleted only through lightweight transactions
COMMENTS_BY_ID_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.comments_by_id (
    comment_id UUID PRIMARY KEY,
    post_id UUID,
    author_id UUID,
    parent_id UUID,
    text TEXT,
    created_at TIMESTAMP
)
"""

COMMENTS_BY_PARENT_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.comments_by_parent (
    parent_id UUID,
    created_at TIMESTAMP,
    comment_id UUID,
    post_id UUID,
    author_id UUID,
    text TEXT,
    PRIMARY KEY ((parent_id), created_at, comment_id)
) WITH CLUSTERING ORDER BY (created_at ASC, comment_id ASC)
"""

COMMENTS_TABLES_CQL = [
    COMMENTS_BY_POST_TABLE_CQL,
    COMMENTS_BY_ID_TABLE_CQL,
    COMMENTS_BY_PARENT_TABLE_CQL,
]


# ==============================================================================
# Entity Classes
# ==============================================================================


@dataclass(frozen=True)
class Comment:
    """Comment entity. Never mutated after creation."""

    comment_id: UUID
    post_id: UUID
    author_id: UUID
    text: str
    parent_id: UUID | None
    created_at: datetime

    @classmethod
    def from_row(cls, row: Any) -> "Comment":
        """Create Comment from any of the comment tables' rows."""
        return cls(
            comment_id=row.comment_id,
            post_id=row.post_id,
            author_id=row.author_id,
            text=row.text,
            parent_id=getattr(row, "parent_id", None),
            created_at=row.created_at,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "comment_id": str(self.comment_id),
            "post_id": str(self.post_id),
            "author_id": str(self.author_id),
            "text": self.text,
            "parent_id": str(self.parent_id) if self.parent_id else None,
            "created_at": self.created_at.isoformat(),
        }


@dataclass
class CommentPage:
    """One page of a post's comments plus pagination metadata."""

    items: list[Comment]
    total: int
    page: int
    limit: int

    @property
    def has_more(self) -> bool:
        """Whether a later page exists."""
        return self.page * self.limit < self.total


# ==============================================================================
# Factory Functions
# ==============================================================================


def create_comment(
    post_id: UUID,
    author_id: UUID,
    text: str,
    parent_id: UUID | None = None,
) -> Comment:
    """Create a new comment with fresh identity and timestamp."""
    return Comment(
        comment_id=uuid4(),
        post_id=post_id,
        author_id=author_id,
        text=text,
        parent_id=parent_id,
        created_at=datetime.now(UTC),
    )
