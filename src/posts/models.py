"""Database models for posts.

Only the parts of a post the comment system reads or mutates live here:
owner lookup and the denormalized comments_count.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4


# comments_count is a plain INT (not COUNTER) so it can be updated with
# a lightweight transaction and clamped at zero.
POST_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.posts (
    post_id UUID PRIMARY KEY,
    author_id UUID,
    caption TEXT,
    comments_count INT,
    created_at TIMESTAMP
)
"""

POSTS_TABLES_CQL = [
    POST_TABLE_CQL,
]


@dataclass
class Post:
    """Post entity."""

    post_id: UUID
    author_id: UUID
    caption: str
    comments_count: int
    created_at: datetime

    @classmethod
    def from_row(cls, row: Any) -> "Post":
        """Create Post from Cassandra row."""
        return cls(
            post_id=row.post_id,
            author_id=row.author_id,
            caption=row.caption or "",
            comments_count=row.comments_count or 0,
            created_at=row.created_at,
        )


def create_post(author_id: UUID, caption: str) -> Post:
    """Create a new post with an empty comment counter."""
    return Post(
        post_id=uuid4(),
        author_id=author_id,
        caption=caption,
        comments_count=0,
        created_at=datetime.now(UTC),
    )
