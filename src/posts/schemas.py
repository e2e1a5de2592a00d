"""Pydantic schemas for posts."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from .models import Post


class CreatePostRequest(BaseModel):
    """Request to create a post."""

    caption: str = Field(..., min_length=1, max_length=2200)

    @field_validator("caption")
    @classmethod
    def validate_caption(cls, v: str) -> str:
        """Strip whitespace and validate caption."""
        v = v.strip()
        if not v:
            msg = "Caption cannot be empty"
            raise ValueError(msg)
        return v


class PostResponse(BaseModel):
    """Response for a single post."""

    id: UUID
    author_id: UUID
    caption: str
    comments_count: int = 0
    created_at: datetime

    @classmethod
    def from_post(cls, post: Post) -> "PostResponse":
        """Create response from Post entity."""
        return cls(
            id=post.post_id,
            author_id=post.author_id,
            caption=post.caption,
            comments_count=post.comments_count,
            created_at=post.created_at,
        )
