"""Pydantic schemas for post comments.

Request/Response models for:
- Comment creation (top-level and replies)
- Paginated listing
- Deletion result
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from .models import Comment, CommentPage


# ==============================================================================
# Request Schemas
# ==============================================================================


class CreateCommentRequest(BaseModel):
    """Request to create a new comment.

    Length is bounded by the service (``comment_max_length`` setting).
    """

    text: str
    parent_id: UUID | None = None

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        """Strip whitespace and validate text."""
        v = v.strip()
        if not v:
            msg = "Text cannot be empty"
            raise ValueError(msg)
        return v


# ==============================================================================
# Response Schemas
# ==============================================================================


class CommentResponse(BaseModel):
    """Response for a single comment."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    post_id: UUID
    author_id: UUID
    parent_id: UUID | None = None
    text: str
    created_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentResponse":
        """Create response from Comment entity."""
        return cls(
            id=comment.comment_id,
            post_id=comment.post_id,
            author_id=comment.author_id,
            parent_id=comment.parent_id,
            text=comment.text,
            created_at=comment.created_at,
        )


class CommentListResponse(BaseModel):
    """Paginated list of comments."""

    items: list[CommentResponse]
    total: int
    page: int
    limit: int
    has_more: bool

    @classmethod
    def from_page(cls, page: CommentPage) -> "CommentListResponse":
        """Create response from a CommentPage."""
        return cls(
            items=[CommentResponse.from_comment(c) for c in page.items],
            total=page.total,
            page=page.page,
            limit=page.limit,
            has_more=page.has_more,
        )


class DeleteCommentResponse(BaseModel):
    """Result of a comment deletion."""

    deleted: bool = True
