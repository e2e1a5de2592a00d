"""Comment API endpoints.

Provides routes for:
- POST/GET /v1/posts/{post_id}/comments - create and list a post's comments
- GET /v1/comments/{comment_id} - single comment
- GET /v1/comments/{comment_id}/replies - direct replies
- DELETE /v1/comments/{comment_id} - author-only delete (cascades to replies)
"""

from uuid import UUID

from fastapi import APIRouter, Query, status

from src.auth.dependencies import CurrentUser
from src.config import get_settings
from src.core.exceptions import AppError, handle_app_error

from .dependencies import CommentServiceDep
from .schemas import (
    CommentListResponse,
    CommentResponse,
    CreateCommentRequest,
    DeleteCommentResponse,
)


post_comments_router = APIRouter(prefix="/v1/posts", tags=["comments"])
router = APIRouter(prefix="/v1/comments", tags=["comments"])


@post_comments_router.post(
    "/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create comment",
)
async def create_comment(
    post_id: UUID,
    data: CreateCommentRequest,
    comment_service: CommentServiceDep,
    user: CurrentUser,
) -> CommentResponse:
    """Comment on a post, or reply to one of its comments via parent_id.

    The post owner is notified in the background.
    """
    try:
        comment = await comment_service.create_comment(
            post_id=post_id,
            author_id=user.id,
            text=data.text,
            parent_id=data.parent_id,
        )
    except AppError as e:
        raise handle_app_error(e) from e
    return CommentResponse.from_comment(comment)


@post_comments_router.get(
    "/{post_id}/comments",
    response_model=CommentListResponse,
    summary="List comments",
)
async def list_comments(
    post_id: UUID,
    comment_service: CommentServiceDep,
    page: int = Query(
        default=1,
        ge=1,
        le=get_settings().comment_page_max_offset,
        description="Page number (1-based)",
    ),
    limit: int | None = Query(default=None, ge=1, description="Items per page"),
) -> CommentListResponse:
    """List a post's comments, oldest first."""
    if limit is None:
        limit = get_settings().comment_page_default_limit
    try:
        result = await comment_service.list_comments(post_id, page, limit)
    except AppError as e:
        raise handle_app_error(e) from e
    return CommentListResponse.from_page(result)


@router.get(
    "/{comment_id}",
    response_model=CommentResponse,
    summary="Get comment",
)
async def get_comment(
    comment_id: UUID,
    comment_service: CommentServiceDep,
) -> CommentResponse:
    """Get a single comment."""
    try:
        comment = await comment_service.get_comment(comment_id)
    except AppError as e:
        raise handle_app_error(e) from e
    return CommentResponse.from_comment(comment)


@router.get(
    "/{comment_id}/replies",
    response_model=list[CommentResponse],
    summary="Get replies",
)
async def get_replies(
    comment_id: UUID,
    comment_service: CommentServiceDep,
) -> list[CommentResponse]:
    """Get direct replies to a comment, oldest first."""
    try:
        replies = await comment_service.get_replies(comment_id)
    except AppError as e:
        raise handle_app_error(e) from e
    return [CommentResponse.from_comment(r) for r in replies]


@router.delete(
    "/{comment_id}",
    response_model=DeleteCommentResponse,
    summary="Delete comment",
)
async def delete_comment(
    comment_id: UUID,
    comment_service: CommentServiceDep,
    user: CurrentUser,
) -> DeleteCommentResponse:
    """Delete own comment together with its replies."""
    try:
        result = await comment_service.delete_comment(comment_id, user.id)
    except AppError as e:
        raise handle_app_error(e) from e
    return DeleteCommentResponse(**result)
