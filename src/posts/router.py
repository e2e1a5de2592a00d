"""Post API endpoints.

Only what commenting needs: create a post and read it back with its
comments_count. Comment routes nested under a post live in
src.comments.router.
"""

from uuid import UUID

from fastapi import APIRouter, status

from src.auth.dependencies import CurrentUser
from src.core.exceptions import AppError, handle_app_error

from .dependencies import PostServiceDep
from .schemas import CreatePostRequest, PostResponse


router = APIRouter(prefix="/v1/posts", tags=["posts"])


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create post",
)
async def create_post(
    data: CreatePostRequest,
    post_service: PostServiceDep,
    user: CurrentUser,
) -> PostResponse:
    """Create a post owned by the authenticated user."""
    post = await post_service.create_post(author_id=user.id, caption=data.caption)
    return PostResponse.from_post(post)


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    summary="Get post",
)
async def get_post(
    post_id: UUID,
    post_service: PostServiceDep,
) -> PostResponse:
    """Get a post with its current comments_count."""
    try:
        post = await post_service.get_post(post_id)
    except AppError as e:
        raise handle_app_error(e) from e
    return PostResponse.from_post(post)
