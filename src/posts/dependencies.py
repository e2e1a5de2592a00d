"""FastAPI dependencies for posts."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from .service import PostService


async def get_post_service(request: Request) -> PostService:
    """Get post service from app state."""
    service = getattr(request.app.state, "post_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Post service not available",
        )
    return service


PostServiceDep = Annotated[PostService, Depends(get_post_service)]
