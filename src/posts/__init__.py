"""Posts module.

Provides the post lookups and the comments_count counter the comment
system depends on.

Note: Router is not exported here to avoid circular imports.
Import directly from src.posts.router when needed.
"""

from src.core.exceptions import PostNotFoundError

from .models import POSTS_TABLES_CQL, Post
from .service import PostService


__all__ = [
    "POSTS_TABLES_CQL",
    "Post",
    "PostNotFoundError",
    "PostService",
]
