"""Post comments module.

Provides:
- Threaded comments (parent/child) on posts
- Denormalized comments_count kept in step on create/delete
- Best-effort notification of the post owner

Note: Router is not exported here to avoid circular imports.
Import directly from src.comments.router when needed.
"""

from .exceptions import CommentNotFoundError, DispatchFailure
from .models import COMMENTS_TABLES_CQL, Comment, CommentPage
from .service import CommentService
from .store import CassandraCommentStore, iter_comment_pages


__all__ = [
    "COMMENTS_TABLES_CQL",
    "CassandraCommentStore",
    "Comment",
    "CommentNotFoundError",
    "CommentPage",
    "CommentService",
    "DispatchFailure",
    "iter_comment_pages",
]
