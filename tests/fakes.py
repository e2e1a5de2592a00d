"""In-memory collaborators for CommentService tests."""

import asyncio
from uuid import UUID

from src.comments.exceptions import CommentNotFoundError
from src.comments.models import Comment
from src.core.exceptions import PostNotFoundError
from src.posts.models import Post, create_post


class FakeCommentStore:
    """Dict-backed CommentStore keeping insertion order."""

    def __init__(self):
        self.comments: dict[UUID, Comment] = {}

    async def insert(self, comment: Comment) -> None:
        self.comments[comment.comment_id] = comment

    async def find_by_id(self, comment_id: UUID) -> Comment:
        try:
            return self.comments[comment_id]
        except KeyError:
            raise CommentNotFoundError from None

    def _by_post(self, post_id: UUID) -> list[Comment]:
        return sorted(
            (c for c in self.comments.values() if c.post_id == post_id),
            key=lambda c: c.created_at,
        )

    async def list_by_post(self, post_id: UUID, page: int, limit: int) -> list[Comment]:
        offset = (page - 1) * limit
        return self._by_post(post_id)[offset : offset + limit]

    async def count_by_post(self, post_id: UUID) -> int:
        return len(self._by_post(post_id))

    async def list_replies(self, parent_id: UUID) -> list[Comment]:
        return sorted(
            (c for c in self.comments.values() if c.parent_id == parent_id),
            key=lambda c: c.created_at,
        )

    async def delete_by_id(self, comment_id: UUID) -> None:
        if self.comments.pop(comment_id, None) is None:
            raise CommentNotFoundError


class FakePosts:
    """PostLookup + PostCounter over a dict of posts."""

    def __init__(self):
        self.posts: dict[UUID, Post] = {}

    def add(self, owner_id: UUID, comments_count: int = 0) -> Post:
        post = create_post(author_id=owner_id, caption="look")
        post.comments_count = comments_count
        self.posts[post.post_id] = post
        return post

    def count(self, post_id: UUID) -> int:
        return self.posts[post_id].comments_count

    async def create_post(self, author_id: UUID, caption: str) -> Post:
        post = create_post(author_id=author_id, caption=caption)
        self.posts[post.post_id] = post
        return post

    async def get_post(self, post_id: UUID) -> Post:
        if post_id not in self.posts:
            raise PostNotFoundError
        return self.posts[post_id]

    async def post_exists(self, post_id: UUID) -> bool:
        return post_id in self.posts

    async def get_post_owner(self, post_id: UUID) -> UUID:
        return (await self.get_post(post_id)).author_id

    async def adjust_comment_count(self, post_id: UUID, delta: int) -> None:
        post = await self.get_post(post_id)
        post.comments_count = max(0, post.comments_count + delta)


class FakeNotifier:
    """Records dispatches; can be told to fail or hang."""

    def __init__(self, fail: bool = False, delay: float = 0.0):
        self.fail = fail
        self.delay = delay
        self.calls: list[dict] = []

    async def notify_new_comment(
        self,
        post_owner_id: UUID,
        comment_id: UUID,
        post_id: UUID,
        actor_id: UUID,
    ) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            msg = "notification backend down"
            raise ConnectionError(msg)
        self.calls.append(
            {
                "post_owner_id": post_owner_id,
                "comment_id": comment_id,
                "post_id": post_id,
                "actor_id": actor_id,
            }
        )
