"""Shared fixtures: in-memory collaborators for the comment service and
a TestClient wired to them.
"""

import os
from unittest.mock import AsyncMock, Mock
from uuid import UUID, uuid4

import pytest


os.environ.setdefault("ENVIRONMENT", "testing")

from fastapi.testclient import TestClient  # noqa: E402

from src.auth.security import create_access_token  # noqa: E402
from src.comments.service import CommentService  # noqa: E402
from src.notifications.service import NotificationService  # noqa: E402
from src.posts.models import Post  # noqa: E402
from tests.fakes import FakeCommentStore, FakeNotifier, FakePosts  # noqa: E402


@pytest.fixture
def store() -> FakeCommentStore:
    """Empty in-memory comment store."""
    return FakeCommentStore()


@pytest.fixture
def posts() -> FakePosts:
    """Empty in-memory post backend."""
    return FakePosts()


@pytest.fixture
def notifier() -> FakeNotifier:
    """Recording notifier."""
    return FakeNotifier()


@pytest.fixture
def comment_service(
    store: FakeCommentStore, posts: FakePosts, notifier: FakeNotifier
) -> CommentService:
    """CommentService wired to in-memory collaborators."""
    return CommentService(
        store=store,
        posts=posts,
        counter=posts,
        notifier=notifier,
        max_length=50,
        max_page_limit=100,
        notification_timeout=0.1,
    )


@pytest.fixture
def owner_id() -> UUID:
    """Post owner."""
    return uuid4()


@pytest.fixture
def post(posts: FakePosts, owner_id: UUID) -> Post:
    """A post with no comments."""
    return posts.add(owner_id)


@pytest.fixture
def notification_service() -> Mock:
    """NotificationService double for the notification routes."""
    service = Mock(spec=NotificationService)
    service.get_notifications = AsyncMock(return_value=[])
    service.get_unread_count = AsyncMock(return_value=0)
    service.mark_all_as_read = AsyncMock(return_value=0)
    return service


@pytest.fixture
def client(
    store: FakeCommentStore, posts: FakePosts, notification_service: Mock
) -> TestClient:
    """TestClient with services on app.state (lifespan not run)."""
    from src.main import create_app  # noqa: PLC0415

    app = create_app()
    app.state.post_service = posts
    app.state.notification_service = notification_service
    # Notifications are exercised at the service level; TestClient loops
    # are torn down per request, so no background dispatch here.
    app.state.comment_service = CommentService(
        store=store, posts=posts, counter=posts, max_length=50
    )
    return TestClient(app)


@pytest.fixture
def auth_headers():
    """Build a Bearer header for a user."""

    def _headers(user_id: UUID) -> dict[str, str]:
        token = create_access_token({"sub": str(user_id)})
        return {"Authorization": f"Bearer {token}"}

    return _headers
