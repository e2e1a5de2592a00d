"""Tests for core infrastructure: errors, request context, logging helpers."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from src.core.context import (
    RequestContext,
    clear_context,
    get_context,
    get_request_id,
    get_user_id,
    set_user_id,
)
from src.core.exceptions import (
    AppError,
    CounterConflictError,
    ForbiddenError,
    NotFoundError,
    PostNotFoundError,
    ValidationError,
    handle_app_error,
)
from src.core.logging import add_app_info_processor, filter_sensitive_data


class TestHandleAppError:
    """Tests for mapping domain errors to HTTP."""

    @pytest.mark.parametrize(
        ("error", "status_code"),
        [
            (ValidationError(), 400),
            (ForbiddenError(), 403),
            (NotFoundError(), 404),
            (PostNotFoundError(), 404),
            (CounterConflictError(), 409),
            (AppError("boom"), 500),
        ],
    )
    def test_status_mapping(self, error: AppError, status_code: int) -> None:
        """Each error code maps to its status."""
        exc = handle_app_error(error)
        assert exc.status_code == status_code
        assert exc.detail == error.message


class TestRequestContext:
    """Tests for RequestContext."""

    def test_sets_and_restores(self) -> None:
        """Values are visible inside and reset after."""
        before = get_request_id()

        with RequestContext(request_id="req-1", user_id="user-1"):
            context = get_context()
            assert context["request_id"] == "req-1"
            assert context["user_id"] == "user-1"

        assert get_request_id() == before

    def test_user_id_stringified_and_cleared(self) -> None:
        """UUID user ids are stored as strings until the context is cleared."""
        user_id = uuid4()

        set_user_id(user_id)
        assert get_user_id() == str(user_id)

        clear_context()
        assert get_user_id() is None
        assert get_request_id() == ""


class TestFilterSensitiveData:
    """Tests for log masking."""

    def test_masks_secrets(self) -> None:
        """Token-like keys are masked, others kept."""
        event = filter_sensitive_data(
            None,
            "info",
            {"event": "x", "access_token": "abcdefgh", "post_id": "p1"},
        )
        assert event["access_token"] == "ab****gh"
        assert event["post_id"] == "p1"

    def test_short_values_fully_masked(self) -> None:
        """Short secrets leak nothing."""
        event = filter_sensitive_data(None, "info", {"password": "abc"})
        assert event["password"] == "***"

    def test_app_info_stamped(self) -> None:
        """App name, version and environment are added to each event."""
        processor = add_app_info_processor("lookbook", "1.2.3", "testing")
        event = processor(None, "info", {"event": "x"})
        assert event["app"] == "lookbook"
        assert event["version"] == "1.2.3"
        assert event["environment"] == "testing"


class TestRequestIdHeader:
    """Tests for RequestContextMiddleware."""

    def test_request_id_echoed(self, client: TestClient) -> None:
        """Incoming X-Request-ID is returned on the response."""
        response = client.get("/health/live", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"

    def test_request_id_generated(self, client: TestClient) -> None:
        """A request ID is generated when none is sent."""
        response = client.get("/health/live")
        assert response.headers["X-Request-ID"]
