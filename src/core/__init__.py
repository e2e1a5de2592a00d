# Core infrastructure
from src.core.context import (
    RequestContext,
    clear_context,
    get_context,
    get_request_id,
    get_user_id,
    set_request_id,
    set_user_id,
)
from src.core.exceptions import (
    AppError,
    CounterConflictError,
    ForbiddenError,
    NotFoundError,
    PostNotFoundError,
    ValidationError,
)
from src.core.logging import configure_structlog, get_logger
from src.core.middleware import RequestContextMiddleware


__all__ = [
    "AppError",
    "CounterConflictError",
    "ForbiddenError",
    "NotFoundError",
    "PostNotFoundError",
    "RequestContext",
    "RequestContextMiddleware",
    "ValidationError",
    "clear_context",
    "configure_structlog",
    "get_context",
    "get_logger",
    "get_request_id",
    "get_user_id",
    "set_request_id",
    "set_user_id",
]
