"""Pydantic schemas for authenticated principals."""

from uuid import UUID

from pydantic import BaseModel


class AuthenticatedUser(BaseModel):
    """User identity extracted from an access token."""

    id: UUID
    email: str | None = None
