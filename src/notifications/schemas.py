"""Pydantic schemas for notifications."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.notifications.models import Notification, NotificationType


class NotificationResponse(BaseModel):
    """Single notification response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(description="Notification ID")
    type: NotificationType = Field(description="Notification type")
    title: str = Field(description="Notification title")
    message: str = Field(description="Notification message/preview")
    actor_id: UUID | None = Field(None, description="User who triggered it")
    reference_id: UUID | None = Field(None, description="Related comment ID")
    post_id: UUID | None = Field(None, description="Related post ID")
    is_read: bool = Field(description="Whether notification was read")
    created_at: datetime = Field(description="When notification was created")

    @classmethod
    def from_notification(cls, notification: Notification) -> "NotificationResponse":
        """Create response from notification entity."""
        return cls(
            id=notification.notification_id,
            type=notification.type,
            title=notification.title,
            message=notification.message,
            actor_id=notification.actor_id,
            reference_id=notification.reference_id,
            post_id=notification.post_id,
            is_read=notification.is_read,
            created_at=notification.created_at,
        )


class NotificationListResponse(BaseModel):
    """List of notifications with unread badge count."""

    items: list[NotificationResponse]
    unread_count: int = 0


class MarkReadResponse(BaseModel):
    """Response after marking notifications as read."""

    marked_count: int
    unread_count: int
