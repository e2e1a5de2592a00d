"""Database models for notifications system.

Cassandra table definitions for:
- Notifications: per-user inbox, newest first
- Unread counts: COUNTER table for quick badge queries

Notification types:
- COMMENT: Someone commented on the user's post
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid4


NOTIFICATION_PREVIEW_MAX_LENGTH = 200


class NotificationType(str, Enum):
    """Types of notifications."""

    COMMENT = "comment"


# ==============================================================================
# CQL Table Definitions
# ==============================================================================

# Partitioned by user_id for efficient inbox queries
NOTIFICATION_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.notifications (
    user_id UUID,
    notification_id UUID,
    type TEXT,
    title TEXT,
    message TEXT,
    actor_id UUID,
    reference_id UUID,
    reference_type TEXT,
    post_id UUID,
    is_read BOOLEAN,
    read_at TIMESTAMP,
    created_at TIMESTAMP,
    PRIMARY KEY ((user_id), created_at, notification_id)
) WITH CLUSTERING ORDER BY (created_at DESC, notification_id ASC)
"""

UNREAD_COUNT_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.notification_unread_counts (
    user_id UUID PRIMARY KEY,
    count COUNTER
)
"""

NOTIFICATIONS_TABLES_CQL = [
    NOTIFICATION_TABLE_CQL,
    UNREAD_COUNT_TABLE_CQL,
]


# ==============================================================================
# Entity Classes
# ==============================================================================


@dataclass
class Notification:
    """Notification entity."""

    notification_id: UUID
    user_id: UUID
    type: NotificationType
    title: str
    message: str
    actor_id: UUID | None
    reference_id: UUID | None
    reference_type: str | None
    post_id: UUID | None
    is_read: bool
    read_at: datetime | None
    created_at: datetime

    @classmethod
    def from_row(cls, row: Any) -> "Notification":
        """Create Notification from Cassandra row."""
        return cls(
            notification_id=row.notification_id,
            user_id=row.user_id,
            type=NotificationType(row.type),
            title=row.title,
            message=row.message,
            actor_id=row.actor_id,
            reference_id=row.reference_id,
            reference_type=row.reference_type,
            post_id=row.post_id,
            is_read=row.is_read or False,
            read_at=row.read_at,
            created_at=row.created_at,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary (used for pub/sub)."""
        return {
            "id": str(self.notification_id),
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "actor_id": str(self.actor_id) if self.actor_id else None,
            "reference_id": str(self.reference_id) if self.reference_id else None,
            "reference_type": self.reference_type,
            "post_id": str(self.post_id) if self.post_id else None,
            "is_read": self.is_read,
            "created_at": self.created_at.isoformat(),
        }


# ==============================================================================
# Factory Functions
# ==============================================================================


def create_notification(
    user_id: UUID,
    notification_type: NotificationType,
    title: str,
    message: str,
    actor_id: UUID | None = None,
    reference_id: UUID | None = None,
    reference_type: str | None = None,
    post_id: UUID | None = None,
) -> Notification:
    """Create a new unread notification."""
    return Notification(
        notification_id=uuid4(),
        user_id=user_id,
        type=notification_type,
        title=title,
        message=message[:NOTIFICATION_PREVIEW_MAX_LENGTH],
        actor_id=actor_id,
        reference_id=reference_id,
        reference_type=reference_type,
        post_id=post_id,
        is_read=False,
        read_at=None,
        created_at=datetime.now(UTC),
    )


def create_comment_notification(
    post_owner_id: UUID,
    actor_id: UUID,
    comment_id: UUID,
    post_id: UUID,
) -> Notification:
    """Create a notification telling a post owner about a new comment."""
    return create_notification(
        user_id=post_owner_id,
        notification_type=NotificationType.COMMENT,
        title="New comment on your post",
        message="Someone commented on your post",
        actor_id=actor_id,
        reference_id=comment_id,
        reference_type="comment",
        post_id=post_id,
    )
