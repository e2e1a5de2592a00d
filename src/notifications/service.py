# ruff: noqa: S608 - All CQL queries use keyspace from config, not user input
"""Notification service layer.

Business logic for:
- Creating notifications for new comments on a post
- Listing a user's notifications
- Tracking and resetting unread counts
- Publishing to Redis for real-time consumers
"""

import contextlib
import json
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID

import structlog

from src.core.redis import notification_channel

from .models import Notification, create_comment_notification


if TYPE_CHECKING:
    from cassandra.cluster import Session
    from redis.asyncio import Redis


logger = structlog.get_logger(__name__)

# Cache TTL for unread counts (seconds)
UNREAD_CACHE_TTL = 300


class NotificationService:
    """Service for notification management."""

    def __init__(self, session: "Session", keyspace: str, redis: "Redis | None" = None):
        """Initialize with Cassandra session and optional Redis."""
        self.session = session
        self.keyspace = keyspace
        self.redis = redis
        self._prepare_statements()

    def _prepare_statements(self) -> None:
        """Prepare CQL statements for efficient queries."""
        self._insert_notification = self.session.prepare(f"""
            INSERT INTO {self.keyspace}.notifications
            (user_id, notification_id, type, title, message, actor_id,
             reference_id, reference_type, post_id, is_read, read_at, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """)

        self._get_notifications = self.session.prepare(f"""
            SELECT * FROM {self.keyspace}.notifications
            WHERE user_id = ?
            ORDER BY created_at DESC
            LIMIT ?
        """)

        self._mark_read = self.session.prepare(f"""
            UPDATE {self.keyspace}.notifications
            SET is_read = true, read_at = ?
            WHERE user_id = ? AND created_at = ? AND notification_id = ?
        """)

        self._incr_unread = self.session.prepare(f"""
            UPDATE {self.keyspace}.notification_unread_counts
            SET count = count + 1
            WHERE user_id = ?
        """)

        self._decr_unread = self.session.prepare(f"""
            UPDATE {self.keyspace}.notification_unread_counts
            SET count = count - ?
            WHERE user_id = ?
        """)

        self._get_unread_count = self.session.prepare(f"""
            SELECT count FROM {self.keyspace}.notification_unread_counts
            WHERE user_id = ?
        """)

    # ==========================================================================
    # Notification Creation
    # ==========================================================================

    async def create_notification(self, notification: Notification) -> Notification:
        """Persist a notification, bump the unread counter and publish it."""
        await self.session.aexecute(
            self._insert_notification,
            [
                notification.user_id,
                notification.notification_id,
                notification.type.value,
                notification.title,
                notification.message,
                notification.actor_id,
                notification.reference_id,
                notification.reference_type,
                notification.post_id,
                notification.is_read,
                notification.read_at,
                notification.created_at,
            ],
        )

        await self.session.aexecute(self._incr_unread, [notification.user_id])

        await self._invalidate_cache(notification.user_id)
        await self._publish_notification(notification)

        return notification

    async def _publish_notification(self, notification: Notification) -> None:
        """Publish notification to Redis Pub/Sub for real-time delivery."""
        if not self.redis:
            return

        message = {"type": "notification", "data": notification.to_dict()}

        # Non-critical: the notification is already stored
        with contextlib.suppress(Exception):
            await self.redis.publish(
                notification_channel(notification.user_id), json.dumps(message)
            )

    async def notify_new_comment(
        self,
        post_owner_id: UUID,
        comment_id: UUID,
        post_id: UUID,
        actor_id: UUID,
    ) -> Notification:
        """Tell a post owner that ``actor_id`` commented on their post."""
        notification = create_comment_notification(
            post_owner_id=post_owner_id,
            actor_id=actor_id,
            comment_id=comment_id,
            post_id=post_id,
        )
        created = await self.create_notification(notification)
        logger.info(
            "comment_notification_created",
            notification_id=str(created.notification_id),
            comment_id=str(comment_id),
            post_id=str(post_id),
        )
        return created

    # ==========================================================================
    # Notification Reading
    # ==========================================================================

    async def get_notifications(
        self,
        user_id: UUID,
        limit: int = 20,
        unread_only: bool = False,
    ) -> list[Notification]:
        """Get the newest notifications for a user."""
        rows = await self.session.aexecute(self._get_notifications, [user_id, limit])

        notifications = []
        for row in rows:
            if unread_only and row.is_read:
                continue
            notifications.append(Notification.from_row(row))
        return notifications

    async def get_unread_count(self, user_id: UUID) -> int:
        """Get unread notification count for user."""
        cache_key = f"notifications:unread:{user_id}"

        if self.redis:
            cached = await self.redis.get(cache_key)
            if cached:
                return int(cached)

        result = await self.session.aexecute(self._get_unread_count, [user_id])
        row = result.one()
        # Counter can drift below zero if reads race with mark-all
        count = max(0, row.count) if row and row.count else 0

        if self.redis:
            await self.redis.setex(cache_key, UNREAD_CACHE_TTL, str(count))

        return count

    # ==========================================================================
    # Mark as Read
    # ==========================================================================

    async def mark_all_as_read(self, user_id: UUID) -> int:
        """Mark all notifications as read for user.

        Returns count of notifications marked as read.
        """
        now = datetime.now(UTC)
        marked = 0

        rows = await self.session.aexecute(self._get_notifications, [user_id, 1000])

        for row in rows:
            if not row.is_read:
                await self.session.aexecute(
                    self._mark_read,
                    [now, user_id, row.created_at, row.notification_id],
                )
                marked += 1

        if marked > 0:
            await self.session.aexecute(self._decr_unread, [marked, user_id])
            await self._invalidate_cache(user_id)

        return marked

    # ==========================================================================
    # Cache Management
    # ==========================================================================

    async def _invalidate_cache(self, user_id: UUID) -> None:
        """Invalidate cached unread count for user."""
        if not self.redis:
            return

        await self.redis.delete(f"notifications:unread:{user_id}")
