"""
Notification repository: inbox queries and the sweep's dedup lookups.
"""
from datetime import date, datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from models.notification import Notification
from store.enums import NotificationType
from store.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    """Repository for managing user notifications."""

    def __init__(self, db: Session):
        super().__init__(Notification, db)

    def exists_for_key(
        self,
        *,
        user_id: int,
        notification_type: NotificationType,
        dedup_key: str,
        notify_date: Optional[date] = None,
    ) -> bool:
        """
        True if a notification with this natural key was already emitted.

        With ``notify_date`` the lookup is limited to that sweep day,
        otherwise any earlier notification with the key counts.
        """
        query = self.db.query(Notification.id).filter(
            Notification.user_id == user_id,
            Notification.notification_type == notification_type,
            Notification.dedup_key == dedup_key,
        )
        if notify_date is not None:
            query = query.filter(Notification.notify_date == notify_date)
        return query.first() is not None

    def get_notifications_with_filters(
        self,
        *,
        user_id: int,
        unread_only: bool = False,
        notification_type: Optional[NotificationType] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[Notification], int]:
        """Retrieve notifications for a user with optional filtering."""
        query = self.db.query(Notification).filter(Notification.user_id == user_id)

        if unread_only:
            query = query.filter(Notification.read_at.is_(None))

        if notification_type:
            query = query.filter(Notification.notification_type == notification_type)

        total_count = query.count()
        notifications = (
            query.order_by(Notification.created_at.desc(), Notification.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return notifications, total_count

    def get_unread_count(self, user_id: int) -> int:
        """Get count of unread notifications for a user."""
        return (
            self.db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.read_at.is_(None))
            .count()
        )

    def get_by_id_for_user(self, notification_id: int, user_id: int) -> Optional[Notification]:
        """Get a notification by ID for a specific user."""
        return (
            self.db.query(Notification)
            .filter(Notification.id == notification_id, Notification.user_id == user_id)
            .first()
        )

    def mark_all_read(self, user_id: int) -> int:
        """Stamp read_at on every unread notification of a user."""
        now = datetime.now(timezone.utc)
        updated = (
            self.db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.read_at.is_(None))
            .update(
                {Notification.read_at: now, Notification.updated_at: now},
                synchronize_session="fetch",
            )
        )
        self.db.flush()
        return updated
