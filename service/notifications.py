"""
Notification service for creating in-app notifications and managing the inbox.
"""
from datetime import date, datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from models.notification import Notification
from models.task import Task
from store.enums import NotificationType, TaskStatus
from store.repositories import NotificationRepository
import logging

logger = logging.getLogger(__name__)


def notification_exists(
    notification_repo: NotificationRepository,
    *,
    user_id: int,
    notification_type: NotificationType,
    dedup_key: str,
    day: Optional[date] = None,
) -> bool:
    """
    Dedup gate: has this (owner, type, natural key[, day]) already been notified?
    """
    return notification_repo.exists_for_key(
        user_id=user_id,
        notification_type=notification_type,
        dedup_key=dedup_key,
        notify_date=day,
    )


def create_notification(
    notification_repo: NotificationRepository,
    *,
    user_id: int,
    notification_type: NotificationType,
    title: str,
    message: str,
    related_entity_id: Optional[int] = None,
    related_entity_type: Optional[str] = None,
    dedup_key: Optional[str] = None,
    notify_date: Optional[date] = None,
) -> Notification:
    """Stage a notification in the current transaction. The caller commits."""
    return notification_repo.create({
        "user_id": user_id,
        "notification_type": notification_type,
        "title": title,
        "message": message,
        "read_at": None,
        "related_entity_id": related_entity_id,
        "related_entity_type": related_entity_type,
        "dedup_key": dedup_key,
        "notify_date": notify_date,
        "created_at": datetime.now(timezone.utc),
    })


async def notify_user(
    user_id: int,
    notification_type: NotificationType,
    title: str,
    message: str,
    db: Session = None,
    notification_repo: NotificationRepository = None,
    related_entity_id: Optional[int] = None,
    related_entity_type: Optional[str] = None,
) -> bool:
    """
    Create and commit a notification for a single user.

    Returns True if successful, False otherwise.
    """
    session = None
    try:
        if notification_repo is None:
            if db is None:
                logger.error("Both db and notification_repo cannot be None")
                return False
            notification_repo = NotificationRepository(db)

        session = notification_repo.db

        create_notification(
            notification_repo,
            user_id=user_id,
            notification_type=notification_type,
            title=title,
            message=message,
            related_entity_id=related_entity_id,
            related_entity_type=related_entity_type,
        )
        session.commit()

        logger.info(f"Created notification '{title}' for user {user_id}")
        return True
    except Exception as e:
        logger.error(f"Error creating notification for user {user_id}: {str(e)}", exc_info=True)
        if session:
            try:
                session.rollback()
            except Exception as rollback_error:
                logger.error(f"Error rolling back notification session: {str(rollback_error)}")
        return False


def _task_recipient(task: Task) -> Optional[int]:
    if task.apartment is not None and task.apartment.owner_id:
        return task.apartment.owner_id
    return task.owner_id


async def notify_task_created(task: Task, db: Session) -> bool:
    """Tell the owner that a task was added to the board."""
    owner_id = _task_recipient(task)
    if not owner_id:
        return False

    apartment_name = task.apartment.name if task.apartment else "Apartment"
    message = f'A new task "{task.title}" was added to {apartment_name}.'
    if task.due_date:
        message += f" Due: {task.due_date.strftime('%b %d, %Y')}."

    return await notify_user(
        user_id=owner_id,
        notification_type=NotificationType.TASK_CREATED,
        title=f"New task: {task.title}",
        message=message,
        db=db,
        related_entity_id=task.id,
        related_entity_type="task",
    )


async def notify_task_updated(
    task: Task, db: Session, previous_status: Optional[TaskStatus] = None
) -> bool:
    """Tell the owner that a task changed, including the status move if known."""
    owner_id = _task_recipient(task)
    if not owner_id:
        return False

    message = f'Task "{task.title}" was updated.'
    if previous_status is not None:
        message += (
            f" Status changed from {TaskStatus(previous_status).label}"
            f" to {TaskStatus(task.status).label}."
        )

    return await notify_user(
        user_id=owner_id,
        notification_type=NotificationType.TASK_UPDATED,
        title=f"Task updated: {task.title}",
        message=message,
        db=db,
        related_entity_id=task.id,
        related_entity_type="task",
    )


async def list_notifications(
    notification_repo: NotificationRepository,
    *,
    user_id: int,
    unread_only: bool = False,
    notification_type: Optional[NotificationType] = None,
    limit: int = 20,
    offset: int = 0,
) -> Tuple[List[Notification], int]:
    return notification_repo.get_notifications_with_filters(
        user_id=user_id,
        unread_only=unread_only,
        notification_type=notification_type,
        limit=limit,
        offset=offset,
    )


async def mark_as_read(notification: Notification, db: Session) -> bool:
    """Returns False when the notification was already read."""
    if notification.read_at is not None:
        return False
    notification.read_at = datetime.now(timezone.utc)
    db.commit()
    return True


async def mark_as_unread(notification: Notification, db: Session) -> bool:
    """Returns False when the notification was already unread."""
    if notification.read_at is None:
        return False
    notification.read_at = None
    db.commit()
    return True


async def mark_all_as_read(notification_repo: NotificationRepository, user_id: int) -> int:
    updated = notification_repo.mark_all_read(user_id)
    notification_repo.db.commit()
    logger.info(f"Marked {updated} notification(s) as read for user {user_id}")
    return updated
