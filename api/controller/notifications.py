"""
Notifications controller - inbox endpoints and the manual sweep trigger.
"""
from typing import Optional

from fastapi import Depends, HTTPException, Query
from sqlalchemy.orm import Session

from database.postgres import get_db
from schemas.notifications import NotificationMarkReadRequest, NotificationResponse, SweepRequest
from service.notification_sweep import run_all_checks
from service.notifications import (
    list_notifications,
    mark_all_as_read,
    mark_as_read,
    mark_as_unread,
)
from store.enums import NotificationType, Role
from store.repositories import NotificationRepository
from utils.auth import get_current_user, require_role
from utils.dependencies import get_repository
from utils.response import success_response
import logging

logger = logging.getLogger(__name__)


async def get_notifications_controller(
    unread_only: bool = Query(False, description="Show only unread notifications"),
    notification_type: Optional[NotificationType] = Query(None, description="Filter by type"),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    current_user: dict = Depends(get_current_user),
    notification_repo: NotificationRepository = Depends(get_repository(NotificationRepository)),
):
    """Get the current user's notifications, newest first."""
    notifications, total_count = await list_notifications(
        notification_repo,
        user_id=current_user["user_id"],
        unread_only=unread_only,
        notification_type=notification_type,
        limit=limit,
        offset=offset,
    )
    return success_response(
        status_code=200,
        message="Notifications retrieved successfully",
        data={
            "notifications": [NotificationResponse.model_validate(n) for n in notifications],
            "total_count": total_count,
            "unread_count": notification_repo.get_unread_count(current_user["user_id"]),
            "limit": limit,
            "offset": offset,
        },
    )


async def get_unread_count_controller(
    current_user: dict = Depends(get_current_user),
    notification_repo: NotificationRepository = Depends(get_repository(NotificationRepository)),
):
    return success_response(
        status_code=200,
        message="Unread count retrieved",
        data={"unread_count": notification_repo.get_unread_count(current_user["user_id"])},
    )


async def mark_notification_controller(
    notification_id: int,
    request: NotificationMarkReadRequest,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Mark a notification as read or unread."""
    notification_repo = NotificationRepository(db)
    notification = notification_repo.get_by_id_for_user(notification_id, current_user["user_id"])
    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")

    if request.is_read:
        changed = await mark_as_read(notification, db)
    else:
        changed = await mark_as_unread(notification, db)

    return success_response(
        status_code=200,
        message="Notification updated" if changed else "Notification unchanged",
        data=NotificationResponse.model_validate(notification),
    )


async def mark_all_read_controller(
    current_user: dict = Depends(get_current_user),
    notification_repo: NotificationRepository = Depends(get_repository(NotificationRepository)),
):
    updated = await mark_all_as_read(notification_repo, current_user["user_id"])
    return success_response(
        status_code=200,
        message="All notifications marked as read",
        data={"updated": updated},
    )


async def run_checks_controller(
    request: Optional[SweepRequest] = None,
    current_user: dict = Depends(require_role(Role.ADMIN)),
    db: Session = Depends(get_db),
):
    """Run the overdue payment and lease expiration sweep on demand."""
    run_date = request.run_date if request else None
    logger.info(f"Manual notification sweep requested by user {current_user['user_id']}")
    summary = await run_all_checks(db, run_date)
    return success_response(
        status_code=200,
        message="Notification checks completed",
        data=summary,
    )
