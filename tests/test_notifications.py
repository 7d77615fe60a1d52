"""
Tests for the notification inbox and task event notifications.
"""
from datetime import date

from models.notification import Notification
from models.task import Task
from service.notifications import (
    create_notification,
    list_notifications,
    mark_all_as_read,
    mark_as_read,
    mark_as_unread,
    notify_task_created,
    notify_task_updated,
)
from store.enums import NotificationType, Role, TaskStatus
from store.repositories import NotificationRepository


def _seed(db, user, count, notification_type=NotificationType.TASK_CREATED):
    repo = NotificationRepository(db)
    for i in range(count):
        create_notification(
            repo,
            user_id=user.id,
            notification_type=notification_type,
            title=f"Notification {i}",
            message=f"Message {i}",
        )
    db.commit()
    return repo


async def test_list_notifications_filters_and_paginates(db, owner, factory):
    other = factory.user(role=Role.OWNER)
    repo = _seed(db, owner, 3)
    _seed(db, owner, 2, NotificationType.OVERDUE_PAYMENT)
    _seed(db, other, 4)

    items, total = await list_notifications(repo, user_id=owner.id, limit=2, offset=0)
    assert total == 5
    assert len(items) == 2
    assert all(n.user_id == owner.id for n in items)

    items, total = await list_notifications(
        repo, user_id=owner.id, notification_type=NotificationType.OVERDUE_PAYMENT
    )
    assert total == 2
    assert {n.notification_type for n in items} == {NotificationType.OVERDUE_PAYMENT}


async def test_mark_as_read_and_unread_are_noops_when_unchanged(db, owner):
    repo = _seed(db, owner, 1)
    notification = db.query(Notification).first()

    assert await mark_as_read(notification, db) is True
    assert notification.is_read
    assert await mark_as_read(notification, db) is False
    assert repo.get_unread_count(owner.id) == 0

    assert await mark_as_unread(notification, db) is True
    assert not notification.is_read
    assert await mark_as_unread(notification, db) is False
    assert repo.get_unread_count(owner.id) == 1


async def test_unread_only_and_mark_all(db, owner):
    repo = _seed(db, owner, 4)
    first = db.query(Notification).order_by(Notification.id).first()
    await mark_as_read(first, db)

    items, total = await list_notifications(repo, user_id=owner.id, unread_only=True)
    assert total == 3
    assert first.id not in [n.id for n in items]

    updated = await mark_all_as_read(repo, owner.id)
    assert updated == 3
    assert repo.get_unread_count(owner.id) == 0
    assert await mark_all_as_read(repo, owner.id) == 0


async def test_task_created_notifies_apartment_owner(db, factory, owner, apartment):
    task = factory.task(owner, apartment, title="Repaint hallway", due_date=date(2025, 2, 14))

    assert await notify_task_created(task, db) is True

    [notification] = db.query(Notification).all()
    assert notification.user_id == owner.id
    assert notification.notification_type == NotificationType.TASK_CREATED
    assert notification.title == "New task: Repaint hallway"
    assert notification.message == (
        'A new task "Repaint hallway" was added to Sunset Apartments. Due: Feb 14, 2025.'
    )
    assert notification.related_entity_id == task.id


async def test_task_without_apartment_falls_back_to_task_owner(db, factory, owner):
    task = factory.task(owner, None, title="Renew permit")

    assert await notify_task_created(task, db) is True

    [notification] = db.query(Notification).all()
    assert notification.user_id == owner.id
    assert notification.message == 'A new task "Renew permit" was added to Apartment.'


async def test_task_updated_mentions_status_change(db, factory, owner, apartment):
    task = factory.task(owner, apartment, title="Fix gate", status=TaskStatus.IN_PROGRESS)

    await notify_task_updated(task, db, previous_status=TaskStatus.TODO)

    [notification] = db.query(Notification).all()
    assert notification.notification_type == NotificationType.TASK_UPDATED
    assert notification.message == (
        'Task "Fix gate" was updated. Status changed from To Do to In Progress.'
    )


async def test_task_without_any_owner_is_not_notified(db):
    task = Task(title="Orphan task", status=TaskStatus.TODO)

    assert await notify_task_created(task, db) is False
    assert await notify_task_updated(task, db) is False
    assert db.query(Notification).count() == 0
