"""
Tests for task board writes and the notices they send.
"""
from datetime import date

from models.notification import Notification
from models.task import Task
from service.tasks import create_task, update_task
from store.enums import NotificationType, TaskStatus


async def test_create_task_persists_and_notifies_owner(db, owner, apartment):
    task = await create_task(
        db,
        owner_id=owner.id,
        apartment_id=apartment.id,
        title="Replace smoke detector",
        due_date=date(2025, 3, 1),
    )

    stored = db.query(Task).one()
    assert stored.id == task.id
    assert stored.status == TaskStatus.TODO
    assert stored.created_by == owner.id

    [notification] = db.query(Notification).all()
    assert notification.user_id == owner.id
    assert notification.notification_type == NotificationType.TASK_CREATED
    assert notification.related_entity_id == task.id
    assert notification.message == (
        'A new task "Replace smoke detector" was added to Sunset Apartments. Due: Mar 01, 2025.'
    )


async def test_update_task_status_notice_names_the_move(db, factory, owner, apartment):
    task = factory.task(owner, apartment, title="Fix gate")

    updated = await update_task(
        db, task.id, {"status": TaskStatus.IN_PROGRESS}, updated_by=owner.id
    )

    assert updated.status == TaskStatus.IN_PROGRESS
    assert updated.updated_by == owner.id
    [notification] = db.query(Notification).all()
    assert notification.notification_type == NotificationType.TASK_UPDATED
    assert notification.message == (
        'Task "Fix gate" was updated. Status changed from To Do to In Progress.'
    )


async def test_update_task_without_status_change(db, factory, owner, apartment):
    task = factory.task(owner, apartment, title="Fix gate")

    await update_task(db, task.id, {"description": "Hinge is loose"})

    [notification] = db.query(Notification).all()
    assert notification.message == 'Task "Fix gate" was updated.'
    assert db.get(Task, task.id).description == "Hinge is loose"


async def test_update_missing_task_returns_none(db):
    assert await update_task(db, 404, {"title": "Nothing"}) is None
    assert db.query(Notification).count() == 0
