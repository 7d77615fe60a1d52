"""
Task board writes. Every create and update notifies the owner.
"""
from datetime import date
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from models.task import Task
from service.notifications import notify_task_created, notify_task_updated
from store.enums import TaskStatus
from store.repositories import TaskRepository
import logging

logger = logging.getLogger(__name__)


async def create_task(
    db: Session,
    *,
    owner_id: int,
    title: str,
    apartment_id: Optional[int] = None,
    tenant_id: Optional[int] = None,
    description: Optional[str] = None,
    status: TaskStatus = TaskStatus.TODO,
    due_date: Optional[date] = None,
    task_repo: TaskRepository = None,
) -> Task:
    task_repo = task_repo or TaskRepository(db)
    task = task_repo.create({
        "owner_id": owner_id,
        "apartment_id": apartment_id,
        "tenant_id": tenant_id,
        "title": title,
        "description": description,
        "status": status,
        "due_date": due_date,
        "created_by": owner_id,
    })
    db.commit()
    logger.info(f"Created task {task.id} for owner {owner_id}")

    await notify_task_created(task, db)
    return task


async def update_task(
    db: Session,
    task_id: int,
    changes: Dict[str, Any],
    *,
    updated_by: Optional[int] = None,
    task_repo: TaskRepository = None,
) -> Optional[Task]:
    """Apply ``changes`` to a task; the notice names the status move when there is one."""
    task_repo = task_repo or TaskRepository(db)
    task = task_repo.get_by_id(task_id)
    if task is None:
        return None

    previous_status = TaskStatus(task.status)
    task_repo.update(task_id, {**changes, "updated_by": updated_by})
    db.commit()
    logger.info(f"Updated task {task_id}: {sorted(changes)}")

    status_moved = TaskStatus(task.status) != previous_status
    await notify_task_updated(task, db, previous_status if status_moved else None)
    return task
