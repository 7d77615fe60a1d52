"""
Task repository for task metrics.
"""
from datetime import date, datetime
from typing import Dict, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from models.task import Task
from store.enums import TaskStatus
from store.repositories.base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    """Repository for Task model"""

    def __init__(self, db: Session):
        super().__init__(Task, db)

    def _scope(self, owner_id: Optional[int], tenant_id: Optional[int]):
        query = self.db.query(Task)
        if tenant_id is not None:
            return query.filter(Task.tenant_id == tenant_id)
        if owner_id is not None:
            return query.filter(Task.owner_id == owner_id)
        raise ValueError("Either owner_id or tenant_id is required")

    def counts_by_status(
        self, *, owner_id: Optional[int] = None, tenant_id: Optional[int] = None
    ) -> Dict[str, int]:
        """Counts keyed by status value; statuses with no tasks are omitted."""
        rows = (
            self._scope(owner_id, tenant_id)
            .with_entities(Task.status, func.count(Task.id))
            .group_by(Task.status)
            .all()
        )
        return {TaskStatus(status).value: int(count) for status, count in rows}

    def count_overdue(
        self, today: date, *, owner_id: Optional[int] = None, tenant_id: Optional[int] = None
    ) -> int:
        return (
            self._scope(owner_id, tenant_id)
            .filter(
                Task.status.notin_([TaskStatus.DONE, TaskStatus.CANCELLED]),
                Task.due_date.isnot(None),
                Task.due_date < today,
            )
            .count()
        )

    def latest_update(
        self, *, owner_id: Optional[int] = None, tenant_id: Optional[int] = None
    ) -> Optional[datetime]:
        return (
            self._scope(owner_id, tenant_id)
            .with_entities(func.max(func.coalesce(Task.updated_at, Task.created_at)))
            .scalar()
        )
