"""
Dependency injection utilities for FastAPI.
"""
from typing import Callable, Type, TypeVar
from sqlalchemy.orm import Session
from fastapi import Depends

from store.repositories.base import BaseRepository
from database.postgres import get_db

T = TypeVar("T", bound=BaseRepository)


def get_repository(repository_class: Type[T]) -> Callable[[Session], T]:
    """
    Generic dependency function that creates and returns repository instances.

    Usage:
        @router.get("/notifications")
        async def list_notifications(
            notification_repo: NotificationRepository = Depends(
                get_repository(NotificationRepository)
            )
        ):
            ...
    """
    def _get_repository(db: Session = Depends(get_db)) -> T:
        return repository_class(db)

    return _get_repository
