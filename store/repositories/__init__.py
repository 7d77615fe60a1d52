"""
Repository package for database operations.
Following Repository Pattern for clean separation of data access logic.
"""
from .base import BaseRepository
from .user import UserRepository
from .apartment import ApartmentRepository
from .tenant import TenantRepository
from .rent_payment import RentPaymentRepository
from .task import TaskRepository
from .notification import NotificationRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "ApartmentRepository",
    "TenantRepository",
    "RentPaymentRepository",
    "TaskRepository",
    "NotificationRepository",
]
