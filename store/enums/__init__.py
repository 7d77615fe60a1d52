"""
Enums package for system-wide enumerations.
"""
from .enums import (
    Role,
    ApartmentStatus,
    TenantStatus,
    PaymentStatus,
    TaskStatus,
    NotificationType,
)

__all__ = [
    "Role",
    "ApartmentStatus",
    "TenantStatus",
    "PaymentStatus",
    "TaskStatus",
    "NotificationType",
]
