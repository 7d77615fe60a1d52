"""
Centralized enumerations for the rental management system.
"""
from enum import Enum


# ============================================================================
# USER & ROLE ENUMS
# ============================================================================

class Role(str, Enum):
    """User role definitions"""
    ADMIN = "admin"
    OWNER = "owner"
    TENANT = "tenant"


# ============================================================================
# PROPERTY ENUMS
# ============================================================================

class ApartmentStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"


class TenantStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


# ============================================================================
# PAYMENT ENUMS
# ============================================================================

class PaymentStatus(str, Enum):
    """Rent payment lifecycle. PAID is terminal."""
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


# ============================================================================
# TASK ENUMS
# ============================================================================

class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    CANCELLED = "cancelled"

    @property
    def label(self) -> str:
        return {
            TaskStatus.TODO: "To Do",
            TaskStatus.IN_PROGRESS: "In Progress",
            TaskStatus.DONE: "Done",
            TaskStatus.CANCELLED: "Cancelled",
        }[self]


# ============================================================================
# NOTIFICATION ENUMS
# ============================================================================

class NotificationType(str, Enum):
    OVERDUE_PAYMENT = "overdue_payment"
    LEASE_EXPIRATION = "lease_expiration"
    TASK_CREATED = "task_created"
    TASK_UPDATED = "task_updated"
