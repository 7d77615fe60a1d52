from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from store.enums import NotificationType


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    notification_type: NotificationType
    title: str
    message: str
    is_read: bool
    read_at: Optional[datetime] = None
    related_entity_id: Optional[int] = None
    related_entity_type: Optional[str] = None
    created_at: Optional[datetime] = None


class NotificationMarkReadRequest(BaseModel):
    is_read: bool = True


class SweepRequest(BaseModel):
    run_date: Optional[date] = None


class CheckResult(BaseModel):
    """Outcome of one detector pass."""
    notified: int = 0
    transitioned: int = 0
    skipped: int = 0


class SweepSummary(BaseModel):
    """Counts reported after one sweep; the first two are the logged summary."""
    overdue_payments: int = 0
    lease_expirations: int = 0
    payments_marked_overdue: int = 0
    skipped_records: int = 0
