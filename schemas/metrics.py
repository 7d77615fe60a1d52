from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel


class TrendSeries(BaseModel):
    labels: List[str]
    data: List[float]


class OwnerMetricsResponse(BaseModel):
    # Apartment metrics
    total_apartments: int
    occupied_apartments: int
    available_apartments: int
    maintenance_apartments: int
    occupancy_rate: float

    # Tenant metrics
    active_tenants: int
    expiring_leases: int
    new_tenants_this_month: int

    # Revenue metrics
    monthly_revenue: float
    yearly_revenue: float

    # Payment metrics
    pending_amount: float
    overdue_amount: float
    paid_amount: float
    total_payments: int
    paid_payments: int
    pending_payments: int
    overdue_payments: int
    collection_rate: float

    # Task metrics
    tasks_by_status: Dict[str, int]
    overdue_tasks: int
    total_tasks: int
    completed_tasks: int
    task_completion_rate: float

    last_activity: Optional[datetime] = None


class OwnerSummary(BaseModel):
    id: int
    name: str
    email: str
    apartments_count: int
    occupied_apartments: int
    available_apartments: int
    tenants_count: int
    monthly_revenue: float
    occupancy_rate: float
    collection_rate: float
    last_activity: Optional[datetime] = None


class TenantMetricsResponse(BaseModel):
    # Payment metrics
    total_payments: float
    monthly_payments: float
    yearly_payments: float
    pending_amount: float
    overdue_amount: float
    paid_amount: float
    total_payment_records: int
    paid_payment_records: int
    pending_payment_records: int
    overdue_payment_records: int
    payment_compliance_rate: float

    # Task metrics
    tasks_by_status: Dict[str, int]
    overdue_tasks: int
    total_tasks: int
    completed_tasks: int
    task_completion_rate: float

    # Lease metrics
    lease_days_remaining: Optional[int] = None
    lease_status: str
    tenure_days: Optional[int] = None

    last_activity: Optional[datetime] = None
