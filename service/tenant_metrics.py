"""
Tenant metrics: payment history, compliance and lease status.
"""
from datetime import date, datetime
from typing import List, Optional

from dateutil.relativedelta import relativedelta
from sqlalchemy.orm import Session

from models.tenant import Tenant
from schemas.metrics import TenantMetricsResponse, TrendSeries
from service.owner_metrics import latest, month_bounds, percentage, year_bounds
from store.enums import PaymentStatus, TaskStatus
from store.repositories import RentPaymentRepository, TaskRepository

EXPIRING_SOON_DAYS = 30


async def get_total_payments(db: Session, tenant: Tenant) -> float:
    amounts = RentPaymentRepository(db).amounts_by_status(tenant_id=tenant.id)
    return amounts[PaymentStatus.PAID.value]


async def get_monthly_payments(db: Session, tenant: Tenant, month: Optional[date] = None) -> float:
    start, end = month_bounds(month or date.today())
    return RentPaymentRepository(db).sum_paid_between(start, end, tenant_id=tenant.id)


async def get_yearly_payments(db: Session, tenant: Tenant, year: Optional[date] = None) -> float:
    start, end = year_bounds(year or date.today())
    return RentPaymentRepository(db).sum_paid_between(start, end, tenant_id=tenant.id)


async def get_payment_trend(
    db: Session, tenant: Tenant, months: int = 12, today: Optional[date] = None
) -> TrendSeries:
    today = today or date.today()
    labels: List[str] = []
    data: List[float] = []
    for offset in range(months - 1, -1, -1):
        month = today - relativedelta(months=offset)
        labels.append(month.strftime("%b %Y"))
        data.append(await get_monthly_payments(db, tenant, month))
    return TrendSeries(labels=labels, data=data)


async def get_payment_compliance_rate(db: Session, tenant: Tenant) -> float:
    counts = RentPaymentRepository(db).counts_by_status(tenant_id=tenant.id)
    return percentage(counts[PaymentStatus.PAID.value], counts["total"])


def lease_standing(tenant: Tenant, today: date) -> tuple[Optional[int], str]:
    """Signed days left on the lease and its status label."""
    if tenant.lease_end_date is None:
        return None, "active"
    remaining = (tenant.lease_end_date - today).days
    if remaining < 0:
        return remaining, "expired"
    if remaining <= EXPIRING_SOON_DAYS:
        return remaining, "expiring_soon"
    return remaining, "active"


async def get_last_activity(db: Session, tenant: Tenant) -> Optional[datetime]:
    return latest(
        tenant.updated_at,
        RentPaymentRepository(db).latest_update(tenant_id=tenant.id),
        TaskRepository(db).latest_update(tenant_id=tenant.id),
        tenant.apartment.updated_at if tenant.apartment else None,
    )


async def get_tenant_metrics(
    db: Session, tenant: Tenant, today: Optional[date] = None
) -> TenantMetricsResponse:
    today = today or date.today()
    payment_repo = RentPaymentRepository(db)
    task_repo = TaskRepository(db)

    counts = payment_repo.counts_by_status(tenant_id=tenant.id)
    amounts = payment_repo.amounts_by_status(tenant_id=tenant.id)

    tasks_by_status = task_repo.counts_by_status(tenant_id=tenant.id)
    total_tasks = sum(tasks_by_status.values())
    completed_tasks = tasks_by_status.get(TaskStatus.DONE.value, 0)

    days_remaining, lease_status = lease_standing(tenant, today)
    tenure_days = (today - tenant.move_in_date).days if tenant.move_in_date else None

    return TenantMetricsResponse(
        total_payments=amounts[PaymentStatus.PAID.value],
        monthly_payments=await get_monthly_payments(db, tenant, today),
        yearly_payments=await get_yearly_payments(db, tenant, today),
        pending_amount=amounts[PaymentStatus.PENDING.value],
        overdue_amount=amounts[PaymentStatus.OVERDUE.value],
        paid_amount=amounts[PaymentStatus.PAID.value],
        total_payment_records=counts["total"],
        paid_payment_records=counts[PaymentStatus.PAID.value],
        pending_payment_records=counts[PaymentStatus.PENDING.value],
        overdue_payment_records=counts[PaymentStatus.OVERDUE.value],
        payment_compliance_rate=percentage(counts[PaymentStatus.PAID.value], counts["total"]),
        tasks_by_status=tasks_by_status,
        overdue_tasks=task_repo.count_overdue(today, tenant_id=tenant.id),
        total_tasks=total_tasks,
        completed_tasks=completed_tasks,
        task_completion_rate=percentage(completed_tasks, total_tasks),
        lease_days_remaining=days_remaining,
        lease_status=lease_status,
        tenure_days=tenure_days,
        last_activity=await get_last_activity(db, tenant),
    )
