"""
Owner dashboard metrics: revenue, occupancy, collection and task aggregates.
"""
import calendar
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from dateutil.relativedelta import relativedelta
from sqlalchemy.orm import Session

from models.user import User
from schemas.metrics import OwnerMetricsResponse, OwnerSummary, TrendSeries
from store.enums import ApartmentStatus, PaymentStatus, TaskStatus
from store.repositories import (
    ApartmentRepository,
    RentPaymentRepository,
    TaskRepository,
    TenantRepository,
)


def percentage(part: int, whole: int) -> float:
    """Share of ``whole`` as a percentage rounded to one decimal; 0.0 when empty."""
    if not whole:
        return 0.0
    return round(part / whole * 100, 1)


def month_bounds(day: date) -> tuple[date, date]:
    start = day.replace(day=1)
    end = day.replace(day=calendar.monthrange(day.year, day.month)[1])
    return start, end


def year_bounds(day: date) -> tuple[date, date]:
    return date(day.year, 1, 1), date(day.year, 12, 31)


def latest(*timestamps: Optional[datetime]) -> Optional[datetime]:
    """Most recent of the given timestamps, ignoring missing ones."""
    values = [ts.replace(tzinfo=None) if ts.tzinfo else ts for ts in timestamps if ts]
    return max(values) if values else None


async def get_monthly_revenue(db: Session, owner_id: int, month: Optional[date] = None) -> float:
    start, end = month_bounds(month or date.today())
    return RentPaymentRepository(db).sum_paid_between(start, end, owner_id=owner_id)


async def get_yearly_revenue(db: Session, owner_id: int, year: Optional[date] = None) -> float:
    start, end = year_bounds(year or date.today())
    return RentPaymentRepository(db).sum_paid_between(start, end, owner_id=owner_id)


async def get_revenue_trend(
    db: Session, owner_id: int, months: int = 12, today: Optional[date] = None
) -> TrendSeries:
    """Paid revenue per month for the last ``months`` months, oldest first."""
    today = today or date.today()
    labels: List[str] = []
    data: List[float] = []
    for offset in range(months - 1, -1, -1):
        month = today - relativedelta(months=offset)
        labels.append(month.strftime("%b %Y"))
        data.append(await get_monthly_revenue(db, owner_id, month))
    return TrendSeries(labels=labels, data=data)


async def get_occupancy_rate(db: Session, owner_id: int) -> float:
    counts = ApartmentRepository(db).counts_by_status(owner_id)
    return percentage(counts[ApartmentStatus.OCCUPIED.value], counts["total"])


async def get_collection_rate(db: Session, owner_id: int) -> float:
    counts = RentPaymentRepository(db).counts_by_status(owner_id=owner_id)
    return percentage(counts[PaymentStatus.PAID.value], counts["total"])


async def get_last_activity(db: Session, owner: User) -> Optional[datetime]:
    return latest(
        ApartmentRepository(db).latest_update(owner.id),
        TenantRepository(db).latest_update(owner.id),
        RentPaymentRepository(db).latest_update(owner_id=owner.id),
        TaskRepository(db).latest_update(owner_id=owner.id),
        owner.updated_at,
    )


async def get_owner_metrics(
    db: Session, owner: User, today: Optional[date] = None
) -> OwnerMetricsResponse:
    """Everything the owner dashboard shows, in one response."""
    today = today or date.today()
    payment_repo = RentPaymentRepository(db)
    tenant_repo = TenantRepository(db)
    task_repo = TaskRepository(db)

    apartments = ApartmentRepository(db).counts_by_status(owner.id)
    payment_counts = payment_repo.counts_by_status(owner_id=owner.id)
    payment_amounts = payment_repo.amounts_by_status(owner_id=owner.id)

    tasks_by_status = task_repo.counts_by_status(owner_id=owner.id)
    total_tasks = sum(tasks_by_status.values())
    completed_tasks = tasks_by_status.get(TaskStatus.DONE.value, 0)

    return OwnerMetricsResponse(
        total_apartments=apartments["total"],
        occupied_apartments=apartments[ApartmentStatus.OCCUPIED.value],
        available_apartments=apartments[ApartmentStatus.AVAILABLE.value],
        maintenance_apartments=apartments[ApartmentStatus.MAINTENANCE.value],
        occupancy_rate=percentage(apartments[ApartmentStatus.OCCUPIED.value], apartments["total"]),
        active_tenants=tenant_repo.count_active(owner.id),
        expiring_leases=tenant_repo.count_leases_ending_between(
            owner.id, today, today + timedelta(days=30)
        ),
        new_tenants_this_month=tenant_repo.count_moved_in_since(owner.id, today.replace(day=1)),
        monthly_revenue=await get_monthly_revenue(db, owner.id, today),
        yearly_revenue=await get_yearly_revenue(db, owner.id, today),
        pending_amount=payment_amounts[PaymentStatus.PENDING.value],
        overdue_amount=payment_amounts[PaymentStatus.OVERDUE.value],
        paid_amount=payment_amounts[PaymentStatus.PAID.value],
        total_payments=payment_counts["total"],
        paid_payments=payment_counts[PaymentStatus.PAID.value],
        pending_payments=payment_counts[PaymentStatus.PENDING.value],
        overdue_payments=payment_counts[PaymentStatus.OVERDUE.value],
        collection_rate=percentage(payment_counts[PaymentStatus.PAID.value], payment_counts["total"]),
        tasks_by_status=tasks_by_status,
        overdue_tasks=task_repo.count_overdue(today, owner_id=owner.id),
        total_tasks=total_tasks,
        completed_tasks=completed_tasks,
        task_completion_rate=percentage(completed_tasks, total_tasks),
        last_activity=await get_last_activity(db, owner),
    )


async def get_owners_metrics(
    db: Session, owners: List[User], today: Optional[date] = None
) -> List[OwnerSummary]:
    """Condensed metrics for a list of owners using grouped queries."""
    today = today or date.today()
    month_start, month_end = month_bounds(today)
    owner_ids = [owner.id for owner in owners]

    payments: Dict[int, Dict[str, float]] = RentPaymentRepository(db).owner_collection_summary(
        owner_ids, month_start, month_end
    )
    apartments = ApartmentRepository(db).counts_by_owner(owner_ids)
    tenants = TenantRepository(db).count_active_by_owner(owner_ids)

    summaries = []
    for owner in owners:
        apartment_counts = apartments.get(owner.id, {})
        payment_data = payments.get(owner.id, {})
        total_apartments = apartment_counts.get("total", 0)
        occupied = apartment_counts.get(ApartmentStatus.OCCUPIED.value, 0)
        summaries.append(
            OwnerSummary(
                id=owner.id,
                name=owner.name,
                email=owner.email,
                apartments_count=total_apartments,
                occupied_apartments=occupied,
                available_apartments=apartment_counts.get(ApartmentStatus.AVAILABLE.value, 0),
                tenants_count=tenants.get(owner.id, 0),
                monthly_revenue=payment_data.get("monthly_revenue", 0.0),
                occupancy_rate=percentage(occupied, total_apartments),
                collection_rate=percentage(
                    payment_data.get("paid_payments", 0), payment_data.get("total_payments", 0)
                ),
                last_activity=await get_last_activity(db, owner),
            )
        )
    return summaries
