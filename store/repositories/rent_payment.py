"""
Rent payment repository: overdue detection queries and payment aggregates.
"""
from datetime import date, datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import and_, case, func
from sqlalchemy.orm import Session, joinedload

from models.rent_payment import RentPayment
from models.tenant import Tenant
from models.apartment import Apartment
from store.enums import PaymentStatus
from store.repositories.base import BaseRepository


class RentPaymentRepository(BaseRepository[RentPayment]):
    """Repository for RentPayment model"""

    def __init__(self, db: Session):
        super().__init__(RentPayment, db)

    def get_unpaid_due_before(self, cutoff: date) -> List[RentPayment]:
        """
        Payments that are not paid and whose due date is strictly before ``cutoff``.

        Both pending and already-overdue rows are returned so a payment that
        stays overdue can be reported again on a later day.
        """
        return (
            self.db.query(RentPayment)
            .options(
                joinedload(RentPayment.tenant).joinedload(Tenant.owner),
                joinedload(RentPayment.apartment).joinedload(Apartment.owner),
            )
            .filter(
                RentPayment.status.in_([PaymentStatus.PENDING, PaymentStatus.OVERDUE]),
                RentPayment.due_date < cutoff,
            )
            .order_by(RentPayment.due_date, RentPayment.id)
            .all()
        )

    def mark_overdue(self, payment: RentPayment) -> bool:
        """Move a pending payment to overdue. Returns False if it was not pending."""
        if payment.status != PaymentStatus.PENDING:
            return False
        payment.status = PaymentStatus.OVERDUE
        payment.updated_at = datetime.now(timezone.utc)
        self.db.flush()
        return True

    def _owner_query(self, owner_id: int):
        return (
            self.db.query(RentPayment)
            .join(Tenant, RentPayment.tenant_id == Tenant.id)
            .filter(Tenant.owner_id == owner_id)
        )

    def _tenant_query(self, tenant_id: int):
        return self.db.query(RentPayment).filter(RentPayment.tenant_id == tenant_id)

    def _scope(self, owner_id: Optional[int], tenant_id: Optional[int]):
        if tenant_id is not None:
            return self._tenant_query(tenant_id)
        if owner_id is not None:
            return self._owner_query(owner_id)
        raise ValueError("Either owner_id or tenant_id is required")

    def sum_paid_between(
        self,
        start: date,
        end: date,
        *,
        owner_id: Optional[int] = None,
        tenant_id: Optional[int] = None,
    ) -> float:
        """Sum of paid amounts whose payment_date falls in [start, end]."""
        total = (
            self._scope(owner_id, tenant_id)
            .filter(
                RentPayment.status == PaymentStatus.PAID,
                RentPayment.payment_date.isnot(None),
                RentPayment.payment_date >= start,
                RentPayment.payment_date <= end,
            )
            .with_entities(func.coalesce(func.sum(RentPayment.amount), 0))
            .scalar()
        )
        return float(total or 0)

    def amounts_by_status(
        self, *, owner_id: Optional[int] = None, tenant_id: Optional[int] = None
    ) -> Dict[str, float]:
        rows = (
            self._scope(owner_id, tenant_id)
            .with_entities(RentPayment.status, func.coalesce(func.sum(RentPayment.amount), 0))
            .group_by(RentPayment.status)
            .all()
        )
        amounts = {status.value: 0.0 for status in PaymentStatus}
        for status, total in rows:
            amounts[PaymentStatus(status).value] = float(total or 0)
        return amounts

    def counts_by_status(
        self, *, owner_id: Optional[int] = None, tenant_id: Optional[int] = None
    ) -> Dict[str, int]:
        rows = (
            self._scope(owner_id, tenant_id)
            .with_entities(RentPayment.status, func.count(RentPayment.id))
            .group_by(RentPayment.status)
            .all()
        )
        counts = {status.value: 0 for status in PaymentStatus}
        for status, count in rows:
            counts[PaymentStatus(status).value] = int(count)
        counts["total"] = sum(counts.values())
        return counts

    def latest_update(
        self, *, owner_id: Optional[int] = None, tenant_id: Optional[int] = None
    ) -> Optional[datetime]:
        return (
            self._scope(owner_id, tenant_id)
            .with_entities(func.max(func.coalesce(RentPayment.updated_at, RentPayment.created_at)))
            .scalar()
        )

    def owner_collection_summary(
        self, owner_ids: List[int], month_start: date, month_end: date
    ) -> Dict[int, Dict[str, float]]:
        """Per-owner payment totals in one grouped query (admin owner list)."""
        if not owner_ids:
            return {}
        is_paid = RentPayment.status == PaymentStatus.PAID
        paid_this_month = and_(
            is_paid,
            RentPayment.payment_date >= month_start,
            RentPayment.payment_date <= month_end,
        )
        rows = (
            self.db.query(
                Tenant.owner_id,
                func.count(RentPayment.id),
                func.sum(case((is_paid, 1), else_=0)),
                func.sum(case((paid_this_month, RentPayment.amount), else_=0)),
            )
            .join(Tenant, RentPayment.tenant_id == Tenant.id)
            .filter(Tenant.owner_id.in_(owner_ids))
            .group_by(Tenant.owner_id)
            .all()
        )
        return {
            owner_id: {
                "total_payments": int(total or 0),
                "paid_payments": int(paid_count or 0),
                "monthly_revenue": float(revenue or 0),
            }
            for owner_id, total, paid_count, revenue in rows
        }
