"""
Tenant repository: lease lookups used by the expiration sweep and metrics.
"""
from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from models.tenant import Tenant
from store.enums import TenantStatus
from store.repositories.base import BaseRepository


class TenantRepository(BaseRepository[Tenant]):
    """Repository for Tenant model"""

    def __init__(self, db: Session):
        super().__init__(Tenant, db)

    def get_active_leases_ending_on(self, end_date: date) -> List[Tenant]:
        """Active tenants whose lease ends exactly on ``end_date``."""
        return (
            self.db.query(Tenant)
            .options(joinedload(Tenant.apartment), joinedload(Tenant.owner))
            .filter(
                Tenant.status == TenantStatus.ACTIVE,
                Tenant.lease_end_date.isnot(None),
                Tenant.lease_end_date == end_date,
            )
            .order_by(Tenant.id)
            .all()
        )

    def count_active(self, owner_id: int) -> int:
        return self.count(owner_id=owner_id, status=TenantStatus.ACTIVE)

    def count_leases_ending_between(self, owner_id: int, start: date, end: date) -> int:
        return (
            self.db.query(Tenant)
            .filter(
                Tenant.owner_id == owner_id,
                Tenant.status == TenantStatus.ACTIVE,
                Tenant.lease_end_date.isnot(None),
                Tenant.lease_end_date >= start,
                Tenant.lease_end_date <= end,
            )
            .count()
        )

    def count_moved_in_since(self, owner_id: int, since: date) -> int:
        return (
            self.db.query(Tenant)
            .filter(Tenant.owner_id == owner_id, Tenant.move_in_date >= since)
            .count()
        )

    def count_active_by_owner(self, owner_ids: List[int]) -> dict:
        if not owner_ids:
            return {}
        rows = (
            self.db.query(Tenant.owner_id, func.count(Tenant.id))
            .filter(Tenant.owner_id.in_(owner_ids), Tenant.status == TenantStatus.ACTIVE)
            .group_by(Tenant.owner_id)
            .all()
        )
        return {owner_id: int(count) for owner_id, count in rows}

    def latest_update(self, owner_id: int) -> Optional[datetime]:
        return (
            self.db.query(func.max(func.coalesce(Tenant.updated_at, Tenant.created_at)))
            .filter(Tenant.owner_id == owner_id)
            .scalar()
        )
