"""
Apartment repository for occupancy aggregates.
"""
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from models.apartment import Apartment
from store.enums import ApartmentStatus
from store.repositories.base import BaseRepository


class ApartmentRepository(BaseRepository[Apartment]):
    """Repository for Apartment model"""

    def __init__(self, db: Session):
        super().__init__(Apartment, db)

    def counts_by_status(self, owner_id: int) -> Dict[str, int]:
        rows = (
            self.db.query(Apartment.status, func.count(Apartment.id))
            .filter(Apartment.owner_id == owner_id)
            .group_by(Apartment.status)
            .all()
        )
        counts = {status.value: 0 for status in ApartmentStatus}
        for status, count in rows:
            counts[ApartmentStatus(status).value] = int(count)
        counts["total"] = sum(counts.values())
        return counts

    def counts_by_owner(self, owner_ids: List[int]) -> Dict[int, Dict[str, int]]:
        """Apartment counts per owner and status, for the admin owner list."""
        if not owner_ids:
            return {}
        rows = (
            self.db.query(Apartment.owner_id, Apartment.status, func.count(Apartment.id))
            .filter(Apartment.owner_id.in_(owner_ids))
            .group_by(Apartment.owner_id, Apartment.status)
            .all()
        )
        result: Dict[int, Dict[str, int]] = {}
        for owner_id, status, count in rows:
            bucket = result.setdefault(
                owner_id, {s.value: 0 for s in ApartmentStatus} | {"total": 0}
            )
            bucket[ApartmentStatus(status).value] = int(count)
            bucket["total"] += int(count)
        return result

    def latest_update(self, owner_id: int) -> Optional[datetime]:
        return (
            self.db.query(func.max(func.coalesce(Apartment.updated_at, Apartment.created_at)))
            .filter(Apartment.owner_id == owner_id)
            .scalar()
        )
