"""
User repository for user-related database operations.
"""
from typing import Optional, List

from sqlalchemy.orm import Session

from models.user import User
from store.repositories.base import BaseRepository
from store.enums import Role


class UserRepository(BaseRepository[User]):
    """Repository for User model"""

    def __init__(self, db: Session):
        super().__init__(User, db)

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        return self.find_one_by(email=email.strip().lower())

    def get_by_role(self, role: Role, skip: int = 0, limit: int = 100) -> List[User]:
        """Get all users by role"""
        return (
            self.db.query(User)
            .filter(User.role == role)
            .order_by(User.id)
            .offset(skip)
            .limit(limit)
            .all()
        )
