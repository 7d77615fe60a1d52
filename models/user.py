from sqlalchemy import Column, Integer, String, Boolean, Enum
from sqlalchemy.orm import relationship
from database.postgres import Base
from models.audit import AuditMixin
from store.enums import Role


class User(AuditMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(Role, values_callable=lambda obj: [e.value for e in obj], name="role"),
        nullable=False,
        default=Role.OWNER,
    )
    is_active = Column(Boolean, default=True, nullable=False)

    apartments = relationship(
        "Apartment", foreign_keys="Apartment.owner_id", back_populates="owner"
    )
    tenants = relationship(
        "Tenant", foreign_keys="Tenant.owner_id", back_populates="owner"
    )
    notifications = relationship(
        "Notification",
        foreign_keys="Notification.user_id",
        back_populates="user",
        cascade="all, delete-orphan",
    )
