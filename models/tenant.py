from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, Enum, Date, Text
from sqlalchemy.orm import relationship
from database.postgres import Base
from models.audit import AuditMixin
from store.enums import TenantStatus


class Tenant(AuditMixin, Base):
    """A tenant and the lease they hold on one apartment."""
    __tablename__ = "tenants"

    id = Column(Integer, primary_key=True)
    apartment_id = Column(Integer, ForeignKey("apartments.id", ondelete="SET NULL"), nullable=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)  # portal login
    name = Column(String(150), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    move_in_date = Column(Date, nullable=True)
    lease_start_date = Column(Date, nullable=True)
    lease_end_date = Column(Date, nullable=True, index=True)
    monthly_rent = Column(Numeric(10, 2), nullable=False, default=0)
    deposit_amount = Column(Numeric(10, 2), nullable=True)
    status = Column(
        Enum(TenantStatus, values_callable=lambda obj: [e.value for e in obj], name="tenantstatus"),
        nullable=False,
        default=TenantStatus.ACTIVE,
    )
    notes = Column(Text, nullable=True)

    apartment = relationship("Apartment", back_populates="tenants")
    owner = relationship("User", foreign_keys=[owner_id], back_populates="tenants")
    user = relationship("User", foreign_keys=[user_id])
    rent_payments = relationship("RentPayment", back_populates="tenant", cascade="all, delete")
    tasks = relationship("Task", back_populates="tenant")
